"""Configuration loading helpers for the headline tracker."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigError
from .models import AppConfig

CONFIG_FILENAME = "config.yaml"
HOME_ENV_VAR = "HEADLINE_TRACKER_HOME"

# environment variable -> PublisherConfig field
CREDENTIAL_ENV = {
    "CONSUMER_KEY": "consumer_key",
    "CONSUMER_SECRET": "consumer_secret",
    "ACCESS_TOKEN": "access_token",
    "ACCESS_TOKEN_SECRET": "access_token_secret",
    "TELEGRAM_BOT_TOKEN": "bot_token",
    "TELEGRAM_CHAT_ID": "chat_id",
}


def _read_file(path: Path) -> dict:
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text) or {}
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Cannot parse configuration file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file must contain a mapping: {path}")
    return data


def _write_file(path: Path, payload: dict) -> None:
    with path.open("w", encoding="utf-8") as stream:
        if path.suffix in (".yaml", ".yml"):
            yaml.safe_dump(payload, stream, allow_unicode=True, sort_keys=False)
        else:
            json.dump(payload, stream, indent=2, ensure_ascii=False)


@dataclass(slots=True)
class ConfigLocator:
    """Resolve the project home, config file and log directory."""

    project_root: Path | None = None
    config_path: Path | None = None
    logs_dir: Path | None = None

    def __post_init__(self) -> None:
        env_root = os.environ.get(HOME_ENV_VAR)
        if env_root:
            root = Path(env_root).expanduser().resolve()
        else:
            root = (self.project_root or Path.cwd()).resolve()
        self.project_root = root
        if self.config_path is None:
            self.config_path = root / CONFIG_FILENAME
        self.logs_dir = (root / "logs").resolve()

    def env_file(self) -> Path:
        return self.project_root / ".env"


class ConfigRepository:
    """Repository encapsulating config IO, environment overlay and validation."""

    def __init__(self, locator: ConfigLocator | None = None) -> None:
        self.locator = locator or ConfigLocator()
        self._cache: AppConfig | None = None

    def load(self) -> AppConfig:
        if self._cache is not None:
            return self._cache
        path = self.locator.config_path
        payload = _read_file(path) if path.exists() else {}
        try:
            config = AppConfig.model_validate(payload)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration in {path}:\n{exc}") from exc
        config = self.apply_environment(config)
        missing = config.publisher.missing_credentials()
        if missing:
            raise ConfigError(
                f"Publisher '{config.publisher.kind}' is missing credentials: {', '.join(missing)}"
            )
        self._cache = config
        return config

    def apply_environment(self, config: AppConfig) -> AppConfig:
        """Fill empty publisher secrets from the environment (and a .env file)."""

        env_file = self.locator.env_file()
        if env_file.exists():
            load_dotenv(env_file, override=False)
        updates: dict[str, str] = {}
        for env_name, field_name in CREDENTIAL_ENV.items():
            value = os.environ.get(env_name)
            if value and not getattr(config.publisher, field_name):
                updates[field_name] = value
        if not updates:
            return config
        publisher = config.publisher.model_copy(update=updates)
        return config.model_copy(update={"publisher": publisher})

    def save(self, config: AppConfig, *, include_secrets: bool = False) -> Path:
        path = self.locator.config_path
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = config.model_dump(mode="json")
        if not include_secrets:
            for field_name in CREDENTIAL_ENV.values():
                payload["publisher"][field_name] = ""
        _write_file(path, payload)
        return path

    def ensure_default(self) -> Path:
        """Write the default configuration unless a file already exists."""

        path = self.locator.config_path
        if not path.exists():
            self.save(AppConfig())
        return path


__all__ = ["CONFIG_FILENAME", "CREDENTIAL_ENV", "ConfigLocator", "ConfigRepository", "HOME_ENV_VAR"]
