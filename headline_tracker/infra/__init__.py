"""Infra layer utilities (telemetry sinks)."""

from .telemetry import CheckStatus, LoggingObserver, Observer, SafeObserver, StatsdObserver

__all__ = ["CheckStatus", "LoggingObserver", "Observer", "SafeObserver", "StatsdObserver"]
