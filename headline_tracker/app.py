"""Typer CLI entrypoint for the headline tracker."""

from __future__ import annotations

import signal
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from .config import AppConfig, ConfigLocator, ConfigRepository, PublisherConfig, TelemetryConfig
from .engine import HttpFeedSource, RecordStore, RetentionSweeper, ThreadPoolManager
from .errors import ConfigError
from .infra import LoggingObserver, Observer, SafeObserver, StatsdObserver
from .logging_conf import configure_logging
from .orchestrator import CycleReport, Heartbeat, PollCycleOrchestrator
from .publisher import BasePublisher, LogPublisher, TelegramPublisher, TwitterPublisher
from .scheduler import APSchedulerAdapter

app = typer.Typer(
    help="Watch news feeds and announce headline changes.",
    no_args_is_help=True,
    rich_markup_mode=None,
)

console = Console()


@dataclass
class AppState:
    config: AppConfig
    repository: ConfigRepository
    store: RecordStore
    feed_source: HttpFeedSource
    publisher: BasePublisher
    observer: Observer
    orchestrator: PollCycleOrchestrator
    sweeper: RetentionSweeper
    heartbeat: Heartbeat
    scheduler: APSchedulerAdapter
    thread_pool: ThreadPoolManager

    def close(self) -> None:
        self.scheduler.shutdown()
        self.thread_pool.shutdown()
        self.feed_source.close()
        self.publisher.close()


def build_publisher(config: PublisherConfig) -> BasePublisher:
    if config.kind == "twitter":
        return TwitterPublisher(
            consumer_key=config.consumer_key,
            consumer_secret=config.consumer_secret,
            access_token=config.access_token,
            access_token_secret=config.access_token_secret,
            max_length=config.max_length,
        )
    if config.kind == "telegram":
        return TelegramPublisher(bot_token=config.bot_token, chat_id=config.chat_id)
    return LogPublisher(max_length=config.max_length)


def build_observer(config: TelemetryConfig) -> Observer:
    if config.kind == "statsd":
        inner: Observer = StatsdObserver(config.host, config.port, namespace=config.namespace)
    else:
        inner = LoggingObserver()
    return SafeObserver(inner)


def build_state(verbose: bool, config_path: Path | None = None) -> AppState:
    locator = ConfigLocator(config_path=config_path)
    configure_logging(verbose=verbose, log_dir=locator.logs_dir)
    repository = ConfigRepository(locator)
    config = repository.load()

    store = RecordStore()
    observer = build_observer(config.telemetry)
    publisher = build_publisher(config.publisher)
    feed_source = HttpFeedSource(
        timeout=config.fetch.timeout_seconds, user_agent=config.fetch.user_agent
    )
    thread_pool = ThreadPoolManager(workers=config.fetch.workers)
    orchestrator = PollCycleOrchestrator(
        store=store,
        feed_source=feed_source,
        publisher=publisher,
        observer=observer,
        feeds=[url for _, url in config.feed_urls()],
        boilerplate_tokens=config.boilerplate_tokens,
        thread_pool=thread_pool,
    )
    sweeper = RetentionSweeper(store, observer, threshold=config.retention)
    heartbeat = Heartbeat.for_feed_names(
        store, observer, [feed.name for feed in config.feeds], config.boilerplate_tokens
    )
    return AppState(
        config=config,
        repository=repository,
        store=store,
        feed_source=feed_source,
        publisher=publisher,
        observer=observer,
        orchestrator=orchestrator,
        sweeper=sweeper,
        heartbeat=heartbeat,
        scheduler=APSchedulerAdapter(),
        thread_pool=thread_pool,
    )


def _get_state(ctx: typer.Context) -> AppState:
    options = ctx.obj or {}
    try:
        return build_state(options.get("verbose", False), options.get("config"))
    except ConfigError as exc:
        console.print(f"Configuration error: {exc}", style="red")
        raise typer.Exit(code=2) from exc


def register_jobs(state: AppState) -> None:
    schedule = state.config.schedule
    state.scheduler.schedule_interval(
        "poll",
        state.orchestrator.run_cycle,
        seconds=schedule.poll_interval_seconds,
        run_immediately=schedule.poll_on_start,
    )
    state.scheduler.schedule_interval(
        "sweep", state.sweeper.sweep, seconds=schedule.sweep_interval_hours * 3600
    )
    state.scheduler.schedule_interval(
        "heartbeat", state.heartbeat.beat, seconds=schedule.heartbeat_interval_seconds
    )


def install_stop_signal(stop: threading.Event) -> None:
    """Let SIGTERM end the run loop the same way Ctrl+C does."""

    def _request_stop(signum, frame) -> None:
        stop.set()

    signal.signal(signal.SIGTERM, _request_stop)


def _render_report(report: CycleReport) -> Table:
    table = Table(title="Poll cycle", box=box.SIMPLE_HEAD)
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="green", justify="right")
    for key, value in report.as_dict().items():
        table.add_row(key.replace("_", " "), str(value))
    return table


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to the configuration file."
    ),
) -> None:
    ctx.obj = {"verbose": verbose, "config": config}


@app.command("run", help="Start polling, sweeping and heartbeats until interrupted.")
def run(ctx: typer.Context) -> None:
    state = _get_state(ctx)
    register_jobs(state)
    state.scheduler.start()
    console.print(
        f"Tracking {len(state.config.feeds)} feeds every "
        f"{state.config.schedule.poll_interval_seconds:g}s. Press Ctrl+C to stop.",
        style="green",
    )
    stop = threading.Event()
    install_stop_signal(stop)
    try:
        while not stop.wait(1.0):
            pass
    except KeyboardInterrupt:
        console.print("Stopping…", style="yellow")
    finally:
        state.close()


@app.command("poll", help="Run a single poll cycle and print its tallies.")
def poll(
    ctx: typer.Context,
    cycles: int = typer.Option(1, "--cycles", min=1, help="Number of consecutive cycles."),
) -> None:
    state = _get_state(ctx)
    try:
        for _ in range(cycles):
            report = state.orchestrator.run_cycle()
            console.print(_render_report(report))
    finally:
        state.close()


@app.command("feeds", help="List the configured feeds.")
def feeds(ctx: typer.Context) -> None:
    state = _get_state(ctx)
    table = Table(title=f"Feeds · {len(state.config.feeds)}", box=box.SIMPLE_HEAD)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Address", style="magenta", overflow="fold")
    for index, (feed, url) in enumerate(state.config.feed_urls(), start=1):
        table.add_row(str(index), feed.name, url)
    console.print(table)
    state.close()


@app.command("init-config", help="Write the default configuration file if none exists.")
def init_config(ctx: typer.Context) -> None:
    options = ctx.obj or {}
    repository = ConfigRepository(ConfigLocator(config_path=options.get("config")))
    path = repository.locator.config_path
    if path.exists():
        console.print(f"Configuration already present at {path}", style="yellow")
        raise typer.Exit(code=0)
    repository.ensure_default()
    console.print(f"Wrote default configuration to {path}", style="green")


def cli() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    cli()
