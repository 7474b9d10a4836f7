"""APScheduler wrapper exposing the tracker's periodic jobs."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from ..logging_conf import component_logger


class APSchedulerAdapter:
    """Manage interval jobs; each job is guarded so failures never kill the scheduler."""

    def __init__(self, scheduler: BackgroundScheduler | None = None) -> None:
        self.scheduler = scheduler or BackgroundScheduler(timezone="UTC")
        self.logger = component_logger("scheduler")
        self.started = False

    def start(self) -> None:
        if not self.started:
            self.scheduler.start()
            self.started = True
            self.logger.info("apscheduler_started")

    def shutdown(self) -> None:
        if self.started:
            self.scheduler.shutdown(wait=False)
            self.started = False
            self.logger.info("apscheduler_stopped")

    def schedule_interval(
        self,
        job_id: str,
        callback: Callable[[], object],
        *,
        seconds: float,
        run_immediately: bool = False,
    ) -> None:
        trigger = IntervalTrigger(seconds=seconds)
        options: dict[str, object] = {}
        if run_immediately:
            options["next_run_time"] = datetime.now(timezone.utc)
        self.scheduler.add_job(
            self.guard(job_id, callback),
            trigger=trigger,
            id=job_id,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
            **options,
        )
        self.logger.info("job_scheduled", job=job_id, interval_seconds=seconds)

    def guard(self, job_id: str, callback: Callable[[], object]) -> Callable[[], None]:
        def _run() -> None:
            try:
                callback()
            except Exception:  # noqa: BLE001
                self.logger.exception("job_failed", job=job_id)

        _run.__name__ = f"{job_id}_job"
        return _run

    def remove(self, job_id: str) -> None:
        try:
            self.scheduler.remove_job(job_id)
        except Exception:  # noqa: BLE001
            self.logger.warning("job_remove_failed", job=job_id)

    def list_jobs(self) -> list[dict]:
        jobs = []
        for job in self.scheduler.get_jobs():
            jobs.append(
                {
                    "id": job.id,
                    "next_run_time": getattr(job, "next_run_time", None),
                    "trigger": str(job.trigger),
                }
            )
        return jobs


__all__ = ["APSchedulerAdapter"]
