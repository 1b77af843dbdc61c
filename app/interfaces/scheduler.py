"""Background task running the employee scan once a day."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import date, datetime, time, timedelta, timezone

from anyio import to_thread
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import ScanSummary, run_scan_pass
from app.config import Settings, get_settings
from app.domain.rules import SalaryPolicy
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def next_run_at(now: datetime, hour: int, minute: int) -> datetime:
    """Return the first ``hour:minute`` wall-clock time strictly after ``now``."""

    target = datetime.combine(now.date(), time(hour, minute), tzinfo=now.tzinfo)
    if target <= now:
        target = datetime.combine(
            now.date() + timedelta(days=1), time(hour, minute), tzinfo=now.tzinfo
        )
    return target


def seconds_until_next_run(now: datetime, hour: int, minute: int) -> float:
    """Return the delay from ``now`` to the next ``hour:minute`` wall-clock time.

    When ``now`` is exactly the scheduled time the run after it (next day)
    is returned, so a pass that finishes instantly is not repeated. The
    difference is taken in UTC so daylight-saving transitions are counted.
    """

    target = next_run_at(now, hour, minute)
    return (target.astimezone(timezone.utc) - now.astimezone(timezone.utc)).total_seconds()


def salary_policy_from_settings(settings: Settings) -> SalaryPolicy:
    return SalaryPolicy(
        cap=settings.salary_cap,
        step=settings.salary_step,
        threshold=settings.salary_threshold,
        interval_months=settings.salary_increase_interval_months,
        reminder_days=settings.reminder_lead_days,
    )


class DailyScanScheduler:
    """Run :func:`run_scan_pass` every day at a fixed local time.

    Only one pass runs at a time: a pass requested while another is in
    progress waits for it to finish.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = now_in_app_timezone,
    ) -> None:
        self._session_factory = session_factory
        self._settings = settings or get_settings()
        self._clock = clock
        self._lock = asyncio.Lock()
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(
            self._run_forever(), name="daily-employee-scan"
        )
        logger.info(
            "Daily employee scan scheduled at %02d:%02d",
            self._settings.scan_hour,
            self._settings.scan_minute,
        )

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def run_once(self, today: date | None = None) -> ScanSummary:
        """Run a single pass, waiting for any pass already in progress."""

        async with self._lock:
            scan_day = today or self._clock().date()
            return await to_thread.run_sync(self._run_pass, scan_day)

    def _run_pass(self, today: date) -> ScanSummary:
        session = self._session_factory()
        try:
            return run_scan_pass(
                session,
                today=today,
                policy=salary_policy_from_settings(self._settings),
                birthday_reminder_days=self._settings.reminder_lead_days,
                notify_by_email=self._settings.email_notifications_enabled,
            )
        finally:
            session.close()

    async def _run_forever(self) -> None:
        while True:
            now = self._clock()
            hour, minute = self._settings.scan_hour, self._settings.scan_minute
            scan_day = next_run_at(now, hour, minute).date()
            await asyncio.sleep(seconds_until_next_run(now, hour, minute))
            try:
                await self.run_once(today=scan_day)
            except Exception:
                logger.exception("Daily employee scan failed")


__all__ = [
    "DailyScanScheduler",
    "next_run_at",
    "salary_policy_from_settings",
    "seconds_until_next_run",
]
