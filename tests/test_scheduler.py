"""Tests for the daily scan scheduler."""

from __future__ import annotations

import asyncio
import threading
import time
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from app.config import Settings
from app.interfaces import scheduler as scheduler_module
from app.interfaces.scheduler import (
    DailyScanScheduler,
    next_run_at,
    salary_policy_from_settings,
    seconds_until_next_run,
)


def _settings(**overrides) -> Settings:
    values = {"database_url": "sqlite://", "secret_key": "test-secret", **overrides}
    return Settings(**values)


class _FakeSession:
    closed = False

    def close(self) -> None:
        self.closed = True


@pytest.mark.parametrize(
    ("now", "expected"),
    [
        (datetime(2025, 3, 10, 23, 0, tzinfo=timezone.utc), 3600),
        (datetime(2025, 3, 10, 0, 0, tzinfo=timezone.utc), 86400),
        (datetime(2025, 3, 10, 0, 0, 30, tzinfo=timezone.utc), 86370),
    ],
)
def test_seconds_until_midnight(now, expected):
    assert seconds_until_next_run(now, 0, 0) == expected


def test_seconds_until_later_today():
    now = datetime(2025, 3, 10, 6, 15, tzinfo=timezone.utc)

    assert seconds_until_next_run(now, 9, 0) == 2 * 3600 + 45 * 60


BERLIN = ZoneInfo("Europe/Berlin")


@pytest.mark.parametrize(
    ("now", "expected"),
    [
        # clocks go back at 03:00, the day is 25 hours long
        (datetime(2025, 10, 26, 0, 0, 1, tzinfo=BERLIN), 25 * 3600 - 1),
        # clocks go forward at 02:00, the day is 23 hours long
        (datetime(2025, 3, 30, 0, 0, tzinfo=BERLIN), 23 * 3600),
    ],
)
def test_delay_spans_daylight_saving_changes(now, expected):
    delay = seconds_until_next_run(now, 0, 0)
    woke = (now.astimezone(timezone.utc) + timedelta(seconds=delay)).astimezone(BERLIN)

    assert delay == expected
    assert woke.date() == now.date() + timedelta(days=1)
    assert (woke.hour, woke.minute) == (0, 0)


def test_next_run_at_rolls_to_tomorrow_after_scan_time():
    now = datetime(2025, 3, 10, 9, 30, tzinfo=timezone.utc)

    assert next_run_at(now, 9, 0) == datetime(2025, 3, 11, 9, 0, tzinfo=timezone.utc)
    assert next_run_at(now, 10, 0) == datetime(2025, 3, 10, 10, 0, tzinfo=timezone.utc)


def test_policy_is_built_from_settings():
    policy = salary_policy_from_settings(
        _settings(salary_cap=2000, salary_step=100, salary_threshold=1800)
    )

    assert (policy.cap, policy.step, policy.threshold) == (2000, 100, 1800)
    assert policy.interval_months == 6


def test_threshold_above_cap_is_rejected():
    with pytest.raises(ValueError):
        _settings(salary_cap=1000, salary_threshold=1400)


def test_run_once_uses_clock_date_and_closes_session(monkeypatch):
    session = _FakeSession()
    calls = []

    def fake_run_scan_pass(db, *, today, **kwargs):
        calls.append((db, today, kwargs["notify_by_email"]))
        return scheduler_module.ScanSummary(today=today)

    monkeypatch.setattr(scheduler_module, "run_scan_pass", fake_run_scan_pass)
    scheduler = DailyScanScheduler(
        lambda: session,
        settings=_settings(),
        clock=lambda: datetime(2025, 3, 10, 0, 0, tzinfo=timezone.utc),
    )

    summary = asyncio.run(scheduler.run_once())

    assert summary.today == date(2025, 3, 10)
    assert calls == [(session, date(2025, 3, 10), False)]
    assert session.closed


def test_overlapping_passes_are_serialized(monkeypatch):
    active = 0
    peak = 0
    guard = threading.Lock()

    def slow_run_scan_pass(db, *, today, **kwargs):
        nonlocal active, peak
        with guard:
            active += 1
            peak = max(peak, active)
        time.sleep(0.05)
        with guard:
            active -= 1
        return scheduler_module.ScanSummary(today=today)

    monkeypatch.setattr(scheduler_module, "run_scan_pass", slow_run_scan_pass)
    scheduler = DailyScanScheduler(_FakeSession, settings=_settings())

    async def run_two():
        return await asyncio.gather(
            scheduler.run_once(date(2025, 3, 10)),
            scheduler.run_once(date(2025, 3, 10)),
        )

    summaries = asyncio.run(run_two())

    assert len(summaries) == 2
    assert peak == 1


def test_start_and_stop():
    scheduler = DailyScanScheduler(
        _FakeSession,
        settings=_settings(),
        clock=lambda: datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc),
    )

    async def lifecycle():
        scheduler.start()
        started = scheduler.running
        await scheduler.stop()
        return started

    assert asyncio.run(lifecycle()) is True
    assert scheduler.running is False


def test_loop_survives_a_failing_pass(monkeypatch):
    attempts = []

    def failing_run_scan_pass(db, *, today, **kwargs):
        attempts.append(today)
        raise RuntimeError("boom")

    monkeypatch.setattr(scheduler_module, "run_scan_pass", failing_run_scan_pass)
    monkeypatch.setattr(scheduler_module, "seconds_until_next_run", lambda *_args: 0)
    scheduler = DailyScanScheduler(
        _FakeSession,
        settings=_settings(),
        clock=lambda: datetime(2025, 3, 10, 0, 0, tzinfo=timezone.utc),
    )

    async def run_briefly():
        scheduler.start()
        while len(attempts) < 2:
            await asyncio.sleep(0.01)
        await scheduler.stop()

    asyncio.run(asyncio.wait_for(run_briefly(), timeout=5))

    assert len(attempts) >= 2


def test_loop_scans_the_scheduled_day_not_the_wake_day(monkeypatch):
    scanned = []

    def record_run_scan_pass(db, *, today, **kwargs):
        scanned.append(today)
        return scheduler_module.ScanSummary(today=today)

    monkeypatch.setattr(scheduler_module, "run_scan_pass", record_run_scan_pass)
    monkeypatch.setattr(scheduler_module, "seconds_until_next_run", lambda *_args: 0)
    scheduler = DailyScanScheduler(
        _FakeSession,
        settings=_settings(),
        clock=lambda: datetime(2025, 3, 10, 23, 0, tzinfo=timezone.utc),
    )

    async def run_briefly():
        scheduler.start()
        while not scanned:
            await asyncio.sleep(0.01)
        await scheduler.stop()

    asyncio.run(asyncio.wait_for(run_briefly(), timeout=5))

    assert scanned[0] == date(2025, 3, 11)


def test_zero_reminder_lead_time_is_rejected_by_settings():
    with pytest.raises(ValueError):
        _settings(reminder_lead_days=0)
