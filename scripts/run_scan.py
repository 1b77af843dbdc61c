"""Run one employee scan pass from the command line."""

from __future__ import annotations

import argparse
import logging
from datetime import date

from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.notifications import run_scan_pass
from app.config import get_settings
from app.infrastructure.database import SessionLocal, initialize_database
from app.interfaces.scheduler import salary_policy_from_settings
from app.utils import today_in_app_timezone


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the scan."""

    parser = argparse.ArgumentParser(
        description="Scan employees for birthday and salary notifications.",
    )
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Day to evaluate as today, in YYYY-MM-DD format (default: today)",
    )
    return parser.parse_args()


def main() -> None:
    """Run a single scan pass and print its summary."""

    args = parse_args()
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    initialize_database()

    session = SessionLocal()
    try:
        summary = run_scan_pass(
            session,
            today=args.date or today_in_app_timezone(),
            policy=salary_policy_from_settings(settings),
            birthday_reminder_days=settings.reminder_lead_days,
            notify_by_email=settings.email_notifications_enabled,
        )
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not load employees from the database: {exc}") from exc
    finally:
        session.close()

    print(
        f"Scan for {summary.today.isoformat()} finished:\n"
        f"  Employees scanned: {summary.employees_scanned}\n"
        f"  Salaries increased: {summary.salaries_increased}\n"
        f"  Notifications created: {summary.notifications_created}\n"
        f"  Failed employees: {len(summary.failed_employee_ids)}"
    )
    if summary.failed_employee_ids:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
