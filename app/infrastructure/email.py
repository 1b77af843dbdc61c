"""Utility helpers for sending notification emails via SendGrid."""

from __future__ import annotations

import json
import logging
from html import escape
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from app.config import get_settings
from app.domain.entities import Notification

logger = logging.getLogger(__name__)

_SUBJECTS = {
    "birthday_reminder": "Upcoming employee birthday",
    "birthday": "Employee birthday today",
    "salary_increase_reminder": "Upcoming salary increase",
    "salary_increased": "Salary increased",
    "salary_threshold_reached": "Salary threshold reached",
}


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, "", b""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body.strip() or None
    else:
        parsed = body

    if not isinstance(parsed, dict):
        return str(parsed)

    messages = [
        f"{item['message']} (help: {item['help']})" if item.get("help") else str(item["message"])
        for item in parsed.get("errors") or []
        if isinstance(item, dict) and item.get("message")
    ]
    if messages:
        return "; ".join(messages)
    return json.dumps(parsed, default=str)


def _log_sendgrid_failure(status_code: Any, body: Any) -> None:
    details = _extract_sendgrid_error_details(body)
    if status_code and details:
        logger.error("SendGrid API request failed with status %s: %s", status_code, details)
    elif status_code:
        logger.error("SendGrid API request failed with status %s", status_code)
    elif details:
        logger.error("SendGrid API request failed: %s", details)
    else:
        logger.error("SendGrid API request failed without details")


def send_email(subject: str, html_content: str, recipient: str) -> bool:
    """Send an email using the configured SendGrid credentials.

    Delivery problems are logged and reported through the return value; they
    never raise.
    """

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; skipping email delivery")
        return False

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(message)
    except Exception as exc:
        status_code = getattr(exc, "status_code", None)
        body = getattr(exc, "body", None)
        if status_code is None and body is None:
            logger.exception("Error sending email via SendGrid: %s", exc)
        else:
            _log_sendgrid_failure(status_code, body)
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        _log_sendgrid_failure(status_code, getattr(response, "body", None))
        return False

    return True


def send_admin_notification_email(email: str, notification: Notification) -> bool:
    """Email an administrator a copy of ``notification``."""

    subject = _SUBJECTS.get(notification.type.value, "Employee notification")
    html_content = "".join(
        (
            "<p>Hello,</p>",
            f"<p>{escape(notification.message)}</p>",
            f"<p><strong>Date:</strong> {notification.event_date.isoformat()}</p>",
            "<p>This is an automated message from the employee management system.</p>",
        )
    )
    return send_email(subject, html_content, email)


__all__ = ["send_email", "send_admin_notification_email"]
