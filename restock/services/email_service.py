"""
Email service for order receipts.
Uses Flask-Mail for SMTP integration with UTF-8 support.
"""
import logging
from typing import Callable, Optional

from flask import Flask, current_app
from flask_mail import Mail, Message

logger = logging.getLogger(__name__)

mail = Mail()

Notifier = Callable[[str, str, str], bool]


def init_mail(app: Flask) -> None:
    """Initialize Flask-Mail with app and register the default receipt notifier."""
    mail.init_app(app)
    app.extensions['receipt_notifier'] = send_email


def get_notifier() -> Notifier:
    """Get the notifier used for receipts (send_email unless replaced)."""
    return current_app.extensions.get('receipt_notifier', send_email)


def _mail_enabled() -> bool:
    """
    Check if mail is properly configured and enabled.
    Prevents errors in dev or misconfigured environments.
    """
    cfg = current_app.config
    return bool(
        not cfg.get("MAIL_SUPPRESS_SEND", False)
        and cfg.get("MAIL_SERVER")
        and cfg.get("MAIL_USERNAME")
    )


def send_email(to: str, subject: str, html: str, text: Optional[str] = None) -> bool:
    """
    Send an HTML email.

    Args:
        to: Recipient email
        subject: Email subject
        html: HTML body
        text: Plain text body (optional)

    Returns:
        True if sent (or skipped because mail is disabled), False on failure
    """
    try:
        logger.info(f"[EMAIL] Attempting to send email to {to}")

        if not _mail_enabled():
            logger.warning(f"[MAIL DISABLED] Email skipped for {to}")
            return True

        msg = Message(
            subject=subject,
            recipients=[to],
            body=text or subject,
            html=html
        )

        logger.info(
            f"[EMAIL] Sending via Flask-Mail "
            f"(SMTP: {current_app.config.get('MAIL_SERVER')}:{current_app.config.get('MAIL_PORT')})..."
        )
        mail.send(msg)
        logger.info(f"[EMAIL] ✓ Email sent successfully to {to}")
        return True

    except Exception as e:
        logger.exception(f"[EMAIL] ✗ Failed to send email to {to}: {str(e)}")
        return False
