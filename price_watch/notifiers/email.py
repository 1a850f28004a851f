"""Email notification via SMTP (Gmail by default)."""

import logging
import os
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from price_watch.models import Item

logger = logging.getLogger(__name__)


def _get_port() -> int:
    """Get SMTP port from env (SMTP_PORT), 587 if unset or invalid."""
    try:
        return int(os.environ.get("SMTP_PORT") or "587")
    except ValueError:
        logger.warning("Email: invalid SMTP_PORT, using 587")
        return 587


def _build_body(items: list[Item], currency: str) -> str:
    """Plain-text mail body, one line per set."""
    lines = [f"{len(items)} Lego sets hit a new lowest price:", ""]
    for item in items:
        lines.append(f" - {item.name} ({item.code}): {item.display_price(currency)}")
    return "\n".join(lines)


def send_email_alert(items: list[Item], currency: str) -> bool:
    """
    Send one email listing all improved sets.

    Uses SMTP_USER and SMTP_PASS (Gmail App Password).
    SMTP_TO defaults to SMTP_USER if not set.
    """
    user = os.environ.get("SMTP_USER")
    password = os.environ.get("SMTP_PASS")
    to_addr = os.environ.get("SMTP_TO") or user

    if not user or not password:
        logger.warning("Email: SMTP_USER or SMTP_PASS not set")
        return False

    host = os.environ.get("SMTP_HOST") or "smtp.gmail.com"
    port = _get_port()

    if len(items) == 1:
        subject = f"Price Alert: {items[0].name[:50]} at {items[0].display_price(currency)}"
    else:
        subject = f"Price Alert: {len(items)} sets with better prices"

    msg = MIMEMultipart()
    msg["From"] = user
    msg["To"] = to_addr
    msg["Subject"] = subject
    msg.attach(MIMEText(_build_body(items, currency), "plain"))

    try:
        logger.debug("Email: sending alert to %s", to_addr)
        with smtplib.SMTP(host, port, timeout=30) as server:
            server.starttls()
            server.login(user, password)
            server.sendmail(user, to_addr, msg.as_string())
        logger.info("Email: alert sent successfully")
        return True
    except smtplib.SMTPAuthenticationError as e:
        logger.error("Email authentication failed: %s", e)
        return False
    except (smtplib.SMTPException, OSError) as e:
        logger.error("Email SMTP error: %s", e)
        return False
