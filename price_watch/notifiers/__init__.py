"""Notification backends."""

import logging
import os

from price_watch.models import Item
from price_watch.notifiers.console import send_console_alert
from price_watch.notifiers.email import send_email_alert
from price_watch.notifiers.telegram import send_telegram_alert

__all__ = ["notify", "send_console_alert", "send_email_alert", "send_telegram_alert"]

logger = logging.getLogger(__name__)

CHANNELS = {
    "console": send_console_alert,
    "email": send_email_alert,
    "telegram": send_telegram_alert,
}


def get_channels() -> list[str]:
    """Enabled channels from NOTIFY_CHANNELS (comma-separated, default 'console')."""
    raw = os.environ.get("NOTIFY_CHANNELS", "console")
    channels = []
    for name in (s.strip().lower() for s in raw.split(",")):
        if not name:
            continue
        if name not in CHANNELS:
            logger.warning("Unknown notification channel %r ignored", name)
            continue
        channels.append(name)
    return channels


def get_currency() -> str:
    """Currency label for prices in messages (CURRENCY, default 'PLN')."""
    return os.environ.get("CURRENCY", "PLN")


def notify(improved: list[Item]) -> None:
    """Report improved sets on every enabled channel. Does nothing for an empty list."""
    if not improved:
        return

    currency = get_currency()
    for name in get_channels():
        try:
            sent = CHANNELS[name](improved, currency)
        except Exception:
            logger.exception("Notification channel %s failed", name)
            continue
        if not sent:
            logger.warning("Notification not sent via %s", name)
