"""Telegram push notification."""

import html
import logging
import os

import requests

from price_watch.models import Item

logger = logging.getLogger(__name__)

TELEGRAM_API = "https://api.telegram.org/bot{token}/sendMessage"


def _build_text(items: list[Item], currency: str) -> str:
    """HTML message text, name and price per set."""
    lines = [f"🔔 <b>New lowest price</b> ({len(items)})", ""]
    for item in items:
        lines.append(f"<b>{html.escape(item.name[:80])}</b> ({item.code})")
        lines.append(f"💰 {item.display_price(currency)}")
    return "\n".join(lines)


def send_telegram_alert(items: list[Item], currency: str) -> bool:
    """
    Send price alert via Telegram Bot API.

    Requires TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID.
    """
    token = os.environ.get("TELEGRAM_BOT_TOKEN")
    chat_id = os.environ.get("TELEGRAM_CHAT_ID")

    if not token or not chat_id:
        logger.warning("Telegram: TELEGRAM_BOT_TOKEN or TELEGRAM_CHAT_ID not set")
        return False

    url = TELEGRAM_API.format(token=token)
    payload = {
        "chat_id": chat_id,
        "text": _build_text(items, currency),
        "parse_mode": "HTML",
        "disable_web_page_preview": True,
    }

    try:
        logger.debug("Telegram: sending alert for %d sets", len(items))
        resp = requests.post(url, json=payload, timeout=10)
        logger.debug("Telegram response status: %d", resp.status_code)
        if resp.status_code != 200:
            logger.error("Telegram error (status %d): %s", resp.status_code, resp.text)
        resp.raise_for_status()
        logger.info("Telegram: alert sent successfully")
        return True
    except requests.exceptions.RequestException as e:
        logger.error("Telegram request failed: %s", e)
        return False
