"""Log-based notification of new best prices."""

import logging

from price_watch.models import Item

logger = logging.getLogger(__name__)


def send_console_alert(items: list[Item], currency: str) -> bool:
    """Log the improved sets, one line each."""
    logger.info("Found %d sets with better prices:", len(items))
    for item in items:
        logger.info(" - %s - %s", item.name, item.display_price(currency))
    return True
