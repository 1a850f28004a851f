"""Entry point and scheduler for Lego Price Watch."""

import logging
import os
import sys
import threading
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parents[1] / ".env")

from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.interval import IntervalTrigger

from price_watch.comparator import reconcile
from price_watch.fetchers.catalog import fetch_latest, get_catalog_url
from price_watch.models import Item
from price_watch.notifiers import notify
from price_watch.storage import (
    get_best_path,
    get_latest_path,
    get_watchlist_path,
    load_items,
    load_watchlist,
    save_items,
)

logger = logging.getLogger(__name__)

# Held for the whole cycle so two checks never read/write the data files at once
_run_lock = threading.Lock()


@dataclass
class CycleResult:
    """What one check cycle observed and stored."""

    latest: list[Item]
    improved: list[Item]
    best: list[Item]
    saved: bool


def setup_logging() -> None:
    """Log to stdout at LOG_LEVEL (default INFO)."""
    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def get_interval_seconds() -> int:
    """Get check interval from env (CHECK_INTERVAL_SECONDS, default 10)."""
    try:
        return max(1, int(os.environ.get("CHECK_INTERVAL_SECONDS", "10")))
    except ValueError:
        return 10


def keep_new_codes() -> bool:
    """Whether sets first seen after the first run are added to the best prices."""
    val = os.environ.get("KEEP_NEW_CODES", "true").lower()
    return val in ("true", "1", "yes")


def run_check() -> CycleResult | None:
    """
    Run one check cycle: load, fetch, compare, save, notify.

    Returns None when the cycle was aborted (nothing to watch or the catalog
    could not be fetched); the stored files are left untouched in that case.
    """
    with _run_lock:
        watch_codes = load_watchlist(get_watchlist_path())
        if not watch_codes:
            logger.warning("Watch-list %s is empty, nothing to check", get_watchlist_path())
            return None
        prior_best = load_items(get_best_path())

        try:
            latest = fetch_latest(watch_codes)
        except Exception as e:
            logger.exception("Catalog fetch error (%s): %s", get_catalog_url(), e)
            return None

        logger.info("Catalog: found %d of %d watched sets", len(latest), len(watch_codes))
        result = reconcile(latest, prior_best, append_new=keep_new_codes())

        saved_latest = save_items(get_latest_path(), latest)
        saved_best = save_items(get_best_path(), result.best)

        if result.improved:
            notify(result.improved)
        else:
            logger.info("No better price")

        return CycleResult(
            latest=latest,
            improved=result.improved,
            best=result.best,
            saved=saved_latest and saved_best,
        )


def main() -> None:
    """Run once immediately, then start the scheduler (unless RUN_MODE=once)."""
    setup_logging()
    logger.info("🚀 Lego Price Watch started")
    logger.info("Catalog: %s", get_catalog_url())

    run_check()

    if os.environ.get("RUN_MODE", "daemon").lower() == "once":
        return

    interval = get_interval_seconds()
    logger.info("Scheduler: every %d s", interval)

    scheduler = BlockingScheduler()
    scheduler.add_job(
        run_check,
        trigger=IntervalTrigger(seconds=interval),
        id="price_check",
        max_instances=1,          # Skip a tick while a check is still running
        coalesce=True,
        misfire_grace_time=interval,
    )
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        logger.info("Scheduler stopped")


if __name__ == "__main__":
    main()
