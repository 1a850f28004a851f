"""Flat-file persistence for watch-list, latest snapshot and best prices."""

import logging
import os
import tempfile
from pathlib import Path

from price_watch.models import FIELD_DELIMITER, Item, RowParseError, parse_code

logger = logging.getLogger(__name__)


def get_watchlist_path() -> Path:
    """Get watch-list path from env or default."""
    return Path(os.environ.get("WATCHLIST_PATH", "data/wanted-sets.txt"))


def get_latest_path() -> Path:
    """Get latest snapshot path from env or default."""
    return Path(os.environ.get("LATEST_PATH", "data/latest.txt"))


def get_best_path() -> Path:
    """Get best-price path from env or default."""
    return Path(os.environ.get("BEST_PATH", "data/best.txt"))


def _read_rows(path: Path) -> list[tuple[int, str]] | None:
    """Return (line number, row) pairs for non-blank lines, or None if unreadable."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.info("File %s not found, starting empty", path)
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Could not read %s: %s", path, e)
        return None
    return [(n, row) for n, row in enumerate(text.split("\n"), start=1) if row.strip()]


def load_items(path: Path) -> list[Item]:
    """
    Load items from a 'code;price;name' file.

    Missing or unreadable files give an empty list. Malformed rows and
    repeated codes are skipped with a warning.
    """
    rows = _read_rows(path)
    if rows is None:
        return []

    items: list[Item] = []
    seen: set[int] = set()
    for line_no, row in rows:
        try:
            item = Item.from_row(row)
        except RowParseError as e:
            logger.warning("%s:%d skipped: %s", path, line_no, e)
            continue
        if item.code in seen:
            logger.warning("%s:%d skipped: duplicate code %d", path, line_no, item.code)
            continue
        seen.add(item.code)
        items.append(item)
    return items


def load_watchlist(path: Path) -> list[int]:
    """
    Load watched item codes.

    Only the first column is used, so rows may carry placeholder price/name
    columns or just the code.
    """
    rows = _read_rows(path)
    if rows is None:
        return []

    codes: list[int] = []
    for line_no, row in rows:
        code = parse_code(row.split(FIELD_DELIMITER, 1)[0])
        if code is None:
            logger.warning("%s:%d skipped: invalid code in %r", path, line_no, row)
            continue
        if code not in codes:
            codes.append(code)
    return codes


def save_items(path: Path, items: list[Item]) -> bool:
    """
    Overwrite `path` with `items`, one row per item.

    Writes to a temp file in the same directory and renames it over the
    target, so readers never see a half-written file. Returns False on failure.
    """
    try:
        content = "".join(item.to_row() for item in items)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except (OSError, ValueError) as e:
        logger.error("Error while saving file %s: %s", path, e)
        return False
    logger.debug("Saved %d items to %s", len(items), path)
    return True
