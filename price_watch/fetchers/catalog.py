"""Lego catalog page fetcher (zklockow.pl listing pages)."""

import logging
import os
import re

import requests
from bs4 import BeautifulSoup
from bs4.element import Tag

from price_watch.models import FIELD_DELIMITER, Item, parse_code, parse_price

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_URL = "http://zklockow.pl/lego-speed-champions"
DEFAULT_TIMEOUT_SECONDS = 15.0

# Listing markup: each .R row holds the title link, name link and price block
LISTING_CONTAINER = "#BasLis"
LISTING_SELECTOR = "#BasLis .R > .Ri.Na"
NAME_SELECTOR = "a.Ri.Na"
PRICE_SELECTOR = "a.Ri.Dt > .pr > .pp > span"

HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "pl-PL,pl;q=0.9,en;q=0.8",
}


class CatalogParseError(RuntimeError):
    """The catalog page doesn't look like a listing page."""


def get_catalog_url() -> str:
    """Get catalog URL from env or default."""
    return os.environ.get("CATALOG_URL", DEFAULT_CATALOG_URL)


def get_fetch_timeout() -> float:
    """Get HTTP timeout in seconds from env (FETCH_TIMEOUT_SECONDS)."""
    val = os.environ.get("FETCH_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
    try:
        timeout = float(val)
    except ValueError:
        return DEFAULT_TIMEOUT_SECONDS
    return timeout if timeout > 0 else DEFAULT_TIMEOUT_SECONDS


def fetch_catalog_page(url: str | None = None, timeout: float | None = None) -> str:
    """
    Download the catalog page HTML.

    Raises requests.RequestException on network errors and non-2xx responses.
    """
    url = url or get_catalog_url()
    timeout = timeout or get_fetch_timeout()
    logger.debug("Fetching catalog %s (timeout %.1fs)", url, timeout)
    resp = requests.get(url, headers=HEADERS, timeout=timeout)
    resp.raise_for_status()
    return resp.text


def _title_codes(title: str) -> list[int]:
    """Numeric tokens of a title attribute, e.g. 'LEGO Speed Champions 76910' -> [76910]."""
    codes = []
    for token in title.split():
        code = parse_code(token)
        if code is not None:
            codes.append(code)
    return codes


def _clean_text(text: str) -> str:
    """Collapse whitespace and drop characters that can't be stored in a row."""
    return " ".join(text.replace(FIELD_DELIMITER, ",").split())


def _price_from_text(text: str) -> float | None:
    """Extract a price from text like '89,99 zł' or '1 299,00 zł'."""
    match = re.search(r"\d[\d\s]*(?:[.,]\d+)?", text)
    if not match:
        return None
    return parse_price(re.sub(r"\s", "", match.group(0)))


def _listing_to_item(container: Tag, watch_codes: set[int], title_code: int) -> Item | None:
    """Build an Item from a listing row, or None if its price can't be read."""
    name_el = container.select_one(NAME_SELECTOR)
    price_el = container.select_one(PRICE_SELECTOR)

    # Name link reads like 'LEGO Speed Champions 76910 Aston Martin Valkyrie'
    words = _clean_text(name_el.get_text(" ")).split() if name_el else []
    code, name_words = title_code, words
    for i, word in enumerate(words):
        word_code = parse_code(word)
        if word_code is not None and word_code in watch_codes:
            code, name_words = word_code, words[i + 1:]
            break

    price_text = price_el.get_text(" ") if price_el else ""
    price = _price_from_text(price_text)
    if price is None:
        logger.warning("Set %d: could not parse price from %r, skipping", code, price_text.strip())
        return None

    return Item(code=code, price=price, name=" ".join(name_words))


def parse_listings(html: str, watch_codes: list[int]) -> list[Item]:
    """
    Extract watched sets from a catalog page.

    A listing matches when its title attribute contains one of the watched
    codes. Returns at most one Item per code, in page order.

    Raises CatalogParseError if the page has no listing container.
    """
    soup = BeautifulSoup(html, "html.parser")
    if soup.select_one(LISTING_CONTAINER) is None:
        raise CatalogParseError(f"No {LISTING_CONTAINER} listing container on catalog page")

    wanted = set(watch_codes)
    items: list[Item] = []
    seen: set[int] = set()
    for el in soup.select(LISTING_SELECTOR):
        matches = [c for c in _title_codes(el.get("title", "")) if c in wanted]
        if not matches or el.parent is None:
            continue
        item = _listing_to_item(el.parent, wanted, matches[0])
        if item is None or item.code in seen:
            continue
        seen.add(item.code)
        items.append(item)

    logger.debug("Matched %d of %d watched sets", len(items), len(wanted))
    return items


def fetch_latest(watch_codes: list[int], url: str | None = None) -> list[Item]:
    """Fetch the catalog and return the current snapshot for `watch_codes`."""
    html = fetch_catalog_page(url)
    return parse_listings(html, watch_codes)
