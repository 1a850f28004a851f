"""Fetchers for catalog listings."""

from price_watch.fetchers.catalog import CatalogParseError, fetch_latest, parse_listings

__all__ = ["CatalogParseError", "fetch_latest", "parse_listings"]
