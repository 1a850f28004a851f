"""Data models for price tracking."""

import math
from dataclasses import dataclass, replace

FIELD_DELIMITER = ";"


class RowParseError(ValueError):
    """A stored row could not be turned into an Item."""


def parse_code(text: str) -> int | None:
    """Parse an item code like '76910'. Returns None if it isn't a non-negative integer."""
    text = text.strip()
    if not (text.isascii() and text.isdigit()):
        return None
    return int(text)


def parse_price(text: str) -> float | None:
    """
    Parse a price like '99.99' or '99,99'.

    Returns None for empty, non-numeric, negative or non-finite values.
    """
    text = text.strip().replace(",", ".")
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


@dataclass(frozen=True)
class Item:
    """A catalog item: set code, price and display name."""

    code: int
    price: float
    name: str

    def clone(self) -> "Item":
        return replace(self)

    def with_price(self, price: float) -> "Item":
        return replace(self, price=price)

    def display_price(self, currency: str = "PLN") -> str:
        return f"{self.price:.2f} {currency}"

    def __str__(self) -> str:
        return f"{self.code} - {self.display_price()} {self.name}"

    def to_row(self) -> str:
        """Serialize as a 'code;price;name' line."""
        if FIELD_DELIMITER in self.name or "\n" in self.name or "\r" in self.name:
            raise ValueError(f"Item {self.code} name cannot be stored: {self.name!r}")
        return f"{self.code}{FIELD_DELIMITER}{self.price}{FIELD_DELIMITER}{self.name}\n"

    @classmethod
    def from_row(cls, row: str) -> "Item":
        """Parse a 'code;price;name' line. Raises RowParseError on malformed input."""
        parts = row.rstrip("\r\n").split(FIELD_DELIMITER)
        if len(parts) != 3:
            raise RowParseError(f"expected 3 fields, got {len(parts)}: {row!r}")

        code = parse_code(parts[0])
        if code is None:
            raise RowParseError(f"invalid code {parts[0]!r}")
        price = parse_price(parts[1])
        if price is None:
            raise RowParseError(f"invalid price {parts[1]!r}")
        return cls(code=code, price=price, name=parts[2])
