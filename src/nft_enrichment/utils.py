"""Shared utilities for the NFT enrichment service."""

from decimal import Decimal


def remove_url_slash(url: str) -> str:
    """Strip trailing slashes from a base URL."""
    return url.rstrip("/")


def to_decimal(value: str | int | float | None) -> Decimal:
    """Parse a decimal-as-string price; raises on missing or non-numeric input."""
    if value is None:
        raise TypeError("Price value is missing")
    return Decimal(str(value))
