"""Decimal, text and time helpers shared across the package."""

from __future__ import annotations

import re
from datetime import datetime
from decimal import Decimal
from typing import Optional

EPSILON = Decimal("1e-12")

# Serialised form of an unset timestamp.
ZERO_TIME = "0001-01-01T00:00:00Z"

_TIME_RE = re.compile(
    r"^(?P<base>[^.]*?T\d{2}:\d{2}:\d{2})(?:\.(?P<frac>\d+))?(?P<tz>.*)$"
)


def decimal_equal(a: Decimal, b: Decimal) -> bool:
    """Return True when the two amounts differ by no more than EPSILON."""
    return abs(Decimal(a) - Decimal(b)) <= EPSILON


def truncate_to_max_chars(text: str, max_chars: int) -> str:
    """Cut text to at most max_chars characters (not bytes)."""
    if max_chars < 0:
        raise ValueError(f"max_chars must not be negative, got {max_chars}")
    return text[:max_chars]


def format_decimal(value: Decimal) -> str:
    """Render a decimal in plain notation without trailing fractional zeros."""
    text = format(Decimal(value), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def format_time(value: Optional[datetime]) -> str:
    """Render a timestamp as RFC 3339; None becomes ZERO_TIME."""
    if value is None:
        return ZERO_TIME
    text = value.isoformat()
    offset = value.utcoffset()
    if offset is not None and offset.total_seconds() == 0 and text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def parse_time(text: Optional[str]) -> Optional[datetime]:
    """Parse an RFC 3339 timestamp; ZERO_TIME, empty or None give None."""
    if not text or text == ZERO_TIME:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    match = _TIME_RE.match(text)
    if match:
        frac = match.group("frac")
        frac_text = "." + (frac + "000000")[:6] if frac else ""
        text = match.group("base") + frac_text + match.group("tz")
    return datetime.fromisoformat(text)