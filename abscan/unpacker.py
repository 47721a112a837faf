"""Coercion of decoded contract-call outputs and classification of call errors."""

from __future__ import annotations

import re
from typing import Any

from abscan.address import Address

STRING_LENGTH_FIXED = 32

_NON_RETRYABLE_MESSAGES = (
    "execution reverted",
    "out of gas",
    "abi: cannot marshal in to go slice",
)

_ESCAPED_RUN = re.compile("[\udc80-\udcff]+")


class UnpackError(ValueError):
    """Raised when a decoded value does not have the expected type."""


def _sanitize_utf8(raw: bytes) -> str:
    """Decode bytes, replacing each run of invalid UTF-8 with one '?'."""
    text = raw.decode("utf-8", errors="surrogateescape")
    return _ESCAPED_RUN.sub("?", text)


def parse_string(value: Any) -> str:
    """Accept a string, or a fixed 32-byte value with its zero bytes removed."""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)) and len(value) == STRING_LENGTH_FIXED:
        return _sanitize_utf8(bytes(value).replace(b"\x00", b""))
    raise UnpackError("wrong string")


def parse_int(value: Any) -> int:
    """Accept an integer, keeping its low 64 bits as a signed value."""
    if isinstance(value, int) and not isinstance(value, bool):
        low = value & 0xFFFFFFFFFFFFFFFF
        return low - (1 << 64) if low >= (1 << 63) else low
    raise UnpackError("wrong int type")


def parse_big_int(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise UnpackError("wrong big int type")


def parse_address(value: Any) -> Address:
    if isinstance(value, Address):
        return value
    raise UnpackError("wrong address type")


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    raise UnpackError("wrong bool type")


def is_retryable_error(error: BaseException) -> bool:
    """A call failure is retryable unless the contract itself rejected it."""
    message = str(error)
    return not any(text in message for text in _NON_RETRYABLE_MESSAGES)