"""Identifiers and display names of the supported exchange protocols."""

from __future__ import annotations

from enum import IntEnum


class ProtocolId(IntEnum):
    UNISWAP_V2 = 1
    UNISWAP_V3 = 2
    PANCAKE_V2 = 3
    PANCAKE_V3 = 4
    AERODROME = 5


PROTOCOL_NAME_UNISWAP_V2 = "Newswap"
PROTOCOL_NAME_UNISWAP_V3 = "UniswapV3"
PROTOCOL_NAME_PANCAKE_V2 = "PancakeV2"
PROTOCOL_NAME_PANCAKE_V3 = "PancakeV3"
PROTOCOL_NAME_AERODROME = "Aerodrome"
UNKNOWN_PROTOCOL_NAME = "Unknown"

_NAMES = {
    ProtocolId.UNISWAP_V2: PROTOCOL_NAME_UNISWAP_V2,
    ProtocolId.UNISWAP_V3: PROTOCOL_NAME_UNISWAP_V3,
    ProtocolId.PANCAKE_V2: PROTOCOL_NAME_PANCAKE_V2,
    ProtocolId.PANCAKE_V3: PROTOCOL_NAME_PANCAKE_V3,
    ProtocolId.AERODROME: PROTOCOL_NAME_AERODROME,
}


def get_protocol_name(protocol_id: int) -> str:
    """Return the display name of a protocol, or "Unknown"."""
    return _NAMES.get(protocol_id, UNKNOWN_PROTOCOL_NAME)