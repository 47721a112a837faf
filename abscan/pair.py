"""Liquidity pairs, their two tokens and the ordering rules between them."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import IntEnum
from typing import Any, Dict, Optional, Union

from abscan import orm
from abscan.address import ZERO_ADDRESS, Address, is_same_address
from abscan.protocol import get_protocol_name
from abscan.token import Token, is_base_token, is_usdc
from abscan.util import format_decimal, format_time, parse_time, truncate_to_max_chars

MAX_TOKEN0_SYMBOL_CHARS = 64
MAX_TOKEN1_SYMBOL_CHARS = 63


class FilterCode(IntEnum):
    """Reason a pair was excluded from processing."""

    GET_TOKEN0 = 1
    GET_TOKEN1 = 2
    VERIFY_FAILED = 3
    NO_BASE_TOKEN = 4
    WRONG_FACTORY = 5
    UNPACK_DATA_ERR = 6


@dataclass
class TokenCore:
    """The part of a token a pair needs: address, symbol and decimals."""

    address: Address = ZERO_ADDRESS
    symbol: str = ""
    decimals: int = 0

    def equal(self, other: "TokenCore") -> bool:
        return (
            is_same_address(self.address, other.address)
            and self.symbol == other.symbol
            and self.decimals == other.decimals
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Address": str(self.address),
            "Symbol": self.symbol,
            "Decimals": self.decimals,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenCore":
        return cls(
            address=Address.from_hex(data.get("Address") or ""),
            symbol=data.get("Symbol", ""),
            decimals=int(data.get("Decimals", 0)),
        )


def _cores_equal(a: Optional[TokenCore], b: Optional[TokenCore]) -> bool:
    if a is None or b is None:
        return a is b
    return a.equal(b)


def _decimal_from_json(value: Any) -> Decimal:
    if value is None:
        return Decimal(0)
    return Decimal(str(value))


def pair_name(token0_symbol: str, token1_symbol: str) -> str:
    """Join two symbols as "token0/token1", fitting a 128-character column."""
    return (
        truncate_to_max_chars(token0_symbol, MAX_TOKEN0_SYMBOL_CHARS)
        + "/"
        + truncate_to_max_chars(token1_symbol, MAX_TOKEN1_SYMBOL_CHARS)
    )


@dataclass
class Pair:
    address: Address = ZERO_ADDRESS
    tokens_reversed: bool = False
    token0_core: Optional[TokenCore] = None
    token1_core: Optional[TokenCore] = None
    token0: Optional[Token] = None
    token1: Optional[Token] = None
    token0_init_amount: Decimal = Decimal(0)
    token1_init_amount: Decimal = Decimal(0)
    block: int = 0
    block_at: Optional[datetime] = None
    protocol_id: int = 0
    filtered: bool = False
    filter_code: int = 0
    timestamp: Optional[datetime] = None

    def __str__(self) -> str:
        return self.to_json().decode("utf-8")

    def to_json(self) -> bytes:
        """Serialise for caching; the full token records are left out."""
        document = {
            "Address": str(self.address),
            "TokensReversed": self.tokens_reversed,
            "Token0Core": self.token0_core.to_dict() if self.token0_core else None,
            "Token1Core": self.token1_core.to_dict() if self.token1_core else None,
            "Token0InitAmount": format_decimal(self.token0_init_amount),
            "Token1InitAmount": format_decimal(self.token1_init_amount),
            "Block": self.block,
            "BlockAt": format_time(self.block_at),
            "ProtocolId": self.protocol_id,
            "Filtered": self.filtered,
            "FilterCode": self.filter_code,
            "Timestamp": format_time(self.timestamp),
        }
        return json.dumps(document, separators=(",", ":")).encode("utf-8")

    @classmethod
    def from_json(cls, data: Union[bytes, str]) -> "Pair":
        """Rebuild a pair from the output of to_json."""
        document = json.loads(data)
        core0 = document.get("Token0Core")
        core1 = document.get("Token1Core")
        return cls(
            address=Address.from_hex(document.get("Address") or ""),
            tokens_reversed=bool(document.get("TokensReversed", False)),
            token0_core=TokenCore.from_dict(core0) if core0 is not None else None,
            token1_core=TokenCore.from_dict(core1) if core1 is not None else None,
            token0_init_amount=_decimal_from_json(document.get("Token0InitAmount")),
            token1_init_amount=_decimal_from_json(document.get("Token1InitAmount")),
            block=int(document.get("Block", 0)),
            block_at=parse_time(document.get("BlockAt")),
            protocol_id=int(document.get("ProtocolId", 0)),
            filtered=bool(document.get("Filtered", False)),
            filter_code=int(document.get("FilterCode", 0)),
            timestamp=parse_time(document.get("Timestamp")),
        )

    def _swap_tokens(self) -> None:
        self.token0_core, self.token1_core = self.token1_core, self.token0_core
        self.token0, self.token1 = self.token1, self.token0
        self.tokens_reversed = True

    def order_token0_token1(self) -> bool:
        """Put the base token second (USDC before WETH); return tokens_reversed."""
        if self.token0_core is None or self.token1_core is None:
            return False

        token0_is_base = is_base_token(self.token0_core.address)
        token1_is_base = is_base_token(self.token1_core.address)

        if token0_is_base and token1_is_base:
            if is_usdc(self.token0_core.address):
                self._swap_tokens()
        elif token0_is_base and not token1_is_base:
            self._swap_tokens()

        return self.tokens_reversed

    def equal(self, other: "Pair") -> bool:
        return (
            is_same_address(self.address, other.address)
            and self.tokens_reversed == other.tokens_reversed
            and _cores_equal(self.token0_core, other.token0_core)
            and _cores_equal(self.token1_core, other.token1_core)
            and self.token0_init_amount == other.token0_init_amount
            and self.token1_init_amount == other.token1_init_amount
            and self.block == other.block
            and self.block_at == other.block_at
            and self.protocol_id == other.protocol_id
            and self.filtered == other.filtered
            and self.filter_code == other.filter_code
        )

    def is_filtered(self) -> bool:
        return self.filtered

    def _require_cores(self) -> tuple:
        if self.token0_core is None or self.token1_core is None:
            raise ValueError("pair has no token cores")
        return self.token0_core, self.token1_core

    def filter_by_token0_and_token1(self) -> bool:
        """Mark the pair filtered when neither token is a base token."""
        core0, core1 = self._require_cores()
        if not is_base_token(core0.address) and not is_base_token(core1.address):
            self.filtered = True
            self.filter_code = FilterCode.NO_BASE_TOKEN
        return self.filtered

    def to_orm_pair(self, chain_id: int) -> orm.Pair:
        """Build the database row; reserves are stored in the tokens' smallest units."""
        core0, core1 = self._require_cores()
        return orm.Pair(
            name=pair_name(core0.symbol, core1.symbol),
            address=str(self.address),
            token0=str(core0.address),
            token1=str(core1.address),
            chain_id=chain_id,
            reserve0=Decimal(self.token0_init_amount).scaleb(core0.decimals),
            reserve1=Decimal(self.token1_init_amount).scaleb(core1.decimals),
            block=self.block,
            block_at=self.block_at,
            program=get_protocol_name(self.protocol_id),
        )


@dataclass
class PairWrap:
    """A pair together with flags telling which parts are newly seen."""

    pair: Pair
    new_pair: bool = False
    new_token0: bool = False
    new_token1: bool = False