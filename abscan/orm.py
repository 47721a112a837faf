"""Database row models for actions, pairs, tokens and transactions."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import ClassVar, Optional

from abscan.util import decimal_equal, truncate_to_max_chars

MAX_NAME_LENGTH = 64
MAX_SYMBOL_LENGTH = 32
MAX_SUPPLY_LENGTH = 64


@dataclass
class Action:
    table_name: ClassVar[str] = "action"

    id: Optional[uuid.UUID] = None
    maker: str = ""
    token: str = ""
    pair: str = ""
    action: str = ""
    tx_hash: str = ""
    creator: str = ""
    block: int = 0
    block_at: Optional[datetime] = None
    token0_amount: Decimal = Decimal(0)
    token1_amount: Decimal = Decimal(0)
    created_at: Optional[datetime] = None

    def equal(self, other: "Action") -> bool:
        return (
            self.maker == other.maker
            and self.token == other.token
            and self.pair == other.pair
            and self.action == other.action
            and self.tx_hash == other.tx_hash
            and self.creator == other.creator
        )


@dataclass
class Pair:
    table_name: ClassVar[str] = "pair"

    name: str = ""
    address: str = ""
    token0: str = ""
    token1: str = ""
    chain_id: int = 0
    reserve0: Decimal = Decimal(0)
    reserve1: Decimal = Decimal(0)
    block: int = 0
    block_at: Optional[datetime] = None
    program: str = ""
    created_at: Optional[datetime] = None

    def equal(self, other: "Pair") -> bool:
        return (
            self.name == other.name
            and self.address == other.address
            and self.token0 == other.token0
            and self.token1 == other.token1
            and self.chain_id == other.chain_id
            and self.reserve0 == other.reserve0
            and self.reserve1 == other.reserve1
        )


@dataclass
class Token:
    table_name: ClassVar[str] = "token"

    address: str = ""
    creator: str = ""
    name: str = ""
    symbol: str = ""
    decimal: int = 0
    total_supply: str = ""
    chain_id: int = 0
    block: int = 0
    block_at: Optional[datetime] = None
    program: str = ""
    created_at: Optional[datetime] = None
    main_pair: str = ""

    def equal(self, other: "Token") -> bool:
        return (
            self.address == other.address
            and self.name == other.name
            and self.symbol == other.symbol
            and self.decimal == other.decimal
            and self.total_supply == other.total_supply
            and self.block == other.block
        )

    def normalize(self) -> "Token":
        """Fit name, symbol and supply into the column limits; returns self."""
        if len(self.name) > MAX_NAME_LENGTH:
            self.name = truncate_to_max_chars(self.name, MAX_NAME_LENGTH)
        if len(self.symbol) > MAX_SYMBOL_LENGTH:
            self.symbol = truncate_to_max_chars(self.symbol, MAX_SYMBOL_LENGTH)
        if len(self.total_supply) > MAX_SUPPLY_LENGTH:
            self.total_supply = "0"
        return self


@dataclass
class Tx:
    table_name: ClassVar[str] = "tx"

    id: Optional[uuid.UUID] = None
    tx_hash: str = ""
    event: str = ""
    token0_amount: Decimal = Decimal(0)
    token1_amount: Decimal = Decimal(0)
    maker: str = ""
    token0_address: str = ""
    token1_address: str = ""
    amount_usd: Decimal = Decimal(0)
    price_usd: Decimal = Decimal(0)
    block: int = 0
    block_at: Optional[datetime] = None
    block_index: int = 0
    tx_index: int = 0
    pair_address: str = ""
    program: str = ""
    created_at: Optional[datetime] = field(default=None)

    def equal(self, other: "Tx") -> bool:
        """Compare identifying fields and amounts; maker and USD values are ignored."""
        return (
            self.tx_hash == other.tx_hash
            and self.event == other.event
            and self.token0_address == other.token0_address
            and self.token1_address == other.token1_address
            and self.block == other.block
            and self.block_index == other.block_index
            and self.tx_index == other.tx_index
            and self.pair_address == other.pair_address
            and self.program == other.program
            and decimal_equal(other.token0_amount, self.token0_amount)
            and decimal_equal(other.token1_amount, self.token1_amount)
        )