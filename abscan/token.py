"""Token metadata and the chain's base tokens."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

from abscan import orm
from abscan.address import ZERO_ADDRESS, Address, is_same_address
from abscan.util import format_decimal, format_time, parse_time

WETH_USDC_PAIR = "0x0C0c1CfB948A75595B7D70703BF50190E62a2286"
WETH = "0xf4905b9bc02Ce21C98Eac1803693A9357D5253bf"
USDC = "0x4BFB4297f9C28a373aE6ae58a8f8EfeFF334cae8"

WETH_USDC_PAIR_ADDRESS_UNISWAP_V2 = Address.from_hex(WETH_USDC_PAIR)
WETH_ADDRESS = Address.from_hex(WETH)
USDC_ADDRESS = Address.from_hex(USDC)


def is_weth(address: Address) -> bool:
    return is_same_address(address, WETH_ADDRESS)


def is_usdc(address: Address) -> bool:
    return is_same_address(address, USDC_ADDRESS)


def is_base_token(address: Address) -> bool:
    return is_weth(address) or is_usdc(address)


@dataclass
class Token:
    address: Address = ZERO_ADDRESS
    creator: Address = ZERO_ADDRESS
    name: str = ""
    symbol: str = ""
    decimals: int = 0
    total_supply: Decimal = Decimal(0)
    block_number: int = 0
    block_time: Optional[datetime] = None
    program: str = ""
    filtered: bool = False
    timestamp: Optional[datetime] = None

    def to_json(self) -> bytes:
        """Serialise for caching, addresses as checksummed hex."""
        document = {
            "Address": str(self.address),
            "Creator": str(self.creator),
            "Name": self.name,
            "Symbol": self.symbol,
            "Decimals": self.decimals,
            "TotalSupply": format_decimal(self.total_supply),
            "BlockNumber": self.block_number,
            "BlockTime": format_time(self.block_time),
            "Program": self.program,
            "Filtered": self.filtered,
            "Timestamp": format_time(self.timestamp),
        }
        return json.dumps(document, separators=(",", ":")).encode("utf-8")

    @classmethod
    def from_json(cls, data: Union[bytes, str]) -> "Token":
        """Rebuild a token from the output of to_json."""
        document = json.loads(data)
        supply = document.get("TotalSupply", "0")
        return cls(
            address=Address.from_hex(document.get("Address") or ""),
            creator=Address.from_hex(document.get("Creator") or ""),
            name=document.get("Name", ""),
            symbol=document.get("Symbol", ""),
            decimals=int(document.get("Decimals", 0)),
            total_supply=Decimal(str(supply if supply is not None else "0")),
            block_number=int(document.get("BlockNumber", 0)),
            block_time=parse_time(document.get("BlockTime")),
            program=document.get("Program", ""),
            filtered=bool(document.get("Filtered", False)),
            timestamp=parse_time(document.get("Timestamp")),
        )

    def equal(self, other: "Token") -> bool:
        return (
            is_same_address(self.address, other.address)
            and is_same_address(self.creator, other.creator)
            and self.name == other.name
            and self.symbol == other.symbol
            and self.decimals == other.decimals
            and self.block_number == other.block_number
            and self.program == other.program
        )

    def to_orm_token(self, chain_id: int) -> orm.Token:
        """Build the normalised database row for this token."""
        row = orm.Token(
            address=str(self.address),
            name=self.name,
            symbol=self.symbol,
            decimal=self.decimals,
            total_supply=format_decimal(self.total_supply),
            chain_id=chain_id,
            block=self.block_number,
            block_at=self.block_time,
            program=self.program,
        )
        if self.creator != ZERO_ADDRESS:
            row.creator = str(self.creator)
        return row.normalize()