"""Pool reserve updates emitted for each block."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from abscan.address import ZERO_ADDRESS, Address
from abscan.util import decimal_equal


@dataclass
class PoolUpdate:
    program: str = ""
    log_index: int = 0
    address: str = ""
    token0_address: str = ""
    token1_address: str = ""
    token0_amount: Decimal = Decimal(0)
    token1_amount: Decimal = Decimal(0)

    def equal(self, other: "PoolUpdate") -> bool:
        """Compare all fields, amounts within the shared tolerance."""
        return (
            self.program == other.program
            and self.log_index == other.log_index
            and self.address == other.address
            and self.token0_address == other.token0_address
            and self.token1_address == other.token1_address
            and decimal_equal(self.token0_amount, other.token0_amount)
            and decimal_equal(self.token1_amount, other.token1_amount)
        )


@dataclass
class PoolUpdateParameter:
    block_number: int = 0
    pair_address: Address = ZERO_ADDRESS
    token0_address: Address = ZERO_ADDRESS
    token1_address: Address = ZERO_ADDRESS