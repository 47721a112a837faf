"""Decoded on-chain events and the behaviour they share."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Tuple

from abscan import orm
from abscan.address import ZERO_ADDRESS, Address
from abscan.pair import Pair
from abscan.pool_update import PoolUpdate, PoolUpdateParameter


class EventName(str, Enum):
    """Kind of a liquidity or trade action."""

    ADD = "add"
    REMOVE = "remove"
    BUY = "buy"
    SELL = "sell"


class Event(ABC):
    """What every decoded pool or factory event offers to block processing."""

    @abstractmethod
    def get_protocol_id(self) -> int:
        """Protocol of the pair the event belongs to."""

    @abstractmethod
    def get_pair_address(self) -> Address:
        """Address of the pair the event belongs to."""

    @abstractmethod
    def set_pair(self, pair: Pair) -> None:
        """Attach the resolved pair."""

    @abstractmethod
    def set_maker(self, maker: Address) -> None:
        """Record the account that sent the transaction."""

    @abstractmethod
    def set_block_time(self, block_time: datetime) -> None:
        """Record the time of the enclosing block."""

    @abstractmethod
    def can_get_pair(self) -> bool:
        """Whether get_pair yields a pair."""

    @abstractmethod
    def get_pair(self) -> Optional[Pair]:
        """The pair this event creates, if any."""

    @abstractmethod
    def can_get_tx(self) -> bool:
        """Whether get_tx yields a transaction row."""

    @abstractmethod
    def get_tx(self, native_token_price: Decimal) -> Optional[orm.Tx]:
        """The transaction row for this event, if any."""

    @abstractmethod
    def can_get_pool_update(self) -> bool:
        """Whether get_pool_update yields a reserve update."""

    @abstractmethod
    def get_pool_update(self) -> Optional[PoolUpdate]:
        """The reserve update carried by this event, if any."""

    @abstractmethod
    def can_get_pool_update_parameter(self) -> bool:
        """Whether get_pool_update_parameter yields a parameter."""

    @abstractmethod
    def get_pool_update_parameter(self) -> Optional[PoolUpdateParameter]:
        """The reserve-query parameter for this event, if any."""

    @abstractmethod
    def link_event(self, event: "Event") -> None:
        """Associate a related event, such as the mint following a pair creation."""

    @abstractmethod
    def is_create_pair(self) -> bool:
        """Whether this event creates a pair."""

    @abstractmethod
    def is_mint(self) -> bool:
        """Whether this event adds initial liquidity."""

    @abstractmethod
    def get_mint_amount(self) -> Tuple[Decimal, Decimal]:
        """Token amounts minted by this event."""


@dataclass(eq=False)
class EventCommon(Event):
    """Fields shared by all events, with neutral answers to every query."""

    pair: Optional[Pair] = None
    contract_address: Address = ZERO_ADDRESS
    block_number: int = 0
    block_time: Optional[datetime] = None
    tx_hash: str = ""
    maker: Address = ZERO_ADDRESS
    tx_index: int = 0
    log_index: int = 0
    possible_protocol_ids: List[int] = field(default_factory=list)

    def _require_pair(self) -> Pair:
        if self.pair is None:
            raise ValueError("event has no pair")
        return self.pair

    def _unbuilt(self, what: str) -> TypeError:
        return TypeError(f"{type(self).__name__} offers a {what} but does not build one")

    def get_protocol_id(self) -> int:
        return self._require_pair().protocol_id

    def get_pair_address(self) -> Address:
        return self._require_pair().address

    def set_pair(self, pair: Pair) -> None:
        self.pair = pair

    def set_maker(self, maker: Address) -> None:
        self.maker = maker

    def set_block_time(self, block_time: datetime) -> None:
        self.block_time = block_time

    def can_get_pair(self) -> bool:
        return False

    def get_pair(self) -> Optional[Pair]:
        """The attached pair when this event offers one, otherwise None."""
        return self.pair if self.can_get_pair() else None

    def can_get_tx(self) -> bool:
        return False

    def get_tx(self, native_token_price: Decimal) -> Optional[orm.Tx]:
        """None for events that carry no transaction row."""
        if self.can_get_tx():
            raise self._unbuilt("transaction row")
        return None

    def can_get_pool_update(self) -> bool:
        return False

    def get_pool_update(self) -> Optional[PoolUpdate]:
        """None for events that carry no reserve update."""
        if self.can_get_pool_update():
            raise self._unbuilt("pool update")
        return None

    def can_get_pool_update_parameter(self) -> bool:
        return False

    def get_pool_update_parameter(self) -> Optional[PoolUpdateParameter]:
        """None for events that carry no reserve-query parameter."""
        if self.can_get_pool_update_parameter():
            raise self._unbuilt("pool update parameter")
        return None

    def link_event(self, event: Event) -> None:
        """Plain events keep no links; only the argument's kind is checked."""
        if not isinstance(event, Event):
            raise TypeError(f"cannot link {type(event).__name__} to an event")

    def is_create_pair(self) -> bool:
        return False

    def is_mint(self) -> bool:
        return False

    def get_mint_amount(self) -> Tuple[Decimal, Decimal]:
        return Decimal(0), Decimal(0)