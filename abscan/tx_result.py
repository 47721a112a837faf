"""Events of one transaction, grouped by pair and protocol."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from abscan.address import Address
from abscan.events import Event
from abscan.protocol import ProtocolId

logger = logging.getLogger(__name__)


def link_pair_created_and_mint_events(
    pair_created_events: Sequence[Event], mint_events: Sequence[Event]
) -> None:
    """Link the n-th pair creation to the n-th mint; log creations left without one."""
    for position, created in enumerate(pair_created_events):
        if position < len(mint_events):
            created.link_event(mint_events[position])
        else:
            logger.info("pair has no related mint event: %r", created)


def _link_protocol_events(events: Sequence[Event]) -> None:
    mints: List[Event] = []
    created: List[Event] = []
    for event in events:
        if event.is_mint():
            mints.append(event)
        elif event.is_create_pair():
            created.append(event)
    link_pair_created_and_mint_events(created, mints)


@dataclass
class TxPairEvent:
    """Events touching one pair within one transaction, split by protocol."""

    uniswap_v2: List[Event] = field(default_factory=list)
    uniswap_v3: List[Event] = field(default_factory=list)
    pancake_v2: List[Event] = field(default_factory=list)
    pancake_v3: List[Event] = field(default_factory=list)
    aerodrome: List[Event] = field(default_factory=list)

    def _bucket(self, protocol_id: int):
        return {
            ProtocolId.UNISWAP_V2: self.uniswap_v2,
            ProtocolId.UNISWAP_V3: self.uniswap_v3,
            ProtocolId.PANCAKE_V2: self.pancake_v2,
            ProtocolId.PANCAKE_V3: self.pancake_v3,
            ProtocolId.AERODROME: self.aerodrome,
        }.get(protocol_id)

    def add_event(self, event: Event) -> None:
        """File the event under its protocol; unknown protocols are dropped."""
        bucket = self._bucket(event.get_protocol_id())
        if bucket is not None:
            bucket.append(event)

    def link_events(self) -> None:
        for events in self._buckets():
            _link_protocol_events(events)

    def _buckets(self):
        return (
            self.uniswap_v2,
            self.uniswap_v3,
            self.pancake_v2,
            self.pancake_v3,
            self.aerodrome,
        )

    def all_events(self) -> List[Event]:
        """All events, protocol by protocol in a fixed order."""
        return [event for events in self._buckets() for event in events]


@dataclass
class TxResult:
    """Everything one transaction produced, keyed by pair address."""

    maker: Address
    pair_created_events: List[Event] = field(default_factory=list)
    pair_address_to_tx_pair_event: Dict[Address, TxPairEvent] = field(
        default_factory=dict
    )

    def add_event(self, event: Event) -> None:
        event.set_maker(self.maker)
        if event.is_create_pair():
            self.pair_created_events.append(event)
        pair_event = self.pair_address_to_tx_pair_event.setdefault(
            event.get_pair_address(), TxPairEvent()
        )
        pair_event.add_event(event)

    def link_events(self) -> None:
        for pair_event in self.pair_address_to_tx_pair_event.values():
            pair_event.link_events()