"""Per-block results and the message published for each block."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Sequence

from abscan import orm
from abscan.address import Address
from abscan.events import Event
from abscan.pair import Pair
from abscan.pool_update import PoolUpdate, PoolUpdateParameter
from abscan.token import Token
from abscan.tx_result import TxResult
from abscan.util import format_decimal, format_time

_NIL_UUID = uuid.UUID(int=0)


def _hex(address: Address) -> str:
    return "0x" + address.value.hex()


def _tx_dict(tx: orm.Tx) -> Dict[str, Any]:
    return {
        "Id": str(tx.id or _NIL_UUID),
        "TxHash": tx.tx_hash,
        "Event": tx.event,
        "Token0Amount": format_decimal(tx.token0_amount),
        "Token1Amount": format_decimal(tx.token1_amount),
        "Maker": tx.maker,
        "Token0Address": tx.token0_address,
        "Token1Address": tx.token1_address,
        "AmountUsd": format_decimal(tx.amount_usd),
        "PriceUsd": format_decimal(tx.price_usd),
        "Block": tx.block,
        "BlockAt": format_time(tx.block_at),
        "BlockIndex": tx.block_index,
        "TxIndex": tx.tx_index,
        "PairAddress": tx.pair_address,
        "Program": tx.program,
        "CreatedAt": format_time(tx.created_at),
    }


def _token_dict(token: orm.Token) -> Dict[str, Any]:
    return {
        "Address": token.address,
        "Creator": token.creator,
        "Name": token.name,
        "Symbol": token.symbol,
        "Decimal": token.decimal,
        "TotalSupply": token.total_supply,
        "ChainId": token.chain_id,
        "Block": token.block,
        "BlockAt": format_time(token.block_at),
        "Program": token.program,
        "CreatedAt": format_time(token.created_at),
        "MainPair": token.main_pair,
    }


def _pair_dict(pair: orm.Pair) -> Dict[str, Any]:
    return {
        "Name": pair.name,
        "Address": pair.address,
        "Token0": pair.token0,
        "Token1": pair.token1,
        "ChainId": pair.chain_id,
        "Reserve0": format_decimal(pair.reserve0),
        "Reserve1": format_decimal(pair.reserve1),
        "Block": pair.block,
        "BlockAt": format_time(pair.block_at),
        "Program": pair.program,
        "CreatedAt": format_time(pair.created_at),
    }


def _pool_update_dict(update: PoolUpdate) -> Dict[str, Any]:
    return {
        "Program": update.program,
        "LogIndex": update.log_index,
        "Address": update.address,
        "Token0Address": update.token0_address,
        "Token1Address": update.token1_address,
        "Token0Amount": format_decimal(update.token0_amount),
        "Token1Amount": format_decimal(update.token1_amount),
    }


def _parameter_dict(parameter: PoolUpdateParameter) -> Dict[str, Any]:
    return {
        "BlockNumber": parameter.block_number,
        "PairAddress": _hex(parameter.pair_address),
        "Token0Address": _hex(parameter.token0_address),
        "Token1Address": _hex(parameter.token1_address),
    }


@dataclass
class BlockInfo:
    """The message published for one processed block."""

    height: int
    timestamp: int
    native_token_price: str
    txs: List[orm.Tx] = field(default_factory=list)
    new_tokens: List[orm.Token] = field(default_factory=list)
    new_pairs: List[orm.Pair] = field(default_factory=list)
    pool_updates: List[PoolUpdate] = field(default_factory=list)
    pool_update_parameters: List[PoolUpdateParameter] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-ready form of the message."""
        return {
            "Height": self.height,
            "Timestamp": self.timestamp,
            "NativeTokenPrice": self.native_token_price,
            "Txs": [_tx_dict(tx) for tx in self.txs],
            "NewTokens": [_token_dict(token) for token in self.new_tokens],
            "NewPairs": [_pair_dict(pair) for pair in self.new_pairs],
            "PoolUpdates": [_pool_update_dict(u) for u in self.pool_updates],
            "PoolUpdateParameters": [
                _parameter_dict(p) for p in self.pool_update_parameters
            ],
        }


def merge_pool_updates(pool_updates: Sequence[PoolUpdate]) -> List[PoolUpdate]:
    """Keep, for each pool address, the update with the highest log index."""
    latest: Dict[str, PoolUpdate] = {}
    for update in pool_updates:
        current = latest.get(update.address)
        if current is None or update.log_index > current.log_index:
            latest[update.address] = update
    return list(latest.values())


def merge_pool_update_parameters(
    pool_update_parameters: Sequence[PoolUpdateParameter],
) -> List[PoolUpdateParameter]:
    """Keep the last parameter seen for each pair address."""
    latest: Dict[Address, PoolUpdateParameter] = {}
    for parameter in pool_update_parameters:
        latest[parameter.pair_address] = parameter
    return list(latest.values())


@dataclass
class BlockResult:
    """Everything gathered while parsing one block."""

    height: int
    timestamp: int
    native_token_price: Decimal
    new_pairs: Dict[Address, Pair] = field(default_factory=dict)
    new_tokens: Dict[Address, Token] = field(default_factory=dict)
    tx_results: List[TxResult] = field(default_factory=list)
    block_time: datetime = field(init=False)

    def __post_init__(self) -> None:
        self.block_time = datetime.fromtimestamp(self.timestamp, tz=timezone.utc)

    def add_tx_result(self, tx_result: TxResult) -> None:
        self.tx_results.append(tx_result)

    def _all_events(self) -> List[Event]:
        for tx_result in self.tx_results:
            tx_result.link_events()
        return [
            event
            for tx_result in self.tx_results
            for pair_event in tx_result.pair_address_to_tx_pair_event.values()
            for event in pair_event.all_events()
        ]

    def get_kafka_message(self, chain_id: int) -> BlockInfo:
        """Collect transactions, new tokens and pairs, and merged pool updates."""
        txs: List[orm.Tx] = []
        created_pairs: List[Pair] = []
        pool_updates: List[PoolUpdate] = []
        parameters: List[PoolUpdateParameter] = []

        for event in self._all_events():
            if event.is_create_pair():
                pair = event.get_pair()
                if pair is not None:
                    created_pairs.append(pair)
                continue
            if event.can_get_tx():
                tx = event.get_tx(self.native_token_price)
                if tx is not None:
                    txs.append(tx)
            if event.can_get_pool_update():
                update = event.get_pool_update()
                if update is not None:
                    pool_updates.append(update)
            if event.can_get_pool_update_parameter():
                parameter = event.get_pool_update_parameter()
                if parameter is not None:
                    parameters.append(parameter)

        # Pairs from creation events carry more detail than those found earlier.
        for pair in created_pairs:
            self.new_pairs[pair.address] = pair

        return BlockInfo(
            height=self.height,
            timestamp=self.timestamp,
            native_token_price=format_decimal(self.native_token_price),
            txs=txs,
            new_tokens=[t.to_orm_token(chain_id) for t in self.new_tokens.values()],
            new_pairs=[p.to_orm_pair(chain_id) for p in self.new_pairs.values()],
            pool_updates=merge_pool_updates(pool_updates),
            pool_update_parameters=merge_pool_update_parameters(parameters),
        )