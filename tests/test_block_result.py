import json
from dataclasses import dataclass
from decimal import Decimal

from abscan import orm
from abscan.address import Address
from abscan.block_result import (
    BlockInfo,
    BlockResult,
    merge_pool_update_parameters,
    merge_pool_updates,
)
from abscan.events import EventCommon
from abscan.pair import Pair, TokenCore
from abscan.pool_update import PoolUpdate, PoolUpdateParameter
from abscan.protocol import ProtocolId
from abscan.token import WETH_ADDRESS, Token
from abscan.tx_result import TxResult

MAKER = Address.from_hex("0x00000000000000000000000000000000000000aa")
PAIR_A = Address.from_hex("0x00000000000000000000000000000000000000a1")
PAIR_B = Address.from_hex("0x00000000000000000000000000000000000000b2")
TOKEN_X = Address.from_hex("0x00000000000000000000000000000000000000c3")


@dataclass(eq=False)
class SwapEvent(EventCommon):
    def can_get_tx(self):
        return True

    def get_tx(self, native_token_price):
        return orm.Tx(
            tx_hash=self.tx_hash,
            price_usd=native_token_price,
            pair_address=str(self.get_pair_address()),
        )

    def can_get_pool_update(self):
        return True

    def get_pool_update(self):
        return PoolUpdate(address=str(self.get_pair_address()), log_index=self.log_index)

    def can_get_pool_update_parameter(self):
        return True

    def get_pool_update_parameter(self):
        return PoolUpdateParameter(
            block_number=self.block_number, pair_address=self.get_pair_address()
        )


@dataclass(eq=False)
class CreatePairEvent(EventCommon):
    def is_create_pair(self):
        return True

    def can_get_pair(self):
        return True

    def get_pair(self):
        return self.pair

    def can_get_tx(self):
        return True

    def get_tx(self, native_token_price):
        raise AssertionError("creation events are not turned into transactions")


def _full_pair(address):
    return Pair(
        address=address,
        protocol_id=ProtocolId.UNISWAP_V2,
        token0_core=TokenCore(address=TOKEN_X, symbol="XTK", decimals=18),
        token1_core=TokenCore(address=WETH_ADDRESS, symbol="WETH", decimals=18),
    )


def test_block_time_matches_timestamp():
    result = BlockResult(height=10, timestamp=1000, native_token_price=Decimal("1"))
    assert result.block_time.timestamp() == 1000


def test_add_tx_result_appends():
    result = BlockResult(height=1, timestamp=1, native_token_price=Decimal("1"))
    tx_result = TxResult(maker=MAKER)
    result.add_tx_result(tx_result)
    assert result.tx_results == [tx_result]


def test_merge_pool_updates_keeps_highest_log_index():
    updates = [
        PoolUpdate(address="a", log_index=3),
        PoolUpdate(address="b", log_index=1),
        PoolUpdate(address="a", log_index=7),
        PoolUpdate(address="a", log_index=5),
    ]
    merged = merge_pool_updates(updates)
    by_address = {u.address: u for u in merged}
    assert len(merged) == 2
    assert by_address["a"] is updates[2]
    assert by_address["b"] is updates[1]


def test_merge_pool_updates_equal_index_keeps_first():
    first = PoolUpdate(address="a", log_index=2)
    second = PoolUpdate(address="a", log_index=2)
    assert merge_pool_updates([first, second]) == [first]


def test_merge_pool_update_parameters_last_wins():
    first = PoolUpdateParameter(block_number=1, pair_address=PAIR_A)
    other = PoolUpdateParameter(block_number=1, pair_address=PAIR_B)
    last = PoolUpdateParameter(block_number=2, pair_address=PAIR_A)
    merged = merge_pool_update_parameters([first, other, last])
    assert len(merged) == 2
    assert last in merged and other in merged
    assert first not in merged


def _build_block():
    result = BlockResult(height=42, timestamp=1700, native_token_price=Decimal("1.5"))
    tx_result = TxResult(maker=MAKER)
    tx_result.add_event(
        SwapEvent(pair=_full_pair(PAIR_A), tx_hash="0xaa", log_index=1, block_number=42)
    )
    tx_result.add_event(
        SwapEvent(pair=_full_pair(PAIR_A), tx_hash="0xbb", log_index=4, block_number=42)
    )
    tx_result.add_event(CreatePairEvent(pair=_full_pair(PAIR_B)))
    result.add_tx_result(tx_result)
    result.new_tokens[TOKEN_X] = Token(address=TOKEN_X, symbol="XTK", name="X Token")
    return result


def test_kafka_message_collects_transactions():
    info = _build_block().get_kafka_message(chain_id=7)
    assert info.height == 42
    assert info.timestamp == 1700
    assert info.native_token_price == "1.5"
    assert [tx.tx_hash for tx in info.txs] == ["0xaa", "0xbb"]
    assert all(tx.price_usd == Decimal("1.5") for tx in info.txs)


def test_kafka_message_merges_pool_updates():
    info = _build_block().get_kafka_message(chain_id=7)
    assert len(info.pool_updates) == 1
    assert info.pool_updates[0].log_index == 4
    assert len(info.pool_update_parameters) == 1
    assert info.pool_update_parameters[0].pair_address == PAIR_A


def test_kafka_message_includes_new_pairs_and_tokens():
    result = _build_block()
    info = result.get_kafka_message(chain_id=7)
    assert PAIR_B in result.new_pairs
    assert [p.address for p in info.new_pairs] == [str(PAIR_B)]
    assert info.new_pairs[0].name == "XTK/WETH"
    assert info.new_pairs[0].chain_id == 7
    assert [t.address for t in info.new_tokens] == [str(TOKEN_X)]
    assert info.new_tokens[0].chain_id == 7


def test_block_info_to_dict_is_json_ready():
    info = _build_block().get_kafka_message(chain_id=7)
    document = json.loads(json.dumps(info.to_dict()))
    assert document["Height"] == 42
    assert document["NativeTokenPrice"] == "1.5"
    assert [tx["TxHash"] for tx in document["Txs"]] == ["0xaa", "0xbb"]
    assert document["NewPairs"][0]["Address"] == str(PAIR_B)
    assert document["PoolUpdateParameters"][0]["PairAddress"] == "0x" + PAIR_A.value.hex()


def test_empty_block_info_dict():
    info = BlockInfo(height=1, timestamp=2, native_token_price="0")
    document = info.to_dict()
    assert document["Txs"] == []
    assert document["NewTokens"] == []
    assert document["PoolUpdates"] == []
    assert document["Timestamp"] == 2