import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from abscan.address import ZERO_ADDRESS, Address
from abscan.token import (
    USDC,
    USDC_ADDRESS,
    WETH,
    WETH_ADDRESS,
    Token,
    is_base_token,
    is_usdc,
    is_weth,
)

TEST_ADDRESS = Address.from_hex("0xE76004cFFcAb665C4692F663B8FB2A2F66AdDa9B")


@pytest.fixture
def sample():
    return Token(
        address=TEST_ADDRESS,
        creator=TEST_ADDRESS,
        name="test",
        symbol="test",
        decimals=18,
        total_supply=Decimal(1),
        block_number=1,
        block_time=datetime.fromtimestamp(1000, tz=timezone.utc),
        program="test",
    )


def test_token_marshal_binary_round_trip(sample):
    data = sample.to_json()
    restored = Token.from_json(data)
    assert sample.equal(restored)
    assert restored.block_time == sample.block_time
    assert restored.total_supply == Decimal(1)


def test_json_uses_hex_addresses(sample):
    document = json.loads(sample.to_json())
    assert document["Address"].lower() == "0xE76004cFFcAb665C4692F663B8FB2A2F66AdDa9B".lower()
    assert document["Creator"] == document["Address"]
    assert document["TotalSupply"] == "1"
    assert document["Timestamp"] == "0001-01-01T00:00:00Z"


def test_from_json_missing_fields():
    empty_document = "{}"
    parsed = Token.from_json(empty_document)
    assert parsed.address == ZERO_ADDRESS
    assert parsed.block_time is None
    assert parsed.total_supply == Decimal(0)


def test_equal_detects_difference(sample):
    other = Token.from_json(sample.to_json())
    other.symbol = "other"
    assert not sample.equal(other)


def test_base_tokens():
    assert is_weth(Address.from_hex(WETH))
    assert is_usdc(Address.from_hex(USDC))
    assert is_base_token(WETH_ADDRESS)
    assert is_base_token(USDC_ADDRESS)
    assert not is_weth(USDC_ADDRESS)
    assert not is_base_token(TEST_ADDRESS)


def test_to_orm_token(sample):
    row = sample.to_orm_token(chain_id=1012)
    assert row.address == TEST_ADDRESS.to_checksum()
    assert row.creator == TEST_ADDRESS.to_checksum()
    assert row.chain_id == 1012
    assert row.decimal == 18
    assert row.total_supply == "1"
    assert row.block == 1
    assert row.program == "test"


def test_to_orm_token_zero_creator_and_normalize():
    long_name = "x" * 80
    entry = Token(address=TEST_ADDRESS, name=long_name, total_supply=Decimal("1.50"))
    row = entry.to_orm_token(chain_id=1)
    assert row.creator == ""
    assert len(row.name) == 64
    assert row.total_supply == "1.5"


def test_to_orm_token_huge_supply_reset():
    huge_supply = Decimal("9" * 70)
    entry = Token(address=TEST_ADDRESS, total_supply=huge_supply)
    assert entry.to_orm_token(chain_id=1).total_supply == "0"