# abscan

`abscan` holds the data model and storage services of a chain scanner that tracks
decentralised exchange pairs, the tokens they trade and the swaps and liquidity changes
made on them. It groups a block's decoded events and turns them into one message per
block for downstream consumers, and stores new tokens, pairs and transactions in an
SQLite database.

## Modules

- `abscan.address`: `Address`, a 20-byte account address. `Address.from_hex` parses
  hex text (with or without `0x`; longer input keeps its last 20 bytes, shorter input is
  left-padded), `to_checksum` gives the mixed-case checksummed form (also what `str()`
  returns), `is_zero` tests for the zero address. `ZERO_ADDRESS` and `is_same_address`
  are provided as well.
- `abscan.token`: the `Token` model with JSON round trips (`to_json` / `Token.from_json`),
  `equal`, and `to_orm_token(chain_id)`, which builds a normalised database row. The
  chain's base tokens are `WETH_ADDRESS` and `USDC_ADDRESS`, checked by `is_weth`,
  `is_usdc` and `is_base_token`.
- `abscan.pair`: `TokenCore`, `Pair`, `PairWrap` and `FilterCode`.
  `Pair.order_token0_token1` puts the base token on the token1 side (when both are base
  tokens, USDC goes first) and returns `tokens_reversed`.
  `filter_by_token0_and_token1` marks the pair filtered with `FilterCode.NO_BASE_TOKEN`
  when neither token is a base token. `to_orm_pair(chain_id)` builds the database row,
  with reserves scaled to the tokens' smallest units and a name made by `pair_name`
  (at most 64 + 1 + 63 characters).
- `abscan.protocol`: `ProtocolId` and `get_protocol_name`, which returns `"Unknown"` for
  identifiers it does not know.
- `abscan.pool_update`: `PoolUpdate` (with `equal`, amounts compared within 1e-12) and
  `PoolUpdateParameter`.
- `abscan.events`: `EventName`, the abstract `Event` interface, and `EventCommon`, a
  base class holding the fields shared by all events and giving neutral answers to every
  query. Concrete event kinds subclass it.
- `abscan.tx_result`: `TxPairEvent` files events by protocol; `TxResult` groups a
  transaction's events by pair address and sets their maker.
  `link_pair_created_and_mint_events` links the n-th pair-created event to the n-th mint
  event.
- `abscan.block_result`: `BlockResult` collects a block's `TxResult`s;
  `get_kafka_message(chain_id)` gathers transactions, new tokens, new pairs and pool
  updates into a `BlockInfo`, whose `to_dict` gives a JSON-ready form.
  `merge_pool_updates` keeps the update with the highest log index per pool;
  `merge_pool_update_parameters` keeps the last parameter per pair.
- `abscan.orm`: the row types `Action`, `Pair`, `Token` (with `normalize`, which fits
  name, symbol and total supply into their column limits) and `Tx`, each with `equal`.
- `abscan.repository`: `BaseRepository`, `TokenRepository`, `PairRepository` and
  `TxRepository` over a `sqlite3.Connection`. Tables are created on first use.
  `create_batch` inserts in chunks of 200 inside one transaction and skips rows that
  clash on the given conflict columns. Lookups raise `NotFoundError` when nothing
  matches.
- `abscan.db_service`: `DBService` with `add_tokens`, `add_pairs` and `add_txs`. Token
  and pair writes are switched off unless both their repositories are given; transaction
  writes are switched off without a transaction repository.
- `abscan.sequencer`: `Sequencer` commits values strictly in order of their `sequence`
  attribute, whichever thread delivers them. `init` sets the first sequence and raises
  `SequencerError` if called twice. A sequencer built with `enabled=False` commits at once.
- `abscan.unpacker`: `parse_string`, `parse_int`, `parse_big_int`, `parse_address` and
  `parse_bool` check and coerce already-decoded contract-call values, raising
  `UnpackError` on the wrong type. `is_retryable_error` treats reverted, out-of-gas and
  slice-marshalling failures as final and everything else as retryable.
- `abscan.version`: `get_version` returns an `Info` with the build stamps and the Python
  version.

## Example

```python
import sqlite3

from abscan.address import Address
from abscan.db_service import DBService
from abscan.pair import Pair, TokenCore
from abscan.repository import PairRepository, TokenRepository
from abscan.token import WETH_ADDRESS

pair = Pair(
    address=Address.from_hex("0x1234567890123456789012345678901234567890"),
    token0_core=TokenCore(address=WETH_ADDRESS, symbol="WETH", decimals=18),
    token1_core=TokenCore(
        address=Address.from_hex("0x00000000000000000000000000000000000000aa"),
        symbol="ABC",
        decimals=18,
    ),
)

reversed_ = pair.order_token0_token1()   # True: WETH now sits on the token1 side
restored = Pair.from_json(pair.to_json())
assert restored.equal(pair)

connection = sqlite3.connect(":memory:")
service = DBService(TokenRepository(connection, 1), PairRepository(connection, 1))
service.add_pairs([pair.to_orm_pair(1)])
print(PairRepository(connection, 1).get_by_address(str(pair.address)).name)  # ABC/WETH
```

## What it does not do

The package works on data that has already been fetched and decoded. It does not
connect to a chain node, call contracts, decode ABI-encoded call data or logs, publish
messages to a broker, fetch prices, or run a scanning loop, and it has no command-line
program. `BlockResult.get_kafka_message` only builds the `BlockInfo`; sending it is left
to the caller. Concrete swap, mint and pair-created events are to be written as
subclasses of `EventCommon`.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```