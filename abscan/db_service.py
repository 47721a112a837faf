"""Batch storage of new tokens, pairs and transactions."""

from __future__ import annotations

from typing import Optional, Sequence

from abscan import orm
from abscan.repository import (
    TX_UNIQUE_COLUMNS,
    PairRepository,
    TokenRepository,
    TxRepository,
)


class DBService:
    """Writes rows through the repositories it was given; missing ones disable writes."""

    def __init__(
        self,
        token_repository: Optional[TokenRepository] = None,
        pair_repository: Optional[PairRepository] = None,
        tx_repository: Optional[TxRepository] = None,
    ) -> None:
        self._token_repository = token_repository
        self._pair_repository = pair_repository
        self._tx_repository = tx_repository
        self.enable_token_pair = (
            token_repository is not None and pair_repository is not None
        )
        self.enable_tx = tx_repository is not None

    def add_tokens(self, tokens: Sequence[orm.Token]) -> None:
        if not self.enable_token_pair or self._token_repository is None:
            return
        self._token_repository.create_batch(tokens, "address", "chain_id")

    def add_pairs(self, pairs: Sequence[orm.Pair]) -> None:
        if not self.enable_token_pair or self._pair_repository is None:
            return
        self._pair_repository.create_batch(pairs, "address", "chain_id")

    def add_txs(self, txs: Sequence[orm.Tx]) -> None:
        if not self.enable_tx or self._tx_repository is None:
            return
        self._tx_repository.create_batch(txs, *TX_UNIQUE_COLUMNS)