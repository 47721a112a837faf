"""Persistence of token, pair and transaction rows in a SQL database."""

from __future__ import annotations

import sqlite3
import types
import typing
import uuid
from dataclasses import fields
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Generic, Iterable, List, Sequence, Tuple, Type, TypeVar, Union

from abscan import orm

MAX_BATCH_SIZE = 200

T = TypeVar("T")

_NAMED_KINDS: Dict[str, Any] = {
    "UUID": uuid.UUID,
    "Decimal": Decimal,
    "datetime": datetime,
    "int": int,
    "bool": bool,
    "str": str,
}


class NotFoundError(LookupError):
    """Raised when no row matches a lookup."""


def _quote(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def _kind(hint: Any) -> Any:
    """Reduce a field's type, given as a type or as annotation text, to a column kind."""
    if isinstance(hint, str):
        text = hint.replace(" ", "")
        if text.startswith("Optional[") and text.endswith("]"):
            text = text[len("Optional[") : -1]
        parts = [part for part in text.split("|") if part != "None"]
        if len(parts) == 1:
            text = parts[0]
        return _NAMED_KINDS.get(text.rsplit(".", 1)[-1], str)
    origin = typing.get_origin(hint)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        if len(args) == 1:
            hint = args[0]
    return hint if hint in _NAMED_KINDS.values() else str


def _encode(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, str)):
        return value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    raise TypeError(f"cannot store value of type {type(value).__name__}")


def _decode(kind: Any, raw: Any) -> Any:
    if raw is None:
        return None
    if kind is uuid.UUID:
        return uuid.UUID(raw)
    if kind is Decimal:
        return Decimal(raw)
    if kind is datetime:
        return datetime.fromisoformat(raw)
    if kind is bool:
        return bool(raw)
    if kind is int:
        return int(raw)
    return str(raw)


class BaseRepository(Generic[T]):
    """Row storage for one model class in one table."""

    def __init__(
        self,
        connection: sqlite3.Connection,
        model: Type[T],
        unique_columns: Sequence[str] = (),
    ) -> None:
        self._connection = connection
        self._model = model
        self._table: str = getattr(model, "table_name")
        self._columns: Dict[str, Any] = {f.name: _kind(f.type) for f in fields(model)}
        self._unique_columns = tuple(unique_columns)
        self._check_columns(self._unique_columns)
        self._ensure_table()

    def _check_columns(self, columns: Iterable[str]) -> None:
        for column in columns:
            if column not in self._columns:
                raise ValueError(f"unknown column {column!r} for table {self._table!r}")

    def _ensure_table(self) -> None:
        definitions = []
        for name, kind in self._columns.items():
            sql_type = "INTEGER" if kind in (int, bool) else "TEXT"
            suffix = " PRIMARY KEY" if name == "id" else ""
            definitions.append(f"{_quote(name)} {sql_type}{suffix}")
        with self._connection:
            self._connection.execute(
                f"CREATE TABLE IF NOT EXISTS {_quote(self._table)} "
                f"({', '.join(definitions)})"
            )
            if self._unique_columns:
                self._connection.execute(
                    f"CREATE UNIQUE INDEX IF NOT EXISTS {_quote('ux_' + self._table)} "
                    f"ON {_quote(self._table)} "
                    f"({', '.join(_quote(c) for c in self._unique_columns)})"
                )

    def _prepare(self, entity: T) -> Tuple[Any, ...]:
        """Fill generated fields on the entity and return its column values."""
        if "id" in self._columns and getattr(entity, "id") is None:
            setattr(entity, "id", uuid.uuid4())
        if "created_at" in self._columns and getattr(entity, "created_at") is None:
            setattr(entity, "created_at", datetime.now(timezone.utc))
        return tuple(_encode(getattr(entity, name)) for name in self._columns)

    def _insert_sql(self, conflict_columns: Sequence[str] = ()) -> str:
        names = ", ".join(_quote(name) for name in self._columns)
        marks = ", ".join("?" for _ in self._columns)
        sql = f"INSERT INTO {_quote(self._table)} ({names}) VALUES ({marks})"
        if conflict_columns:
            targets = ", ".join(_quote(c) for c in conflict_columns)
            sql += f" ON CONFLICT ({targets}) DO NOTHING"
        return sql

    def _select_one(self, where: str, params: Sequence[Any]) -> T:
        names = ", ".join(_quote(name) for name in self._columns)
        row = self._connection.execute(
            f"SELECT {names} FROM {_quote(self._table)} WHERE {where} LIMIT 1",
            tuple(params),
        ).fetchone()
        if row is None:
            raise NotFoundError(f"record not found in {self._table}")
        values = {
            name: _decode(kind, raw)
            for (name, kind), raw in zip(self._columns.items(), row)
        }
        return self._model(**values)

    def _execute(self, sql: str, params: Sequence[Any]) -> None:
        with self._connection:
            self._connection.execute(sql, tuple(params))

    def create(self, entity: T) -> None:
        """Insert one row; generated id and creation time are set on the entity."""
        row = self._prepare(entity)
        self._execute(self._insert_sql(), row)

    def create_batch(self, entities: Sequence[T], *args: str) -> None:
        """Insert rows in chunks inside one transaction.

        args name the conflict columns; rows clashing on them are skipped.
        Any other failure rolls back the whole batch.
        """
        self._check_columns(args)
        sql = self._insert_sql(args)
        items: List[T] = list(entities)
        with self._connection:
            for start in range(0, len(items), MAX_BATCH_SIZE):
                chunk = items[start : start + MAX_BATCH_SIZE]
                self._connection.executemany(sql, [self._prepare(e) for e in chunk])


def _where(*columns: str) -> str:
    return " AND ".join(f"{_quote(column)} = ?" for column in columns)


class TokenRepository(BaseRepository[orm.Token]):
    """Token rows of one chain."""

    def __init__(self, connection: sqlite3.Connection, chain_id: int) -> None:
        super().__init__(connection, orm.Token, ("address", "chain_id"))
        self.chain_id = chain_id

    def get_by_address(self, address: str) -> orm.Token:
        return self._select_one(_where("address", "chain_id"), (address, self.chain_id))

    def update_main_pair(self, address: str, main_pair: str) -> None:
        self._execute(
            f"UPDATE {_quote(self._table)} SET {_quote('main_pair')} = ? "
            f"WHERE {_where('address', 'chain_id')}",
            (main_pair, address, self.chain_id),
        )

    def delete_by_address(self, address: str) -> None:
        self._execute(
            f"DELETE FROM {_quote(self._table)} WHERE {_where('address', 'chain_id')}",
            (address, self.chain_id),
        )


class PairRepository(BaseRepository[orm.Pair]):
    """Pair rows of one chain."""

    def __init__(self, connection: sqlite3.Connection, chain_id: int) -> None:
        super().__init__(connection, orm.Pair, ("address", "chain_id"))
        self.chain_id = chain_id

    def get_by_address(self, address: str) -> orm.Pair:
        return self._select_one(_where("address", "chain_id"), (address, self.chain_id))

    def delete_by_address(self, address: str) -> None:
        self._execute(
            f"DELETE FROM {_quote(self._table)} WHERE {_where('address', 'chain_id')}",
            (address, self.chain_id),
        )


TX_UNIQUE_COLUMNS = ("token0_address", "block", "block_index", "tx_index")


class TxRepository(BaseRepository[orm.Tx]):
    """Transaction rows."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        super().__init__(connection, orm.Tx, TX_UNIQUE_COLUMNS)

    def get_by_unique_index(
        self, token0_address: str, block: int, block_index: int, tx_index: int
    ) -> orm.Tx:
        return self._select_one(
            _where(*TX_UNIQUE_COLUMNS), (token0_address, block, block_index, tx_index)
        )

    def delete_by_id(self, tx_id: Union[str, uuid.UUID]) -> None:
        self._execute(
            f"DELETE FROM {_quote(self._table)} WHERE {_where('id')}", (str(tx_id),)
        )