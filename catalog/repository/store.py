"""
Store handle used by the repository layer.

``Store`` / ``Transaction`` describe the capability the data-access code needs;
``SQLiteStore`` satisfies them over a ``sqlite3`` autocommit connection, and
tests substitute an in-memory fake.
"""
from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Protocol, Sequence

from ..db import connect
from ..domain.errors import ConnectivityError

Params = Sequence[Any]


class Transaction(Protocol):
    def execute(self, sql: str, params: Params = ()) -> None: ...
    def query_one(self, sql: str, params: Params = ()) -> Optional[Any]: ...
    def commit(self) -> None: ...
    def rollback(self) -> None: ...


class Store(Protocol):
    def execute(self, sql: str, params: Params = ()) -> None: ...
    def query_one(self, sql: str, params: Params = ()) -> Optional[Any]: ...
    def query_many(self, sql: str, params: Params = ()) -> list[Any]: ...
    def begin(self) -> Transaction: ...
    def ping(self) -> None: ...


def _first(cur: sqlite3.Cursor) -> Optional[sqlite3.Row]:
    # drain the cursor so an INSERT ... RETURNING statement is finished before COMMIT
    rows = cur.fetchall()
    return rows[0] if rows else None


class SQLiteTransaction:
    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def execute(self, sql: str, params: Params = ()) -> None:
        self._conn.execute(sql, tuple(params))

    def query_one(self, sql: str, params: Params = ()) -> Optional[sqlite3.Row]:
        return _first(self._conn.execute(sql, tuple(params)))

    def commit(self) -> None:
        self._conn.execute("COMMIT")

    def rollback(self) -> None:
        self._conn.execute("ROLLBACK")


class SQLiteStore:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def execute(self, sql: str, params: Params = ()) -> None:
        self.conn.execute(sql, tuple(params))

    def query_one(self, sql: str, params: Params = ()) -> Optional[sqlite3.Row]:
        return _first(self.conn.execute(sql, tuple(params)))

    def query_many(self, sql: str, params: Params = ()) -> list[sqlite3.Row]:
        return self.conn.execute(sql, tuple(params)).fetchall()

    def begin(self) -> SQLiteTransaction:
        self.conn.execute("BEGIN")
        return SQLiteTransaction(self.conn)

    def ping(self) -> None:
        self.conn.execute("SELECT 1").fetchone()


@contextmanager
def open_store(db_path: str | None = None) -> Iterator[SQLiteStore]:
    """Open a connection for one request; failure to connect is a connectivity error."""
    try:
        conn = connect(db_path)
    except (sqlite3.Error, OSError) as e:
        raise ConnectivityError(f"cannot open store: {e}", cause=e) from e
    try:
        yield SQLiteStore(conn)
    finally:
        conn.close()
