from __future__ import annotations

from contextlib import contextmanager
from sqlite3 import Connection
from typing import Iterator

from ..domain.book import Book
from ..domain.errors import (
    CatalogError,
    ConnectivityError,
    PreconditionError,
    StatementError,
    TransactionError,
)
from .store import Store, Transaction

INSERT_BOOK = "INSERT INTO books(author, title, description, isbn) VALUES(?, ?, ?, ?) RETURNING id"
DELETE_BOOK = "DELETE FROM books WHERE id=?"


def ensure_schema(conn: Connection):
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS books (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            author TEXT NOT NULL,
            title TEXT NOT NULL,
            description TEXT NOT NULL DEFAULT '',
            isbn TEXT NOT NULL DEFAULT ''
        )
        """
    )


@contextmanager
def transaction(store: Store) -> Iterator[Transaction]:
    """
    Run the body inside one store transaction.

    Commit when the body finishes, roll back when it raises. Exactly one of
    commit/rollback happens; a failed commit is not followed by a rollback.
    Store exceptions from the body are re-raised as StatementError. If the
    rollback fails too, the body's error is still the one raised and the
    rollback failure is attached as ``rollback_error``.
    """
    try:
        tx = store.begin()
    except Exception as e:
        raise TransactionError(f"begin transaction: {e}", phase="begin", cause=e) from e

    try:
        yield tx
    except CatalogError as err:
        _rollback(tx, err)
        raise
    except Exception as e:
        err = StatementError(str(e), cause=e)
        _rollback(tx, err)
        raise err from e

    try:
        tx.commit()
    except Exception as e:
        raise TransactionError(f"commit transaction: {e}", phase="commit", cause=e) from e


def _rollback(tx: Transaction, err: CatalogError) -> None:
    try:
        tx.rollback()
    except Exception as rb:
        err.rollback_error = rb


def check_health(store: Store) -> None:
    try:
        store.ping()
    except Exception as e:
        raise ConnectivityError(str(e), cause=e) from e


def create_book(store: Store, book: Book) -> Book:
    """Insert ``book`` and set its id from the store. ``book.id`` on input is ignored."""
    with transaction(store) as tx:
        row = tx.query_one(INSERT_BOOK, (book.author, book.title, book.description, book.isbn))
        if row is None:
            raise StatementError("insert did not return an id")
        new_id = int(row[0])
        if new_id <= 0:
            raise StatementError(f"insert returned invalid id {new_id}")
    book.id = new_id
    return book


def require_persisted(book: Book) -> None:
    """Reject a book that was never stored, before any store call is made."""
    if not book.persisted:
        raise PreconditionError("cannot delete book with ID of 0")


def delete_book(store: Store, book: Book) -> None:
    """
    Delete ``book`` by id. Succeeds even when no row has that id; the number
    of affected rows is not checked.
    """
    require_persisted(book)

    with transaction(store) as tx:
        tx.execute(DELETE_BOOK, (book.id,))
