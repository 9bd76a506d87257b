from __future__ import annotations

import logging

from ..db import get_conn
from ..domain.book import Book
from ..logs import LogContext
from ..repository import book_repo
from ..repository.store import open_store

logger = logging.getLogger(__name__)


def ensure_book_schema():
    with get_conn() as conn:
        book_repo.ensure_schema(conn)


def check_health() -> None:
    with open_store() as store:
        book_repo.check_health(store)


def create_book(data: dict, log: LogContext) -> Book:
    book = Book.from_dict({**data, "id": 0})
    with open_store() as store:
        book_repo.create_book(store, book)
    logger.info("book created id=%s isbn=%s", book.id, book.isbn)
    log.set_entity("BOOK", f"{book.id}")
    log.set_after(book.to_dict())
    return book


def delete_book(book_id: int, log: LogContext) -> Book:
    book = Book(id=book_id)
    log.set_entity("BOOK", f"{book_id}")
    # id 0 is refused without opening a connection
    book_repo.require_persisted(book)
    with open_store() as store:
        book_repo.delete_book(store, book)
    logger.info("book deleted id=%s", book_id)
    return book
