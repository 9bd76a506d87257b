from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..domain.errors import CatalogError
from ..logs import LogContext
from ..services.book_svc import create_book, delete_book
from ..services.envelope import build_envelope, error_envelope, status_text

logger = logging.getLogger(__name__)

router = APIRouter()


class BookCreate(BaseModel):
    author: str
    title: str
    description: str = ""
    isbn: str = ""


def _failure(log: LogContext, e: CatalogError) -> JSONResponse:
    logger.error("%s failed (%s): %s", log.action, e.kind.value, e)
    log.write("ERROR", str(e))
    code, env = error_envelope(e)
    return JSONResponse(status_code=code, content=env)


@router.post("/api/books", status_code=201)
def api_book_create(body: BookCreate):
    log = LogContext("CREATE_BOOK")
    log.set_payload(body.model_dump())
    try:
        book = create_book(body.model_dump(), log)
    except CatalogError as e:
        return _failure(log, e)
    log.write("OK")
    return build_envelope([book], 1, status_text(201))


@router.delete("/api/books/{book_id}")
def api_book_delete(book_id: int):
    log = LogContext("DELETE_BOOK")
    log.set_payload({"id": book_id})
    try:
        delete_book(book_id, log)
    except CatalogError as e:
        return _failure(log, e)
    log.write("OK")
    return build_envelope([], 0, status_text(200))
