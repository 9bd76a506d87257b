from __future__ import annotations

import datetime as dt
from http import HTTPStatus
from typing import Any, Iterable, Optional

from ..domain.book import Book
from ..domain.errors import CatalogError, ErrorKind

HTTP_STATUS_BY_KIND = {
    ErrorKind.CONNECTIVITY: 503,
    ErrorKind.PRECONDITION: 400,
    ErrorKind.TRANSACTION: 500,
    ErrorKind.STATEMENT: 500,
}


def status_text(code: int) -> str:
    return HTTPStatus(code).phrase


def status_for(err: CatalogError) -> int:
    return HTTP_STATUS_BY_KIND.get(err.kind, 500)


def build_envelope(
    books: Iterable[Book],
    total: int,
    status: str,
    error: Optional[str] = None,
    body: Optional[str] = None,
    now: Optional[dt.datetime] = None,
) -> dict[str, Any]:
    """
    Uniform response shape:
      books (omitted if empty), total_count, request_time, status,
      error {msg, body?} (omitted if absent)
    """
    ts = now or dt.datetime.now(dt.timezone.utc)
    out: dict[str, Any] = {}
    items = [b.to_dict() for b in books]
    if items:
        out["books"] = items
    out["total_count"] = total
    out["request_time"] = ts.isoformat()
    out["status"] = status
    if error is not None:
        err: dict[str, Any] = {"msg": error}
        if body:
            err["body"] = body
        out["error"] = err
    return out


def error_envelope(err: CatalogError, now: Optional[dt.datetime] = None) -> tuple[int, dict[str, Any]]:
    """Render a data-access failure; returns (http status, envelope)."""
    code = status_for(err)
    body = err.kind.value
    if err.rollback_error is not None:
        body = f"{body}; rollback failed: {err.rollback_error}"
    return code, build_envelope([], 0, status_text(code), error=err.msg, body=body, now=now)
