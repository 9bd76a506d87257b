"""
Failure classes raised by the data-access layer.

Every error carries an ``ErrorKind`` so the HTTP layer can branch on the
failure class without looking at message text.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    CONNECTIVITY = "connectivity"
    PRECONDITION = "precondition"
    TRANSACTION = "transaction"
    STATEMENT = "statement"


class CatalogError(Exception):
    """Base class. ``cause`` is the store exception that triggered it, if any."""

    kind: ErrorKind = ErrorKind.STATEMENT

    def __init__(self, msg: str, cause: Optional[BaseException] = None):
        super().__init__(msg)
        self.msg = msg
        self.cause = cause
        # set when the rollback issued after this error failed as well
        self.rollback_error: Optional[BaseException] = None


class ConnectivityError(CatalogError):
    """Store unreachable or health probe failed."""
    kind = ErrorKind.CONNECTIVITY


class PreconditionError(CatalogError):
    """Caller supplied an invalid input, nothing was sent to the store."""
    kind = ErrorKind.PRECONDITION


class TransactionError(CatalogError):
    """Begin or commit failed. ``phase`` is "begin" or "commit"."""
    kind = ErrorKind.TRANSACTION

    def __init__(self, msg: str, phase: str, cause: Optional[BaseException] = None):
        super().__init__(msg, cause)
        self.phase = phase


class StatementError(CatalogError):
    """Insert/delete statement failed, constraint violations included."""
    kind = ErrorKind.STATEMENT
