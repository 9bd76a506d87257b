from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..domain.errors import CatalogError
from ..services.book_svc import check_health
from ..services.envelope import build_envelope, error_envelope, status_text

APP_NAME = "book-catalog-api"
APP_VERSION = "0.1.0"

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
def health():
    try:
        check_health()
    except CatalogError as e:
        logger.error("health probe failed: %s", e)
        code, env = error_envelope(e)
        return JSONResponse(status_code=code, content=env)
    return build_envelope([], 0, status_text(200))


@router.get("/version")
def version():
    return {"app": APP_NAME, "version": APP_VERSION}
