"""
FastAPI app entry point aggregating the routers under catalog/routes.
Keep as `uvicorn catalog.api:app`.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .logs import ensure_log_schema
from .services.book_svc import ensure_book_schema
from .services.envelope import build_envelope, status_text

logger = logging.getLogger(__name__)

app = FastAPI(title="book-catalog-api", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    ensure_book_schema()
    ensure_log_schema()


@app.exception_handler(RequestValidationError)
def on_validation_error(request: Request, exc: RequestValidationError):
    # malformed request bodies get the same envelope as data-access failures
    errs = exc.errors()
    msg = "; ".join(
        f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg')}" for e in errs
    ) or "invalid request"
    logger.info("rejected request %s %s: %s", request.method, request.url.path, msg)
    return JSONResponse(
        status_code=422,
        content=build_envelope([], 0, status_text(422), error=msg, body="validation"),
    )


# Include routers
from .routes import base as base_routes
from .routes import books as books_routes
from .routes import logs as logs_routes

app.include_router(base_routes.router)
app.include_router(books_routes.router)
app.include_router(logs_routes.router)
