"""
Error translation.

Maps SQLAlchemy errors to HTTP responses and provides the HTTPException
builders shared by the services. Every error body has the shape
{"detail": {"code": ..., "message": ...}}.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError

from taskforge.core.config import settings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Builders used by services
# ---------------------------------------------------------------------------

def not_found(entity: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"code": f"{entity.upper()}_NOT_FOUND", "message": f"Such {entity} does not exist"},
    )


def forbidden(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail={"code": "FORBIDDEN", "message": message},
    )


def bad_request(code: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"code": code, "message": message},
    )


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

def _error(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": {"code": code, "message": message}},
    )


async def no_result_handler(request: Request, exc: NoResultFound) -> JSONResponse:
    logger.info("No row found for %s %s", request.method, request.url.path)
    return _error(status.HTTP_404_NOT_FOUND, "NOT_FOUND", "Requested record does not exist")


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("Constraint violation on %s %s: %s", request.method, request.url.path, exc.orig)
    return _error(
        status.HTTP_400_BAD_REQUEST,
        "CONSTRAINT_VIOLATION",
        "Record conflicts with existing data or is still referenced",
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "DATABASE_ERROR",
        "Unhandled database exception",
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    if settings.DEBUG:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": {
                    "code": "INTERNAL_SERVER_ERROR",
                    "message": str(exc),
                    "type": type(exc).__name__,
                }
            },
        )
    return _error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers; more specific SQLAlchemy errors first."""
    app.add_exception_handler(NoResultFound, no_result_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
