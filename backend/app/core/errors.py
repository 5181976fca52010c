"""
Application error taxonomy and the FastAPI handlers that render it.

Every error raised by a service is a LifeVaultError subclass carrying its
HTTP status; routers let them propagate and the handlers registered in
create_app() turn them into a uniform JSON body:

    {"success": false, "error": "validation_error", "message": "...", "errors": [...]}
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class LifeVaultError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"
    default_message: str = "Something went wrong"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "error": self.code,
            "message": self.message,
        }


class ValidationError(LifeVaultError):
    """Missing or malformed input. Carries field-level detail."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"
    default_message = "Invalid input"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(f"{field}: {message}", errors=[{"field": field, "message": message}])

    @property
    def fields(self) -> List[str]:
        return [e["field"] for e in self.errors]

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["errors"] = self.errors
        return body


class UnauthorizedError(LifeVaultError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthorized"
    default_message = "Authentication required"


class ForbiddenError(LifeVaultError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    default_message = "Insufficient permissions"


class NotFoundError(LifeVaultError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Not found"


class ConflictError(LifeVaultError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"
    default_message = "Resource already exists"


class InternalError(LifeVaultError):
    """Datastore or other server-side failure. Never exposes internals."""


def _field_name(loc) -> str:
    """Turn a pydantic error location into a dotted field name, dropping 'body'."""
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or "body"


def from_pydantic_errors(errors) -> ValidationError:
    """Build a ValidationError from pydantic's errors() list."""
    details = [
        {"field": _field_name(err.get("loc", ())), "message": err.get("msg", "Invalid value")}
        for err in errors
    ]
    summary = "; ".join(f"{d['field']}: {d['message']}" for d in details)
    return ValidationError(summary or None, errors=details)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error handlers to the application."""

    @app.exception_handler(LifeVaultError)
    async def lifevault_error_handler(request: Request, exc: LifeVaultError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        elif exc.status_code in (401, 403):
            logger.warning(f"{request.method} {request.url.path} denied: {exc.message}")
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        error = from_pydantic_errors(exc.errors())
        logger.warning(f"{request.method} {request.url.path} rejected: {error.message}")
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(SQLAlchemyError)
    async def datastore_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Datastore error on {request.method} {request.url.path}: {exc}", exc_info=True)
        error = InternalError()
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
        error = InternalError()
        return JSONResponse(status_code=error.status_code, content=error.to_dict())
