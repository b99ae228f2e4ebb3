# catalog/errors.py
"""
Error taxonomy for the catalog API and the handlers that render it as JSON.

Routes and helpers raise these exceptions; `install_error_handlers` maps each
one to its status code. Domain errors answer `{"message": ...}`, auth and
routing errors answer `{"error": ...}`, which is what the front end reads.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    status_code = 500
    body_key = "message"
    default_message = "Internal error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_body(self) -> Dict[str, Any]:
        return {self.body_key: self.message}


class InvalidInput(CatalogError):
    status_code = 400
    default_message = "Invalid input"


class ReferenceNotFound(CatalogError):
    status_code = 404
    default_message = "State UF does not exist"


class EntityNotFound(CatalogError):
    status_code = 404
    default_message = "Not found"


class DuplicateConflict(CatalogError):
    status_code = 409
    default_message = "City already exists in this state"


class StoreFailure(CatalogError):
    status_code = 500
    default_message = "Database error"


class AuthMissing(CatalogError):
    status_code = 401
    body_key = "error"
    default_message = "Token not provided"


class AuthInvalid(CatalogError):
    status_code = 401
    body_key = "error"
    default_message = "Invalid token"


class AuthNotConfigured(CatalogError):
    status_code = 500
    body_key = "error"
    default_message = "API_TOKEN is not configured on the server"


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    if isinstance(exc, StoreFailure):
        logger.error("%s %s: %s", request.method, request.url.path, exc.message,
                     exc_info=exc.__cause__ or exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = sorted({
        err["loc"][-1] for err in exc.errors()
        if err.get("loc") and isinstance(err["loc"][-1], str) and err["loc"][-1] != "body"
    })
    message = "invalid " + ", ".join(fields) if fields else InvalidInput.default_message
    return JSONResponse(status_code=400, content=InvalidInput(message).to_body())


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal error"})


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
