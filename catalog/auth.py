# catalog/auth.py
"""
Static bearer-token check for every /api route.

Order of checks: header shape first (401), then server configuration (500),
then the token itself (401). Requests under /api that match no route go
through the same checks before they are told the route does not exist.
"""

import logging
import secrets
from typing import Optional

from fastapi import Header, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog.errors import AuthInvalid, AuthMissing, AuthNotConfigured, CatalogError, http_error_handler

API_PREFIX = "/api"

logger = logging.getLogger(__name__)


def extract_bearer_token(authorization: Optional[str]) -> str:
    parts = (authorization or "").split(" ")
    if len(parts) < 2 or parts[0] != "Bearer" or not parts[1]:
        raise AuthMissing()
    return parts[1]


def authenticate(request: Request, authorization: Optional[str]) -> None:
    token = extract_bearer_token(authorization)

    expected = request.app.state.settings.api_token
    if not expected:
        logger.error("API_TOKEN is not configured; rejecting %s", request.url.path)
        raise AuthNotConfigured()

    if not secrets.compare_digest(token.encode("utf-8"), expected.encode("utf-8")):
        logger.warning("Invalid token on %s %s", request.method, request.url.path)
        raise AuthInvalid()


def require_token(
    request: Request,
    authorization: Optional[str] = Header(default=None),
) -> None:
    authenticate(request, authorization)


def is_api_path(path: str) -> bool:
    return path == API_PREFIX or path.startswith(API_PREFIX + "/")


async def api_route_not_found(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    404 and 405 under /api both answer "Route not found", but only to callers
    holding the token; the rest get the same 401/500 as a matched route.
    """
    if exc.status_code not in (404, 405) or not is_api_path(request.url.path):
        return await http_error_handler(request, exc)

    try:
        authenticate(request, request.headers.get("authorization"))
    except CatalogError as auth_error:
        return JSONResponse(status_code=auth_error.status_code, content=auth_error.to_body())

    return JSONResponse(status_code=404, content={"error": "Route not found"})
