"""FastAPI application exposing the user lookup and update endpoints."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from user_registry.errors import RequestDecodeError, StoreIOError, UserNotFoundError
from user_registry.repository import UserRepository
from user_registry.routers.users import router as users_router
from user_registry.settings import Settings, get_settings
from user_registry.store import JsonUserStore

logger = logging.getLogger("user_registry")

APP_VERSION = "1.0.0"

NOT_FOUND_MESSAGE = "User not found. Only authorized users can be updated."


def create_app(
    *,
    repository: Optional[UserRepository] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the ASGI app around ``repository``.

    When no repository is given one is loaded from ``settings.db_path``; load
    failures propagate so the caller can refuse to serve.
    """
    if repository is None:
        settings = settings or get_settings()
        repository = UserRepository.from_store(JsonUserStore(settings.db_path))

    app = FastAPI(title="User Registry", version=APP_VERSION, docs_url=None, redoc_url=None, openapi_url=None)
    app.state.repository = repository
    app.include_router(users_router)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(_: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            message = "Method not allowed"
        else:
            message = str(exc.detail)
        return PlainTextResponse(message, status_code=exc.status_code, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestDecodeError)
    async def handle_bad_body(request: Request, exc: RequestDecodeError):
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
        return PlainTextResponse(str(exc), status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(UserNotFoundError)
    async def handle_not_found(_: Request, exc: UserNotFoundError):
        logger.warning("Update rejected for unknown user %s", exc.email)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"status": "error", "message": NOT_FOUND_MESSAGE},
        )

    @app.exception_handler(StoreIOError)
    async def handle_save_error(_: Request, exc: StoreIOError):
        logger.error("Error saving database", exc_info=exc)
        return PlainTextResponse("Error saving database", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return app


__all__ = ["APP_VERSION", "NOT_FOUND_MESSAGE", "create_app"]
