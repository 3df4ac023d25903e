from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool
from starlette.requests import ClientDisconnect

from user_registry.deps import get_repository
from user_registry.errors import RequestDecodeError, UserNotFoundError
from user_registry.models import User, UserPatch
from user_registry.repository import UserRepository

logger = logging.getLogger("user_registry.routers.users")

router = APIRouter(tags=["users"])


async def _read_user(request: Request) -> User:
    # Bodies are decoded by hand so malformed JSON is a plain-text 400, not FastAPI's 422.
    try:
        raw = await request.body()
    except ClientDisconnect as e:
        raise RequestDecodeError("Error reading request body") from e
    if raw.strip() == b"null":
        # A JSON null decodes to an empty user, which matches nobody.
        return User()
    try:
        return User.model_validate_json(raw)
    except ValidationError as e:
        raise RequestDecodeError("Error parsing JSON") from e


@router.post("/authenticate")
async def authenticate(
    request: Request,
    repository: UserRepository = Depends(get_repository),
) -> JSONResponse:
    """Report whether a user with the given email exists.

    Accepts:
      {"email": "a@x.com", ...}

    Returns the full stored record when it does. Nothing guards this endpoint.
    """
    payload = await _read_user(request)
    existing, found = await run_in_threadpool(repository.find_by_email, payload.email)
    if found:
        return JSONResponse({"status": "success", "exists": True, "user": existing.to_wire()})
    return JSONResponse({"status": "success", "exists": False})


@router.put("/update")
async def update_user(
    request: Request,
    repository: UserRepository = Depends(get_repository),
) -> JSONResponse:
    """Overwrite name/surname/role on an existing user.

    Accepts:
      {"email": "a@x.com", "name": "...", "surname": "...", "role": "..."}

    Empty or missing fields are left unchanged. Unknown emails are never created.
    """
    payload = await _read_user(request)
    found = await run_in_threadpool(repository.update_by_email, payload.email, UserPatch.from_user(payload))
    if not found:
        raise UserNotFoundError(payload.email)
    return JSONResponse({"status": "success"})
