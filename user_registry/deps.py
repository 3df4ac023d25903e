from __future__ import annotations

from fastapi import Request

from user_registry.repository import UserRepository


def get_repository(request: Request) -> UserRepository:
    """FastAPI dependency for the repository bound by ``create_app``.

    Tests can swap it with ``app.dependency_overrides``.
    """
    return request.app.state.repository
