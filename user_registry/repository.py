from __future__ import annotations

import logging
import threading
from typing import Tuple

from user_registry.models import User, UserCollection, UserPatch
from user_registry.store import JsonUserStore

logger = logging.getLogger("user_registry.repository")


class UserRepository:
    """Thread-safe in-memory user collection backed by a :class:`JsonUserStore`.

    Every operation runs under one process-wide lock, including the write-through
    save in :meth:`update_by_email`. There is no transaction: if the save fails the
    in-memory change stays applied and is only persisted by the next successful save.
    """

    def __init__(self, collection: UserCollection, store: JsonUserStore):
        self._lock = threading.Lock()
        self._collection = collection
        self._store = store

    @classmethod
    def from_store(cls, store: JsonUserStore) -> "UserRepository":
        return cls(store.load(), store)

    def find_by_email(self, email: str) -> Tuple[User, bool]:
        with self._lock:
            for user in self._collection.users:
                if user.email == email:
                    return user.model_copy(), True
        return User(), False

    def update_by_email(self, email: str, patch: UserPatch) -> bool:
        """Apply the non-empty fields of ``patch`` to the user with ``email``.

        Returns False, without touching the store, when no user matches. Raises
        StoreIOError if the write-through save fails.
        """
        with self._lock:
            for user in self._collection.users:
                if user.email != email:
                    continue
                if patch.role:
                    user.role = patch.role
                if patch.name:
                    user.name = patch.name
                if patch.surname:
                    user.surname = patch.surname
                self._store.save(self._collection)
                logger.info("Updated user %s", email)
                return True
        return False

    def snapshot(self) -> UserCollection:
        with self._lock:
            return self._collection.model_copy(deep=True)
