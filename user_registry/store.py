from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from user_registry.errors import StoreDecodeError, StoreIOError
from user_registry.models import UserCollection

logger = logging.getLogger("user_registry.store")


class JsonUserStore:
    """Single-file JSON persistence for the user collection.

    File layout::

        {
          "users": [
            {"email": "...", "name": "...", "surname": "...", "createdAt": "...", "role": "..."}
          ]
        }

    ``save`` overwrites the file in place (no temp file + rename). A crash in the
    middle of a write can leave a truncated file behind; callers accept that.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> UserCollection:
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            logger.info("No user store at %s, creating an empty one", self._path)
            collection = UserCollection()
            self.save(collection)
            return collection
        except OSError as e:
            raise StoreIOError(f"Failed to read {self._path}: {e}", path=str(self._path)) from e

        try:
            data = json.loads(raw)
            collection = UserCollection.model_validate(data if data is not None else {})
        except (ValueError, ValidationError) as e:
            # json.JSONDecodeError and UnicodeDecodeError are both ValueErrors.
            raise StoreDecodeError(f"Malformed user store {self._path}: {e}", path=str(self._path)) from e

        logger.info("Loaded %d user(s) from %s", len(collection.users), self._path)
        return collection

    def save(self, collection: UserCollection) -> None:
        text = json.dumps(collection.to_wire(), indent=2, ensure_ascii=False)
        try:
            self._path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise StoreIOError(f"Failed to write {self._path}: {e}", path=str(self._path)) from e
