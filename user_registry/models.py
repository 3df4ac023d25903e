from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class User(BaseModel):
    """One account record, as stored on disk and returned on the wire."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    email: str = ""
    name: str = ""
    surname: str = ""
    # Opaque timestamp string; never parsed.
    created_at: str = Field(default="", alias="createdAt")
    role: str = ""

    @field_validator("email", "name", "surname", "created_at", "role", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_wire(self) -> dict[str, str]:
        # email is always present; empty optional fields are omitted.
        data = self.model_dump(by_alias=True)
        return {key: value for key, value in data.items() if key == "email" or value}


class UserPatch(BaseModel):
    """Fields an update may overwrite. Empty strings mean "leave unchanged"."""

    name: str = ""
    surname: str = ""
    role: str = ""

    @classmethod
    def from_user(cls, user: User) -> "UserPatch":
        return cls(name=user.name, surname=user.surname, role=user.role)


class UserCollection(BaseModel):
    users: list[User] = Field(default_factory=list)

    @field_validator("users", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            return [{} if item is None else item for item in value]
        return value

    def to_wire(self) -> dict[str, Any]:
        return {"users": [u.to_wire() for u in self.users]}
