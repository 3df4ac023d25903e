from __future__ import annotations


class UserRegistryError(Exception):
    """Base class for errors raised by the user registry."""


class StoreError(UserRegistryError):
    def __init__(self, message: str, *, path: str | None = None):
        super().__init__(message)
        self.path = path


class StoreIOError(StoreError):
    """Reading or writing the backing file failed."""


class StoreDecodeError(StoreError):
    """The backing file exists but does not hold a valid user collection."""


class RequestDecodeError(UserRegistryError):
    """A request body could not be read or parsed."""


class UserNotFoundError(UserRegistryError):
    def __init__(self, email: str):
        super().__init__(f"User not found: {email}")
        self.email = email
