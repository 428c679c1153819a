from __future__ import annotations


class LinkpageError(Exception):
    """Base class for every error raised by linkpage itself."""


class NetworkError(LinkpageError):
    """A persistence request did not complete (transport failure or non-2xx answer)."""

    def __init__(self, message: str, *, status_code: int | None = None, operation: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.operation = operation


class ProfileNotFoundError(LinkpageError):
    def __init__(self, username: str):
        super().__init__(f"Profile not found: {username}")
        self.username = username


class ValidationError(LinkpageError, ValueError):
    def __init__(self, errors: list[str] | str):
        if isinstance(errors, str):
            errors = [errors]
        super().__init__("; ".join(errors))
        self.errors = list(errors)


class OutOfRangeError(LinkpageError, IndexError):
    def __init__(self, index: int, size: int):
        super().__init__(f"Index {index} out of range for collection of {size} links")
        self.index = index
        self.size = size


class PresetNotFoundError(LinkpageError, LookupError):
    def __init__(self, family: str, name: str):
        super().__init__(f"Unknown preset {name!r} in family {family!r}")
        self.family = family
        self.name = name
