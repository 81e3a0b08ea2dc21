# errors.py
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    STORAGE_OPEN_FAILED = "storage_open_failed"
    STORAGE_CLOSE_FAILED = "storage_close_failed"
    QUERY_FAILED = "query_failed"
    PREPARE_FAILED = "prepare_failed"
    BIND_FAILED = "bind_failed"
    SCHEMA_ALREADY_EXISTS = "schema_already_exists"
    MISSING_FIELD = "missing_field"
    UNKNOWN_METHOD = "unknown_method"


class BookmarkError(Exception):
    """A terminal failure for the current request.

    `message` is what the visitor sees. `detail` carries the driver message
    for the logs only.
    """

    def __init__(self, kind: ErrorKind, message: str, field: Optional[str] = None,
                 detail: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.field = field
        self.detail = detail

    def with_message(self, message: str) -> "BookmarkError":
        return BookmarkError(self.kind, message, field=self.field, detail=self.detail)

    def __eq__(self, other):
        if not isinstance(other, BookmarkError):
            return NotImplemented
        return (self.kind, self.message, self.field) == (other.kind, other.message, other.field)

    def __hash__(self):
        return hash((self.kind, self.message, self.field))

    def __repr__(self):
        return f"BookmarkError({self.kind.name}, {self.message!r})"


def missing_field(name: str, message: str) -> BookmarkError:
    return BookmarkError(ErrorKind.MISSING_FIELD, message, field=name)


def unknown_method(method: str) -> BookmarkError:
    return BookmarkError(ErrorKind.UNKNOWN_METHOD, f"Unknown request '{method}'.")


@dataclass(frozen=True)
class Result:
    """Either a value or a BookmarkError, never both."""

    value: Any = None
    error: Optional[BookmarkError] = None

    @classmethod
    def ok(cls, value=None) -> "Result":
        return cls(value=value)

    @classmethod
    def fail(cls, error: BookmarkError) -> "Result":
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None
