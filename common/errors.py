"""Common error types raised by the temporary file helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, MutableMapping


@dataclass(slots=True)
class TemporaryFileError(Exception):
    """Base error with a serialisable payload."""

    message: str
    code: str = "temporary_file_error"
    details: Mapping[str, Any] | None = None

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Mapping[str, Any]:
        payload: MutableMapping[str, Any] = {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details or {}),
        }
        return payload


@dataclass(slots=True)
class NotOpenError(TemporaryFileError):
    """Raised when an operation needs a handle but the file is closed."""

    code: str = "not_open"


def ensure_temporary_file_error(
    error: TemporaryFileError | Exception, *, fallback_code: str
) -> TemporaryFileError:
    """Coerce arbitrary exceptions into :class:`TemporaryFileError` instances."""

    if isinstance(error, TemporaryFileError):
        return error
    return TemporaryFileError(code=fallback_code, message=str(error))


__all__ = [
    "TemporaryFileError",
    "NotOpenError",
    "ensure_temporary_file_error",
]
