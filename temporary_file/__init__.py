"""Self-removing temporary files behind a convenience object."""

from .core import (
    END_OF_DATA,
    NotOpenError,
    TemporaryFile,
    TemporaryFileError,
    TempFileSettings,
    load_settings,
    open_temporary_file,
)

__all__ = [
    "TemporaryFile",
    "TempFileSettings",
    "load_settings",
    "open_temporary_file",
    "END_OF_DATA",
    "TemporaryFileError",
    "NotOpenError",
]
