"""Facade for the temporary file core utilities."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from common.config import TempFileSettings, load_settings
from common.errors import NotOpenError, TemporaryFileError

from .handle import TemporaryFile
from .records import END_OF_DATA, CsvDialect, CsvRecord, EndOfData, read_record


@contextmanager
def open_temporary_file(settings: TempFileSettings | None = None) -> Iterator[TemporaryFile]:
    """Yield a fresh :class:`TemporaryFile` that is closed on exit."""

    instance = TemporaryFile(settings)
    try:
        yield instance
    finally:
        instance.close()


__all__ = [
    "TemporaryFile",
    "TempFileSettings",
    "load_settings",
    "open_temporary_file",
    "CsvDialect",
    "CsvRecord",
    "EndOfData",
    "END_OF_DATA",
    "read_record",
    "TemporaryFileError",
    "NotOpenError",
]
