"""A convenience object owning one self-removing temporary file."""

from __future__ import annotations

import os
import weakref
from pathlib import Path
from typing import IO, Any, Optional

from common.config import BaseConfig, TempFileSettings, default_settings
from common.errors import NotOpenError
from common.io import UTF8_BOM, copy_file, new_named_temp
from common.logging import get_logger
from common.validation import parse_model

from .records import CsvDialect, CsvRecord, read_record

logger = get_logger(level=BaseConfig.LOG_LEVEL)


class TemporaryFile:
    """Own a single temporary file handle and mediate access to it.

    The backing file is created on construction and removed as soon as the
    handle is closed. Read-side accessors return ``None`` while the instance
    is closed; ``write``, ``put`` and ``add`` reopen it implicitly.
    """

    def __init__(self, settings: TempFileSettings | None = None):
        self.settings = settings or default_settings()
        self._file: Optional[IO[bytes]] = None
        self._finalizer: Optional[weakref.finalize] = None
        self.create()

    def __enter__(self) -> "TemporaryFile":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "open" if self.opened() else "closed"
        return f"<TemporaryFile {state} path={self.get_path()!r}>"

    # lifecycle -----------------------------------------------------------

    def create(self) -> "TemporaryFile":
        """Close any current handle and open a new uniquely named file."""

        if self._finalizer is not None:
            self.close()
        handle = new_named_temp(self.settings)
        self._file = handle
        # Covers collection and interpreter exit without an explicit close.
        self._finalizer = weakref.finalize(self, handle.close)
        logger.debug("created temporary file %s", handle.name)
        return self

    def opened(self) -> bool:
        return self._file is not None and not self._file.closed

    def close(self) -> "TemporaryFile":
        if self._finalizer is not None:
            path = self.get_path()
            self._finalizer()
            logger.debug("closed temporary file %s", path)
        self._file = None
        self._finalizer = None
        return self

    def delete(self) -> "TemporaryFile":
        return self.close()

    def reset(self) -> "TemporaryFile":
        return self.close().create()

    # metadata ------------------------------------------------------------

    def get_path(self) -> Optional[str]:
        if self.opened():
            return self._file.name
        return None

    def stat(self) -> Optional[os.stat_result]:
        if self.opened():
            self._file.flush()
            return os.fstat(self._file.fileno())
        return None

    def get_size(self) -> Optional[int]:
        stat = self.stat()
        return stat.st_size if stat is not None else None

    def get_resource(self) -> IO[bytes]:
        """Return the raw handle rewound to offset 0."""

        if not self.opened():
            raise NotOpenError("Temporary file is closed", details={"operation": "get_resource"})
        return self.head()._file

    # positioning ---------------------------------------------------------

    def head(self) -> "TemporaryFile":
        return self.seek(0)

    def tail(self) -> "TemporaryFile":
        return self.seek(0, os.SEEK_END)

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> "TemporaryFile":
        if self.opened():
            try:
                self._file.seek(offset, whence)
            except (OSError, ValueError) as exc:
                logger.debug("seek to %s (whence=%s) ignored: %s", offset, whence, exc)
        return self

    def get_position(self) -> Optional[int]:
        if self.opened():
            return self._file.tell()
        return None

    def truncate(self, size: Optional[int] = None) -> "TemporaryFile":
        """Cut the file at ``size`` bytes, or at the current position."""

        if self.opened():
            self._file.truncate(size)
        return self

    # writing -------------------------------------------------------------

    def _encode(self, content: Any) -> bytes:
        if content is None or content is False:
            return b""
        if content is True:
            return b"1"
        if isinstance(content, (bytes, bytearray, memoryview)):
            return bytes(content)
        return str(content).encode(self.settings.encoding)

    def write(self, content: Any) -> "TemporaryFile":
        """Write at the current position, creating a file first if closed."""

        if not self.opened():
            self.create()
        self._file.write(self._encode(content))
        return self

    def put(self, content: Any) -> "TemporaryFile":
        """Replace the whole content with ``content``."""

        self.close()
        return self.write(content)

    def add(self, content: Any) -> "TemporaryFile":
        """Append ``content`` to the end of the file."""

        self.tail()
        return self.write(content)

    def write_bom(self) -> "TemporaryFile":
        return self.write(UTF8_BOM)

    # reading -------------------------------------------------------------

    def read(self, length: int) -> Optional[bytes]:
        if self.opened():
            return self._file.read(length)
        return None

    def get(self) -> Optional[bytes]:
        """Return the entire content regardless of the current position."""

        self.head()
        size = self.get_size()
        if size:
            return self.read(size)
        if self.opened():
            return b""
        return None

    def getcsv(
        self,
        length: int = 0,
        delimiter: str = ",",
        enclosure: str = '"',
        escape: str = "\\",
    ) -> Optional[CsvRecord]:
        """Parse the next CSV record from the current position.

        Returns the list of fields, ``END_OF_DATA`` once nothing is left to
        read, or ``None`` when the instance is closed.
        """

        dialect = parse_model(
            CsvDialect,
            {"length": length, "delimiter": delimiter, "enclosure": enclosure, "escape": escape},
        )
        if not self.opened():
            return None
        return read_record(self._file, dialect, self.settings.encoding)

    def copy(self, destination: str | Path) -> bool:
        """Copy the current content to ``destination``."""

        if not self.opened():
            logger.warning("cannot copy to %s: temporary file is closed", destination)
            return False
        self._file.flush()
        try:
            copy_file(self._file.name, destination)
        except OSError as exc:
            logger.warning("copy of %s to %s failed: %s", self._file.name, destination, exc)
            return False
        return True


__all__ = ["TemporaryFile"]
