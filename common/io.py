"""Common IO helpers for backing temporary files."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import IO

from .config import TempFileSettings

UTF8_BOM = b"\xef\xbb\xbf"


def ensure_temp_root(settings: TempFileSettings) -> Path:
    if settings.directory is None:
        return Path(tempfile.gettempdir())
    root = Path(settings.directory)
    root.mkdir(parents=True, exist_ok=True)
    return root


def new_named_temp(settings: TempFileSettings) -> IO[bytes]:
    """Open a uniquely named binary file that is unlinked when closed."""

    root = ensure_temp_root(settings)
    return tempfile.NamedTemporaryFile(
        mode="w+b",
        prefix=settings.prefix,
        suffix=settings.suffix,
        dir=root,
        delete=True,
    )


def copy_file(source: str | Path, destination: str | Path) -> Path:
    return Path(shutil.copyfile(source, destination))


__all__ = [
    "UTF8_BOM",
    "ensure_temp_root",
    "new_named_temp",
    "copy_file",
]
