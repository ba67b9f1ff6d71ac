"""CSV record reading from an open binary handle."""

from __future__ import annotations

import enum
from typing import IO, Iterator, List, Union

from pydantic import Field, model_validator

from common.errors import ensure_temporary_file_error
from common.validation import SchemaModel


class EndOfData(enum.Enum):
    """Sentinel for "no record left to read"; falsy like an empty result."""

    END_OF_DATA = "end_of_data"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "END_OF_DATA"


END_OF_DATA = EndOfData.END_OF_DATA

CsvRecord = Union[List[str], EndOfData]


class CsvDialect(SchemaModel):
    """Options accepted by :meth:`TemporaryFile.getcsv`.

    ``length`` caps the bytes read per physical line (``0`` means no limit).
    Inside an enclosure ``escape`` keeps the next character literal and is
    itself kept; an empty ``escape`` disables it. Doubled enclosures always
    read as one literal enclosure character.
    """

    length: int = Field(default=0, ge=0)
    delimiter: str = Field(default=",", min_length=1, max_length=1)
    enclosure: str = Field(default='"', min_length=1, max_length=1)
    escape: str = Field(default="\\", max_length=1)

    @model_validator(mode="after")
    def _check_characters(self) -> "CsvDialect":
        if self.delimiter in "\r\n" or self.enclosure in "\r\n":
            raise ValueError("delimiter and enclosure cannot be line breaks")
        if self.delimiter == self.enclosure:
            raise ValueError("delimiter and enclosure must differ")
        if self.escape and self.escape in (self.delimiter, self.enclosure):
            raise ValueError("escape must differ from delimiter and enclosure")
        return self


def _lines(handle: IO[bytes], length: int, encoding: str) -> Iterator[str]:
    limit = length if length > 0 else -1
    while True:
        line = handle.readline(limit)
        if not line:
            return
        yield line.decode(encoding)


def _parse_fields(first: str, lines: Iterator[str], dialect: CsvDialect) -> List[str]:
    delimiter, enclosure, escape = dialect.delimiter, dialect.enclosure, dialect.escape
    fields: List[str] = []
    field: List[str] = []
    text = first
    pos = 0
    in_quotes = False
    while True:
        if pos >= len(text):
            if in_quotes:
                more = next(lines, None)
                if more is not None:
                    text += more
                    continue
            break
        char = text[pos]
        if in_quotes:
            if escape and char == escape and pos + 1 < len(text):
                # The escape only shields the next character; both are kept.
                field.append(text[pos : pos + 2])
                pos += 2
            elif char == enclosure and text.startswith(enclosure, pos + 1):
                field.append(enclosure)
                pos += 2
            elif char == enclosure:
                in_quotes = False
                pos += 1
            else:
                field.append(char)
                pos += 1
        elif char == delimiter:
            fields.append("".join(field))
            field = []
            pos += 1
        elif char == enclosure and not "".join(field).strip(" \t"):
            field = []
            in_quotes = True
            pos += 1
        elif text[pos:] in ("\n", "\r\n", "\r"):
            break
        else:
            field.append(char)
            pos += 1
    fields.append("".join(field))
    return fields


def read_record(handle: IO[bytes], dialect: CsvDialect, encoding: str = "utf-8") -> CsvRecord:
    """Read the next record starting at the handle's current position.

    Lines are pulled lazily so the handle is left just after the consumed
    record; a quoted field may span several lines. Inside an enclosure the
    escape character keeps the following character literal and stays in the
    field; outside an enclosure it is ordinary data. A blank line yields ``[]``.
    """

    lines = _lines(handle, dialect.length, encoding)
    try:
        first = next(lines, None)
        if first is None:
            return END_OF_DATA
        if not first.rstrip("\r\n"):
            return []
        return _parse_fields(first, lines, dialect)
    except UnicodeDecodeError as exc:
        raise ensure_temporary_file_error(exc, fallback_code="csv_error") from exc


__all__ = [
    "CsvDialect",
    "CsvRecord",
    "EndOfData",
    "END_OF_DATA",
    "read_record",
]
