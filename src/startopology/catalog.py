"""Star catalog loading — parses the plain-text star table into a Catalog."""

import asyncio
import codecs
import logging
import math
import re
from pathlib import Path

from startopology.models import Catalog, StarRecord, StarState

logger = logging.getLogger(__name__)

_DELIMITER = re.compile(r"[\t ]+")
_INTEGER = re.compile(r"[+-]?[0-9]+")
_REAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_PATTERNS = {int: _INTEGER, float: _REAL}

# Column order after the name field, with the type each must parse as.
_FIELDS: tuple[tuple[str, type], ...] = (
    ("ra_hours", int),
    ("ra_minutes", int),
    ("ra_seconds", float),
    ("dec_degrees", int),
    ("dec_minutes", int),
    ("dec_seconds", float),
    ("distance_ly", int),
    ("number", int),
)


class FormatError(ValueError):
    """Malformed catalog text. Aborts the whole load."""

    def __init__(self, field: str, line: int, value: str | None = None) -> None:
        self.field = field
        self.line = line
        self.value = value
        if value is None:
            message = f"line {line}: missing field '{field}'"
        else:
            message = f"line {line}: invalid value {value!r} for field '{field}'"
        super().__init__(message)


def _parse_value(raw: str, kind: type, field: str, line: int) -> int | float:
    # ASCII digits only
    if not _PATTERNS[kind].fullmatch(raw):
        raise FormatError(field, line, raw)
    value = kind(raw)
    if kind is float and not math.isfinite(value):
        raise FormatError(field, line, raw)
    return value


def parse_record(line_text: str, line: int) -> StarRecord:
    """Parse one catalog row.

    The name is everything before the first tab/space; the remaining columns
    are split on runs of tabs and spaces. Columns past the catalog number are ignored.

    Raises:
        FormatError: A column is missing or does not parse as its type.
    """
    parts = _DELIMITER.split(line_text.rstrip("\r\n\t "))
    name, columns = parts[0], parts[1:]
    values: dict[str, int | float] = {}
    for i, (field, kind) in enumerate(_FIELDS):
        if i >= len(columns):
            raise FormatError(field, line)
        values[field] = _parse_value(columns[i], kind, field, line)
    return StarRecord(name=name, **values)  # type: ignore[arg-type]


def parse_catalog(text: str) -> Catalog:
    """Parse catalog text: a star count on line 1, then one star per line.

    Args:
        text: Full contents of the catalog file.

    Returns:
        Catalog with exactly as many stars as the header declares.

    Raises:
        FormatError: Header is not a positive integer, a row is malformed,
            or there are fewer rows than declared.
    """
    lines = text.splitlines()
    header = lines[0].strip() if lines else ""
    if not _INTEGER.fullmatch(header):
        raise FormatError("count", 1, header)
    count = int(header)
    if count <= 0:
        raise FormatError("count", 1, header)

    if len(lines) - 1 < count:
        raise FormatError("record", len(lines) + 1)

    stars = [
        StarState(record=parse_record(lines[i], i + 1)) for i in range(1, count + 1)
    ]
    if len(lines) - 1 > count:
        logger.debug("Ignoring %d line(s) after record %d", len(lines) - 1 - count, count)

    logger.info("Parsed %d stars", count)
    return Catalog(stars=stars)


def decode_catalog(data: bytes) -> str:
    """Decode catalog bytes as UTF-8, dropping a leading byte-order mark.

    Raises:
        FormatError: Bytes that are not valid UTF-8 (field ``"encoding"``).
    """
    if data.startswith(codecs.BOM_UTF8):
        data = data[len(codecs.BOM_UTF8) :]
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        line = data[: e.start].count(b"\n") + 1
        raise FormatError("encoding", line, data[e.start : e.end].hex()) from None


async def read_catalog(path: Path) -> Catalog:
    """Read and parse a catalog file without blocking the event loop.

    Raises:
        OSError: File missing or unreadable.
        FormatError: See ``decode_catalog`` and ``parse_catalog``.
    """
    data = await asyncio.to_thread(Path(path).read_bytes)
    return parse_catalog(decode_catalog(data))


def load_catalog(path: Path) -> Catalog:
    """Synchronous wrapper around ``read_catalog``."""
    return asyncio.run(read_catalog(path))
