"""CSV record parser for transaction import files.

Rows have the shape ``title,type,value,category`` and the first row is always a
header. Parsing is asynchronous and incremental: ``parse_records`` yields each
record as soon as its row is complete, so callers that need the whole batch
must drain it with ``collect_records`` before acting on it.
"""

import csv
import logging
from collections.abc import AsyncIterable, AsyncIterator
from decimal import Decimal, InvalidOperation
from os import PathLike

import anyio

from cashflow.config import settings
from cashflow.core.exceptions import RecordFormatError
from cashflow.models.category import CATEGORY_TITLE_MAX_LENGTH
from cashflow.models.transaction import (
    TITLE_MAX_LENGTH,
    VALUE_PRECISION,
    VALUE_SCALE,
    TransactionType,
)
from cashflow.schemas.internal import RawRecord

logger = logging.getLogger(__name__)

FIELDS = ("title", "type", "value", "category")
HEADER_ROWS = 1

_VALUE_QUANTUM = Decimal(1).scaleb(-VALUE_SCALE)
_VALUE_LIMIT = Decimal(1).scaleb(VALUE_PRECISION - VALUE_SCALE)


async def read_csv_lines(
    path: str | PathLike[str], encoding: str | None = None
) -> AsyncIterator[str]:
    """Yield the raw lines of a text file, line endings included."""
    async with await anyio.open_file(
        path, "r", encoding=encoding or settings.csv_encoding, newline=""
    ) as f:
        async for line in f:
            yield line


# Quoting states, following the default csv dialect: a quote only opens a
# quoted field at the start of a field, and "" inside one is an escaped quote.
_FIELD_START, _UNQUOTED, _QUOTED, _QUOTE_IN_QUOTED = range(4)


def _scan_quoting(text: str, state: int) -> int:
    for ch in text:
        if state == _QUOTED:
            if ch == '"':
                state = _QUOTE_IN_QUOTED
        elif state == _FIELD_START and ch == '"':
            state = _QUOTED
        elif ch in ",\r\n":
            state = _FIELD_START
        elif state == _QUOTE_IN_QUOTED and ch == '"':
            state = _QUOTED
        else:
            state = _UNQUOTED
    return state


def _decode_row(text: str, row_number: int) -> list[str]:
    try:
        return next(csv.reader([text]), [])
    except csv.Error:
        raise RecordFormatError(row_number, "row", text) from None


async def _iter_rows(lines: AsyncIterable[str]) -> AsyncIterator[list[str]]:
    # A quoted field may span physical lines; a row is complete once the
    # line ends outside a quoted field.
    pending = ""
    state = _FIELD_START
    row_number = 1
    async for line in lines:
        pending += line
        state = _scan_quoting(line, state)
        if state == _QUOTED:
            continue
        yield _decode_row(pending, row_number)
        pending = ""
        state = _FIELD_START
        row_number += 1
    if pending:
        yield _decode_row(pending, row_number)


def _parse_type(raw: str, row_number: int) -> TransactionType:
    try:
        return TransactionType(raw)
    except ValueError:
        raise RecordFormatError(row_number, "type", raw) from None


def _parse_value(raw: str, row_number: int) -> Decimal:
    try:
        value = Decimal(raw)
    except InvalidOperation:
        raise RecordFormatError(row_number, "value", raw) from None
    if not value.is_finite() or abs(value) >= _VALUE_LIMIT:
        raise RecordFormatError(row_number, "value", raw)
    # Stored with a fixed scale; finer values would be rounded on save.
    quantized = value.quantize(_VALUE_QUANTUM)
    if quantized != value:
        raise RecordFormatError(row_number, "value", raw)
    return quantized


def _check_length(raw: str, limit: int, field: str, row_number: int) -> str:
    if len(raw) > limit:
        raise RecordFormatError(row_number, field, raw[:limit] + "...")
    return raw


async def parse_records(lines: AsyncIterable[str]) -> AsyncIterator[RawRecord]:
    """Decode CSV lines into RawRecords.

    The header row is skipped and every field is trimmed. Rows whose title,
    type or value is empty are dropped without error; an empty category is
    kept as ``""``. Missing trailing columns count as empty and extra columns
    are ignored.

    Raises:
        RecordFormatError: a non-empty type is not income/outcome, or a
            non-empty value is not a decimal that fits the stored precision,
            or a title or category is longer than its column.
    """
    row_number = 0
    async for row in _iter_rows(lines):
        row_number += 1
        if row_number <= HEADER_ROWS:
            continue

        fields = [cell.strip() for cell in row[: len(FIELDS)]]
        fields += [""] * (len(FIELDS) - len(fields))
        title, type_, value, category = fields

        if not title or not type_ or not value:
            logger.debug("Skipping malformed row", extra={"row_number": row_number})
            continue

        yield RawRecord(
            title=_check_length(title, TITLE_MAX_LENGTH, "title", row_number),
            type=_parse_type(type_, row_number),
            value=_parse_value(value, row_number),
            category=_check_length(
                category, CATEGORY_TITLE_MAX_LENGTH, "category", row_number
            ),
        )


def parse_csv_file(path: str | PathLike[str]) -> AsyncIterator[RawRecord]:
    """Lazily parse the CSV file at ``path``."""
    return parse_records(read_csv_lines(path))


async def collect_records(records: AsyncIterable[RawRecord]) -> list[RawRecord]:
    """Drain ``records`` and return the complete batch in source order."""
    return [record async for record in records]
