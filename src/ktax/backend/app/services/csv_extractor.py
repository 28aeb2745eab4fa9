"""Turn uploaded CSV content into validated tax rows.

The header row decides which column feeds which field, so column order does
not matter and unknown columns are ignored. Any problem in any row rejects
the whole batch.
"""

from __future__ import annotations

import csv
import math
from collections.abc import Iterable, Mapping
from io import StringIO
from typing import IO, Callable

from ktax.backend.app.models import (
    DONATION_SLUG,
    K_RECEIPT_SLUG,
    Allowance,
    CsvRow,
    TaxRequest,
)

from .errors import (
    CsvFormatError,
    EmptyValueError,
    InvalidNumberError,
    MissingRequiredHeaderError,
)
from .validators import validate_tax_csv_row

TOTAL_INCOME_COLUMN = "totalIncome"
WHT_COLUMN = "wht"
DONATION_COLUMN = "donation"
K_RECEIPT_COLUMN = "k-receipt"

REQUIRED_COLUMNS: tuple[str, ...] = (TOTAL_INCOME_COLUMN, WHT_COLUMN, DONATION_COLUMN)

# CSV column -> CsvRow field
_COLUMN_FIELDS: Mapping[str, str] = {
    TOTAL_INCOME_COLUMN: "total_income",
    WHT_COLUMN: "wht",
    DONATION_COLUMN: "donation",
    K_RECEIPT_COLUMN: "k_receipt",
}

CsvSource = bytes | str | IO[str] | IO[bytes]


def _read_text(source: CsvSource) -> str:
    data = source if isinstance(source, (bytes, str)) else source.read()
    if isinstance(data, bytes):
        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise CsvFormatError("csv content must be UTF-8 encoded") from exc
    return data.removeprefix("\ufeff")


def _parse_number(value: str) -> float:
    # float() would also accept padding and digit separators
    if value != value.strip() or "_" in value:
        raise InvalidNumberError(f"invalid number {value!r}")
    try:
        number = float(value)
    except ValueError as exc:
        raise InvalidNumberError(f"invalid number {value!r}") from exc
    if not math.isfinite(number):
        raise InvalidNumberError(f"invalid number {value!r}")
    return number


def _has_required_columns(header: Iterable[str]) -> bool:
    present = set(header)
    return all(column in present for column in REQUIRED_COLUMNS)


def parse_csv_records(
    records: list[list[str]],
    validate: Callable[[CsvRow], None] = validate_tax_csv_row,
) -> list[CsvRow]:
    """Build :class:`CsvRow` objects from already-split CSV ``records``."""

    if not records or not _has_required_columns(records[0]):
        raise MissingRequiredHeaderError()

    header = records[0]
    rows: list[CsvRow] = []

    for line_number, record in enumerate(records[1:], start=2):
        if not record:
            continue
        if len(record) != len(header):
            raise CsvFormatError(
                f"record on line {line_number}: wrong number of fields"
            )

        values: dict[str, float] = {}
        for column, cell in zip(header, record):
            field = _COLUMN_FIELDS.get(column)
            if field is None:
                continue
            if cell == "":
                raise EmptyValueError()
            values[field] = _parse_number(cell)

        row = CsvRow(**values)
        validate(row)
        rows.append(row)

    return rows


def extract_rows(source: CsvSource) -> list[CsvRow]:
    """Parse and validate CSV ``source`` into rows, preserving input order."""

    text = _read_text(source)
    try:
        records = list(csv.reader(StringIO(text, newline="")))
    except csv.Error as exc:
        raise CsvFormatError(str(exc)) from exc
    return parse_csv_records(records)


def row_to_tax_request(row: CsvRow) -> TaxRequest:
    """Map a CSV row onto a tax request with both allowance entries present."""

    return TaxRequest(
        total_income=row.total_income,
        wht=row.wht,
        allowances=[
            Allowance(allowance_type=DONATION_SLUG, amount=row.donation),
            Allowance(allowance_type=K_RECEIPT_SLUG, amount=row.k_receipt),
        ],
    )


__all__ = [
    "DONATION_COLUMN",
    "K_RECEIPT_COLUMN",
    "REQUIRED_COLUMNS",
    "TOTAL_INCOME_COLUMN",
    "WHT_COLUMN",
    "extract_rows",
    "parse_csv_records",
    "row_to_tax_request",
]
