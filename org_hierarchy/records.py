"""
Organizational Hierarchy — Record Source v1.0

Parses delimited employee rows into Employee objects.

Columns: Id, firstName, lastName, salary, managerId (header row, values
trimmed). A malformed row is skipped and reported; only an unreadable
source or a missing column is fatal.
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

from .constants import (
    COLUMN_FIRST_NAME,
    COLUMN_ID,
    COLUMN_LAST_NAME,
    COLUMN_MANAGER_ID,
    COLUMN_SALARY,
    REQUIRED_COLUMNS,
)
from .domain_types import Employee, parse_int, to_decimal, validate_employee_id

logger = logging.getLogger(__name__)


class RecordParseError(ValueError):
    """Raised when a single row has a malformed field."""

    def __init__(self, column: str, detail: str) -> None:
        self.column = column
        self.detail = detail
        super().__init__(f"[RECORD:{column}] {detail}")


class RecordSourceError(Exception):
    """Raised when the record source itself cannot be read. Fatal."""


@dataclass(frozen=True)
class SkippedRecord:
    line: int
    reason: str


@dataclass
class LoadResult:
    """Employees keyed by id (last write wins) plus skipped rows."""

    employees: Dict[int, Employee] = field(default_factory=dict)
    skipped: List[SkippedRecord] = field(default_factory=list)
    row_count: int = 0

    @property
    def duplicate_count(self) -> int:
        return self.row_count - len(self.skipped) - len(self.employees)


# ---------------------------------------------------------------------------
# Row parsing
# ---------------------------------------------------------------------------

def _field(row: Mapping[str, Optional[str]], column: str) -> str:
    value = row.get(column)
    if value is None:
        raise RecordParseError(column, f"Missing value for {column!r}")
    return value.strip()


def _parse_int(row: Mapping[str, Optional[str]], column: str) -> int:
    raw = _field(row, column)
    try:
        return parse_int(raw)
    except ValueError:
        raise RecordParseError(column, f"Invalid integer {raw!r}") from None


def parse_record(row: Mapping[str, Optional[str]]) -> Employee:
    """Build an Employee from one raw row. Raises RecordParseError."""
    employee_id = _parse_int(row, COLUMN_ID)
    try:
        validate_employee_id(employee_id)
    except ValueError as exc:
        raise RecordParseError(COLUMN_ID, str(exc)) from None

    try:
        salary = to_decimal(_field(row, COLUMN_SALARY))
    except ValueError as exc:
        raise RecordParseError(COLUMN_SALARY, str(exc)) from None

    manager_raw = (row.get(COLUMN_MANAGER_ID) or "").strip()
    manager_id = _parse_int(row, COLUMN_MANAGER_ID) if manager_raw else None

    return Employee(
        id=employee_id,
        first_name=_field(row, COLUMN_FIRST_NAME),
        last_name=_field(row, COLUMN_LAST_NAME),
        salary=salary,
        manager_id=manager_id,
    )


def load_records(
    rows: Iterable[Mapping[str, Optional[str]]], first_line: int = 2,
) -> LoadResult:
    """
    Parse every row into a fresh id -> Employee mapping.

    Bad rows are logged and collected, never raised. `first_line` is the
    line number of the first data row (2 for a CSV with a header).
    """
    result = LoadResult()
    for offset, row in enumerate(rows):
        line = first_line + offset
        result.row_count += 1
        try:
            emp = parse_record(row)
        except RecordParseError as exc:
            logger.error("Error parsing record at line %s: %s", line, exc)
            result.skipped.append(SkippedRecord(line=line, reason=str(exc)))
            continue
        if emp.id in result.employees:
            logger.warning("Duplicate employee ID %s at line %s replaces earlier row", emp.id, line)
        result.employees[emp.id] = emp
    return result


# ---------------------------------------------------------------------------
# CSV
# ---------------------------------------------------------------------------

def _check_header(fieldnames: Optional[List[str]]) -> None:
    present = {name.strip() for name in fieldnames or []}
    missing = [c for c in REQUIRED_COLUMNS if c not in present]
    if missing:
        raise RecordSourceError(
            f"CSV header is missing required column(s): {', '.join(missing)}"
        )


def _strip_keys(rows: Iterable[Mapping[str, Optional[str]]]):
    for row in rows:
        yield {(k or "").strip(): v for k, v in row.items()}


def read_csv_text(text: str) -> LoadResult:
    """Load employees from CSV text with a header row."""
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    _check_header(reader.fieldnames)
    return load_records(_strip_keys(reader))


def read_csv(path: str | Path) -> LoadResult:
    """Load employees from a CSV file. RecordSourceError if unreadable."""
    logger.info("Loading data from CSV file %s...", path)
    try:
        text = Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise RecordSourceError(f"Cannot read CSV file {str(path)!r}: {exc}") from exc
    return read_csv_text(text)
