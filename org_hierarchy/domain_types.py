"""
Organizational Hierarchy — Core Domain Types v1.0

Pure data. No hierarchy construction, no analysis logic.
All money values: decimal.Decimal. No float. No implicit casting.

────────────────────────────────────────────────
DOMAIN GLOSSARY
────────────────────────────────────────────────

Top of organization (root):
    Employee with no manager reference.

Orphaned node:
    Employee whose manager reference does not resolve to any
    loaded employee. Keeps its manager_id, is not promoted to root.

Salary band:
    Inclusive range [1.2x, 1.5x] of the average salary of a
    manager's direct reports.

Reporting depth:
    Number of manager hops from an employee up to the top.

────────────────────────────────────────────────
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import List, Optional

from .constants import (
    DECIMAL_PLACES,
    MAX_DECIMAL_EXPONENT,
    MAX_REPORTING_DEPTH,
    MAX_SALARY_FACTOR,
    MIN_SALARY_FACTOR,
)


# ── Decimal Helpers ───────────────────────────────────────────

# Plain ASCII decimal literal: sign, digits, optional fraction, optional
# exponent. No underscores, no NaN / Infinity.
DECIMAL_PATTERN = re.compile(r'^[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$')
INTEGER_PATTERN = re.compile(r'^[+-]?[0-9]+$')


def quantize_money(value: Decimal, places: int = DECIMAL_PLACES) -> Decimal:
    """Round to `places` decimal places, half-up. Exact for any magnitude."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + places + 2)
        return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def to_decimal(text: str) -> Decimal:
    """Exact parse of a decimal string. Hard fail on NaN / Infinity / junk."""
    if not isinstance(text, str) or not DECIMAL_PATTERN.match(text.strip()):
        raise ValueError(f"Invalid decimal value {text!r}")
    try:
        value = Decimal(text.strip())
    except InvalidOperation as exc:
        raise ValueError(f"Invalid decimal value {text!r}") from exc
    if value and (
        value.adjusted() > MAX_DECIMAL_EXPONENT
        or value.as_tuple().exponent < -MAX_DECIMAL_EXPONENT
    ):
        raise ValueError(f"Decimal value {text!r} is out of range")
    return value


def parse_int(text: str) -> int:
    """Strict base-10 integer parse. No underscores, no whitespace inside."""
    if not isinstance(text, str) or not INTEGER_PATTERN.match(text.strip()):
        raise ValueError(f"Invalid integer {text!r}")
    return int(text.strip())


def validate_employee_id(employee_id: int) -> None:
    """Employee ids are positive integers. Hard fail."""
    if isinstance(employee_id, bool) or not isinstance(employee_id, int):
        raise ValueError(f"Invalid employee ID {employee_id!r}: must be an integer")
    if employee_id <= 0:
        raise ValueError(f"Invalid employee ID {employee_id!r}: must be positive")


# ── Core Domain Types ─────────────────────────────────────────

@dataclass(eq=False)
class Employee:
    """
    A single employee record.

    Scalar fields are fixed once loaded. `subordinates` holds the direct
    reports and is owned by the hierarchy builder. The manager is
    resolved by id through the mapping, never stored on the employee.
    """

    id: int
    first_name: str
    last_name: str
    salary: Decimal
    manager_id: Optional[int] = None
    subordinates: List["Employee"] = field(default_factory=list, repr=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_manager(self) -> bool:
        return bool(self.subordinates)

    def to_dict(self) -> dict:
        """Scalar fields plus subordinate ids, JSON-safe."""
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "salary": str(self.salary),
            "manager_id": self.manager_id,
            "subordinate_ids": [s.id for s in self.subordinates],
        }


@dataclass(frozen=True)
class AnalysisPolicy:
    """
    All analysis thresholds. Defaults come from constants.py and may be
    overridden through configuration.
    """

    min_salary_factor: Decimal = MIN_SALARY_FACTOR
    max_salary_factor: Decimal = MAX_SALARY_FACTOR
    max_reporting_depth: int = MAX_REPORTING_DEPTH
    decimal_places: int = DECIMAL_PLACES

    def __post_init__(self) -> None:
        if not isinstance(self.min_salary_factor, Decimal) or not isinstance(
            self.max_salary_factor, Decimal
        ):
            raise ValueError("Salary factors must be Decimal values")
        if self.min_salary_factor > self.max_salary_factor:
            raise ValueError(
                f"min_salary_factor {self.min_salary_factor} exceeds "
                f"max_salary_factor {self.max_salary_factor}"
            )
        if self.max_reporting_depth < 0:
            raise ValueError("max_reporting_depth must be >= 0")
        if self.decimal_places < 0:
            raise ValueError("decimal_places must be >= 0")


# ── Findings ──────────────────────────────────────────────────

UNDERPAID = "underpaid"
OVERPAID = "overpaid"


@dataclass(frozen=True)
class SalaryFinding:
    """A manager whose salary falls outside the allowed band."""

    manager_id: int
    manager_name: str
    salary: Decimal
    average: Decimal
    minimum: Decimal
    maximum: Decimal
    kind: str            # underpaid | overpaid
    amount: Decimal      # deficit (underpaid) or excess (overpaid)

    @property
    def is_underpaid(self) -> bool:
        return self.kind == UNDERPAID

    @property
    def is_overpaid(self) -> bool:
        return self.kind == OVERPAID


@dataclass(frozen=True)
class DepthFinding:
    """An employee whose chain of command is longer than allowed."""

    employee_id: int
    employee_name: str
    depth: int
    limit: int
    overage: int
    cycle_detected: bool = False


@dataclass(frozen=True)
class HierarchyObservation:
    """Non-fatal observation recorded while building the hierarchy."""

    employee_id: int
    employee_name: str
    kind: str                       # root | orphan
    level: str                      # info | warning
    message: str
    manager_id: Optional[int] = None


@dataclass
class HierarchyReport:
    """Outcome of a hierarchy build."""

    roots: List[int] = field(default_factory=list)
    orphans: List[int] = field(default_factory=list)
    observations: List[HierarchyObservation] = field(default_factory=list)
    edge_count: int = 0

    @property
    def warnings(self) -> List[HierarchyObservation]:
        return [o for o in self.observations if o.level == "warning"]

    def to_dict(self) -> dict:
        return {
            "roots": list(self.roots),
            "orphans": list(self.orphans),
            "edge_count": self.edge_count,
            "observations": [
                {
                    "employee_id": o.employee_id,
                    "employee_name": o.employee_name,
                    "kind": o.kind,
                    "level": o.level,
                    "manager_id": o.manager_id,
                    "message": o.message,
                }
                for o in self.observations
            ],
        }


@dataclass(frozen=True)
class AnalysisReport:
    """Both analyses over one built hierarchy."""

    salary_findings: List[SalaryFinding] = field(default_factory=list)
    depth_findings: List[DepthFinding] = field(default_factory=list)
    analyzed_managers: int = 0
    analyzed_employees: int = 0

    @property
    def is_clean(self) -> bool:
        return not self.salary_findings and not self.depth_findings
