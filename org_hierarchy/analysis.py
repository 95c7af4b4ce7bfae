"""
Organizational Hierarchy — Organization Analyzer v1.0

Two independent, read-only analyses over a built hierarchy:

  1. Salary bands: each manager's salary against [min, max] derived from
     the average salary of their direct reports.
  2. Reporting depth: number of manager hops above each employee.

Both return lists of findings. An empty list is the success case.
Rounding is half-up to 2 places and applied to avg, min and max in turn.
"""

from __future__ import annotations

import logging
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .domain_types import (
    AnalysisPolicy,
    AnalysisReport,
    DepthFinding,
    Employee,
    OVERPAID,
    SalaryFinding,
    UNDERPAID,
    quantize_money,
)

logger = logging.getLogger(__name__)

# Minimum working precision for the average. Raised per call so that sums,
# products and differences stay exact for the magnitudes involved.
_DIVISION_PRECISION = 60


def _working_precision(values: Sequence[Decimal], policy: AnalysisPolicy) -> int:
    """Digits needed to add, divide, scale and subtract `values` exactly."""
    factors = (policy.min_salary_factor, policy.max_salary_factor)
    high = max(v.adjusted() for v in values)
    low = min(min(v.as_tuple().exponent for v in values), -policy.decimal_places)
    factor_digits = max(len(f.as_tuple().digits) for f in factors)
    span = high - low + len(str(len(values))) + factor_digits + 10
    return max(_DIVISION_PRECISION, span)


# ---------------------------------------------------------------------------
# Salary bands
# ---------------------------------------------------------------------------

def compute_salary_band(
    salaries: Sequence[Decimal], policy: AnalysisPolicy,
) -> Tuple[Decimal, Decimal, Decimal]:
    """
    Return (avg, min, max) for a non-empty list of salaries.

    avg = round(total / count)
    min = round(avg * min_salary_factor)
    max = round(avg * max_salary_factor)
    """
    if not salaries:
        raise ValueError("Salary band requires at least one salary")

    places = policy.decimal_places
    with localcontext() as ctx:
        ctx.prec = _working_precision(salaries, policy)
        ctx.rounding = ROUND_HALF_UP
        total = sum(salaries, Decimal(0))
        avg = quantize_money(total / Decimal(len(salaries)), places)
        minimum = quantize_money(avg * policy.min_salary_factor, places)
        maximum = quantize_money(avg * policy.max_salary_factor, places)
    return avg, minimum, maximum


def evaluate_salary_band(
    manager: Employee, policy: AnalysisPolicy,
) -> Optional[SalaryFinding]:
    """Check one manager against the band of their direct reports."""
    subs = manager.subordinates
    if not subs:
        return None

    salaries = [s.salary for s in subs]
    avg, minimum, maximum = compute_salary_band(salaries, policy)
    salary = manager.salary

    with localcontext() as ctx:
        ctx.prec = _working_precision(salaries + [salary], policy)
        if salary < minimum:
            kind, amount = UNDERPAID, minimum - salary
        elif salary > maximum:
            kind, amount = OVERPAID, salary - maximum
        else:
            return None

    return SalaryFinding(
        manager_id=manager.id,
        manager_name=manager.full_name,
        salary=salary,
        average=avg,
        minimum=minimum,
        maximum=maximum,
        kind=kind,
        amount=amount,
    )


def analyze_salary_bands(
    employees: Dict[int, Employee], policy: AnalysisPolicy | None = None,
) -> List[SalaryFinding]:
    """Salary-band findings for every employee with direct reports."""
    policy = policy or AnalysisPolicy()
    findings: List[SalaryFinding] = []
    for emp in employees.values():
        if not emp.subordinates:
            continue
        finding = evaluate_salary_band(emp, policy)
        if finding is not None:
            findings.append(finding)
    return findings


# ---------------------------------------------------------------------------
# Reporting depth
# ---------------------------------------------------------------------------

def compute_reporting_depth(
    employee: Employee, employees: Dict[int, Employee],
) -> Tuple[int, bool]:
    """
    Count manager hops above `employee`.

    Every non-null manager reference counts one hop, including a dangling
    one, where the walk stops. A manager id seen twice means a cycle: the
    walk stops there and the second flag is True.
    """
    depth = 0
    visited: Set[int] = set()
    manager_id = employee.manager_id

    while manager_id is not None:
        if manager_id in visited:
            return depth, True
        visited.add(manager_id)
        depth += 1
        manager = employees.get(manager_id)
        if manager is None:
            break
        manager_id = manager.manager_id

    return depth, False


def analyze_reporting_depth(
    employees: Dict[int, Employee], policy: AnalysisPolicy | None = None,
) -> List[DepthFinding]:
    """Depth findings for every employee, roots and orphans included."""
    policy = policy or AnalysisPolicy()
    limit = policy.max_reporting_depth
    findings: List[DepthFinding] = []

    for emp in employees.values():
        depth, cyclic = compute_reporting_depth(emp, employees)
        if cyclic:
            logger.warning(
                "Manager cycle detected above employee ID: %s name: %s",
                emp.id, emp.full_name,
            )
        if depth > limit:
            findings.append(DepthFinding(
                employee_id=emp.id,
                employee_name=emp.full_name,
                depth=depth,
                limit=limit,
                overage=depth - limit,
                cycle_detected=cyclic,
            ))
    return findings


# ---------------------------------------------------------------------------
# Analyzer
# ---------------------------------------------------------------------------

class OrganizationAnalyzer:
    """
    Read-only analyzer bound to one built hierarchy.

    Holds no results between calls; every call recomputes from the
    mapping, so repeated calls on an unmodified hierarchy agree.
    """

    def __init__(
        self,
        employees: Dict[int, Employee],
        policy: AnalysisPolicy | None = None,
    ) -> None:
        self._employees = employees
        self._policy = policy or AnalysisPolicy()

    @property
    def policy(self) -> AnalysisPolicy:
        return self._policy

    def salary_findings(self) -> List[SalaryFinding]:
        return analyze_salary_bands(self._employees, self._policy)

    def depth_findings(self) -> List[DepthFinding]:
        return analyze_reporting_depth(self._employees, self._policy)

    def analyze(self) -> AnalysisReport:
        """Run both analyses and bundle the findings."""
        logger.info("Analyzing salary violations...")
        salary = self.salary_findings()
        logger.info("Analyzing reporting depth...")
        depth = self.depth_findings()
        return AnalysisReport(
            salary_findings=salary,
            depth_findings=depth,
            analyzed_managers=sum(
                1 for e in self._employees.values() if e.subordinates
            ),
            analyzed_employees=len(self._employees),
        )
