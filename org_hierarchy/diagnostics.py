"""
Organizational Hierarchy — Diagnostics v1.0

Compute a diagnostic snapshot of a built hierarchy.
"""

from __future__ import annotations

from typing import Dict, Set

from .analysis import compute_reporting_depth
from .domain_types import AnalysisReport, Employee
from .hierarchy import find_orphans, find_roots, iter_subtree


def compute_diagnostics(
    employees: Dict[int, Employee], report: AnalysisReport | None = None,
) -> dict:
    """
    Return a diagnostic dict summarising the hierarchy's health.
    Expects subordinate lists to be populated (build_hierarchy first).
    """
    roots = find_roots(employees)
    orphans = find_orphans(employees)

    reachable: Set[int] = set()
    for rid in roots:
        reachable.update(e.id for e in iter_subtree(employees[rid]))
    unreachable = sorted(eid for eid in employees if eid not in reachable)

    max_depth = 0
    cyclic: list[int] = []
    for emp in employees.values():
        depth, is_cyclic = compute_reporting_depth(emp, employees)
        max_depth = max(max_depth, depth)
        if is_cyclic:
            cyclic.append(emp.id)

    warnings: list[str] = []

    if employees and not roots:
        warnings.append("No top-of-organization employee (every employee has a manager)")
    if len(roots) > 1:
        warnings.append(
            f"{len(roots)} top-of-organization employees: "
            f"{', '.join(str(r) for r in roots)}"
        )
    if orphans:
        warnings.append(
            f"{len(orphans)} orphaned employee(s) with unknown manager: "
            f"{', '.join(str(o) for o in orphans)}"
        )
    if unreachable:
        warnings.append(
            f"{len(unreachable)} employee(s) unreachable from the top: "
            f"{', '.join(str(u) for u in unreachable)}"
        )
    if cyclic:
        warnings.append(
            f"{len(cyclic)} employee(s) inside or below a manager cycle: "
            f"{', '.join(str(c) for c in sorted(cyclic))}"
        )

    result = {
        "employee_count": len(employees),
        "manager_count": sum(1 for e in employees.values() if e.subordinates),
        "root_count": len(roots),
        "orphan_count": len(orphans),
        "unreachable_count": len(unreachable),
        "cyclic_count": len(cyclic),
        "max_depth": max_depth,
        "warnings": warnings,
    }
    if report is not None:
        result["salary_violation_count"] = len(report.salary_findings)
        result["depth_violation_count"] = len(report.depth_findings)
    return result
