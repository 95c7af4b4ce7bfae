"""
Organizational Hierarchy — Hierarchy Builder v1.0

Turns a flat id -> Employee mapping into a tree by filling each
employee's subordinate list. Pure dict-based, single pass.

The mapping is the single source of truth for identity: the manager of
an employee is always resolved by id, never by a stored reference.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional

from .domain_types import Employee, HierarchyObservation, HierarchyReport

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def clear_hierarchy(employees: Dict[int, Employee]) -> None:
    """Drop every parent -> child edge. Scalar fields are untouched."""
    for emp in employees.values():
        emp.subordinates.clear()


def build_hierarchy(employees: Dict[int, Employee]) -> HierarchyReport:
    """
    Populate subordinate lists from manager_id references.

    Every employee whose manager resolves is appended to that manager's
    subordinates. An unresolved manager id orphans the employee (warning);
    a missing manager id marks a top-of-organization node (info).
    Never raises for data anomalies.

    Existing edges are cleared first, so rebuilding is safe.
    """
    clear_hierarchy(employees)
    report = HierarchyReport()

    for emp in employees.values():
        manager_id = emp.manager_id
        if manager_id is not None:
            manager = employees.get(manager_id)
            if manager is not None:
                manager.subordinates.append(emp)
                report.edge_count += 1
            else:
                logger.warning(
                    "Manager not found for employee: %s (ID: %s, managerId: %s)",
                    emp.full_name, emp.id, manager_id,
                )
                report.orphans.append(emp.id)
                report.observations.append(HierarchyObservation(
                    employee_id=emp.id,
                    employee_name=emp.full_name,
                    kind="orphan",
                    level="warning",
                    manager_id=manager_id,
                    message=f"Manager {manager_id} not found for employee {emp.full_name}",
                ))
        else:
            logger.info(
                "Employee with ID: %s name: %s is the top of the organization.",
                emp.id, emp.full_name,
            )
            report.roots.append(emp.id)
            report.observations.append(HierarchyObservation(
                employee_id=emp.id,
                employee_name=emp.full_name,
                kind="root",
                level="info",
                message=f"{emp.full_name} is the top of the organization",
            ))

    return report


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------

def manager_of(
    employee: Employee, employees: Dict[int, Employee],
) -> Optional[Employee]:
    """Resolve the manager by id. None for roots and orphans."""
    if employee.manager_id is None:
        return None
    return employees.get(employee.manager_id)


def find_roots(employees: Dict[int, Employee]) -> List[int]:
    """Ids with no manager reference, in mapping order."""
    return [eid for eid, emp in employees.items() if emp.manager_id is None]


def find_orphans(employees: Dict[int, Employee]) -> List[int]:
    """Ids whose manager reference does not resolve, in mapping order."""
    return [
        eid
        for eid, emp in employees.items()
        if emp.manager_id is not None and emp.manager_id not in employees
    ]


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------

def iter_subtree(root: Employee) -> Iterator[Employee]:
    """
    Iterative pre-order walk over owned subordinate lists, root first.
    Each employee is yielded at most once.
    """
    seen: set[int] = set()
    stack: List[Employee] = [root]
    while stack:
        node = stack.pop()
        if node.id in seen:
            continue
        seen.add(node.id)
        yield node
        stack.extend(reversed(node.subordinates))
