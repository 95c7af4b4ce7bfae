"""
Organizational Hierarchy — Report Rendering

Turns findings into JSON-safe dicts and human-readable lines.
Decimals are rendered as strings so no precision is lost.
"""

from __future__ import annotations

from typing import List, Union

from .domain_types import AnalysisReport, DepthFinding, SalaryFinding


def salary_finding_line(f: SalaryFinding) -> str:
    if f.is_underpaid:
        return (
            f"Manager having ID: {f.manager_id} and name: {f.manager_name} "
            f"earns {f.salary}; {f.amount} LESS than allowed (min: {f.minimum})"
        )
    return (
        f"Manager having ID: {f.manager_id} and name: {f.manager_name} "
        f"earns {f.salary}; {f.amount} MORE than allowed (max: {f.maximum})"
    )


def depth_finding_line(f: DepthFinding) -> str:
    line = (
        f"Employee having ID: {f.employee_id} and name: {f.employee_name} "
        f"has {f.depth} levels; {f.overage} levels above {f.limit}"
    )
    if f.cycle_detected:
        line += " (manager cycle detected)"
    return line


def report_lines(report: AnalysisReport) -> List[str]:
    """All findings as lines, salary findings first."""
    lines = [salary_finding_line(f) for f in report.salary_findings]
    lines.extend(depth_finding_line(f) for f in report.depth_findings)
    return lines


def finding_to_dict(f: Union[SalaryFinding, DepthFinding]) -> dict:
    if isinstance(f, SalaryFinding):
        return {
            "manager_id": f.manager_id,
            "manager_name": f.manager_name,
            "kind": f.kind,
            "salary": str(f.salary),
            "average": str(f.average),
            "minimum": str(f.minimum),
            "maximum": str(f.maximum),
            "amount": str(f.amount),
        }
    return {
        "employee_id": f.employee_id,
        "employee_name": f.employee_name,
        "depth": f.depth,
        "limit": f.limit,
        "overage": f.overage,
        "cycle_detected": f.cycle_detected,
    }


def report_to_dict(report: AnalysisReport) -> dict:
    return {
        "analyzed_managers": report.analyzed_managers,
        "analyzed_employees": report.analyzed_employees,
        "salary_findings": [finding_to_dict(f) for f in report.salary_findings],
        "depth_findings": [finding_to_dict(f) for f in report.depth_findings],
    }
