"""
Organizational Hierarchy — Canonical Report Hashing v1.0

Deterministic canonical serialization + SHA-256 hashing of an
AnalysisReport. Two runs over the same hierarchy hash identically.

Rules:
  - Salary findings sorted by manager_id
  - Depth findings sorted by employee_id
  - Decimals as strings (exact, no float)
  - UTF-8 JSON, no whitespace, fixed field order
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Dict

from .domain_types import AnalysisReport
from .reporting import finding_to_dict


def canonical_serialize(report: AnalysisReport) -> bytes:
    """Canonical serialization of a report to UTF-8 JSON bytes."""
    obj = _build_canonical_dict(report)
    return json.dumps(obj, ensure_ascii=True, separators=(",", ":"), sort_keys=False).encode("utf-8")


def canonical_hash(report: AnalysisReport) -> str:
    """SHA-256 of canonical serialization. Lowercase hex string."""
    return hashlib.sha256(canonical_serialize(report)).hexdigest()


def _build_canonical_dict(report: AnalysisReport) -> Dict[str, Any]:
    return {
        "report_version": 1,
        "analyzed_managers": report.analyzed_managers,
        "analyzed_employees": report.analyzed_employees,
        "salary_findings": [
            finding_to_dict(f)
            for f in sorted(report.salary_findings, key=lambda f: f.manager_id)
        ],
        "depth_findings": [
            finding_to_dict(f)
            for f in sorted(report.depth_findings, key=lambda f: f.employee_id)
        ],
    }
