"""
Organizational Hierarchy — Engine v1.0

Top-level orchestrator. Loads records via records.py, builds the tree
via hierarchy.py, analyzes via analysis.py, reports via diagnostics.py.

Strict sequence: load -> build -> analyze. Loading again starts over.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional

from .analysis import OrganizationAnalyzer
from .diagnostics import compute_diagnostics
from .domain_types import AnalysisPolicy, AnalysisReport, Employee, HierarchyReport
from .hierarchy import build_hierarchy
from .records import LoadResult, load_records, read_csv, read_csv_text
from .reporting import report_lines

logger = logging.getLogger(__name__)


class OrgAnalysisEngine:
    """
    Stateful engine wrapping the pure build / analyze functions.

    Holds one id -> Employee mapping for a single run. Any load replaces
    the mapping entirely, so no stale edges survive between runs.
    """

    def __init__(self, policy: AnalysisPolicy | None = None) -> None:
        self._policy = policy or AnalysisPolicy()
        self._load_result: Optional[LoadResult] = None
        self._hierarchy: Optional[HierarchyReport] = None

    # -- State access -------------------------------------------------------

    @property
    def policy(self) -> AnalysisPolicy:
        return self._policy

    @property
    def load_result(self) -> LoadResult:
        if self._load_result is None:
            raise RuntimeError("Engine has no data — call a load method first")
        return self._load_result

    @property
    def employees(self) -> Dict[int, Employee]:
        return self.load_result.employees

    @property
    def hierarchy(self) -> HierarchyReport:
        self._require_built()
        return self._hierarchy

    def _require_built(self) -> None:
        if self._hierarchy is None:
            raise RuntimeError("Hierarchy not built — call build() first")

    # -- Loading ------------------------------------------------------------

    def reset(self) -> None:
        """Forget everything loaded so far."""
        self._load_result = None
        self._hierarchy = None

    def _accept(self, result: LoadResult) -> LoadResult:
        self.reset()
        self._load_result = result
        logger.info(
            "Loaded %s employee(s) from %s row(s), %s skipped",
            len(result.employees), result.row_count, len(result.skipped),
        )
        return result

    def load_rows(self, rows: Iterable[Mapping[str, Optional[str]]]) -> LoadResult:
        return self._accept(load_records(rows))

    def load_csv_text(self, text: str) -> LoadResult:
        return self._accept(read_csv_text(text))

    def load_file(self, path: str | Path) -> LoadResult:
        """Load a CSV file. RecordSourceError propagates."""
        return self._accept(read_csv(path))

    def load_employees(self, employees: Iterable[Employee]) -> LoadResult:
        """Load already-constructed employees (last write wins on ids)."""
        result = LoadResult()
        for emp in employees:
            result.row_count += 1
            result.employees[emp.id] = emp
        return self._accept(result)

    # -- Build / analyze ----------------------------------------------------

    def build(self) -> HierarchyReport:
        self._hierarchy = build_hierarchy(self.employees)
        return self._hierarchy

    def analyze(self) -> AnalysisReport:
        """Run both analyses over the built hierarchy and log every finding."""
        self._require_built()
        report = OrganizationAnalyzer(self.employees, self._policy).analyze()
        for line in report_lines(report):
            logger.info("%s", line)
        return report

    def run_file(self, path: str | Path) -> AnalysisReport:
        """load_file -> build -> analyze."""
        self.load_file(path)
        self.build()
        return self.analyze()

    def get_diagnostics(self, report: AnalysisReport | None = None) -> dict:
        """Return diagnostic snapshot of the built hierarchy."""
        self._require_built()
        diagnostics = compute_diagnostics(self.employees, report)
        diagnostics["skipped_record_count"] = len(self.load_result.skipped)
        return diagnostics
