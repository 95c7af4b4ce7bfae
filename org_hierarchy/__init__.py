"""
Organizational Hierarchy Analyzer v1.0
In-memory hierarchy construction and analysis over flat employee records.
All money values: decimal.Decimal, half-up rounding to 2 places.
"""

from .domain_types import (
    Employee, AnalysisPolicy, SalaryFinding, DepthFinding,
    HierarchyObservation, HierarchyReport, AnalysisReport,
    UNDERPAID, OVERPAID, quantize_money, to_decimal, parse_int,
    validate_employee_id,
)
from .hierarchy import (
    build_hierarchy,
    clear_hierarchy,
    find_roots,
    find_orphans,
    manager_of,
    iter_subtree,
)
from .analysis import (
    OrganizationAnalyzer,
    analyze_salary_bands,
    analyze_reporting_depth,
    compute_salary_band,
    compute_reporting_depth,
    evaluate_salary_band,
)
from .diagnostics import compute_diagnostics
from .records import (
    RecordParseError,
    RecordSourceError,
    LoadResult,
    SkippedRecord,
    parse_record,
    load_records,
    read_csv,
    read_csv_text,
)
from .reporting import (
    salary_finding_line,
    depth_finding_line,
    report_lines,
    finding_to_dict,
    report_to_dict,
)
from .hashing import canonical_serialize, canonical_hash
from .engine import OrgAnalysisEngine
from .constants import (
    MIN_SALARY_FACTOR,
    MAX_SALARY_FACTOR,
    MAX_REPORTING_DEPTH,
    DECIMAL_PLACES,
)

__version__ = "1.0.0"

__all__ = [
    "Employee",
    "AnalysisPolicy",
    "SalaryFinding",
    "DepthFinding",
    "HierarchyObservation",
    "HierarchyReport",
    "AnalysisReport",
    "UNDERPAID",
    "OVERPAID",
    "quantize_money",
    "to_decimal",
    "parse_int",
    "validate_employee_id",
    "build_hierarchy",
    "clear_hierarchy",
    "find_roots",
    "find_orphans",
    "manager_of",
    "iter_subtree",
    "OrganizationAnalyzer",
    "analyze_salary_bands",
    "analyze_reporting_depth",
    "compute_salary_band",
    "compute_reporting_depth",
    "evaluate_salary_band",
    "compute_diagnostics",
    "RecordParseError",
    "RecordSourceError",
    "LoadResult",
    "SkippedRecord",
    "parse_record",
    "load_records",
    "read_csv",
    "read_csv_text",
    "salary_finding_line",
    "depth_finding_line",
    "report_lines",
    "finding_to_dict",
    "report_to_dict",
    "canonical_serialize",
    "canonical_hash",
    "OrgAnalysisEngine",
    "MIN_SALARY_FACTOR",
    "MAX_SALARY_FACTOR",
    "MAX_REPORTING_DEPTH",
    "DECIMAL_PLACES",
]
