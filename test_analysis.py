"""
Tests for the organization analyses.

Covers:
  - Salary band: avg / min / max with half-up rounding at each step
  - Underpaid, overpaid and compliant managers (band limits inclusive)
  - Only direct reports count toward the band
  - Reporting depth: limit 4, overage, dangling references, cycles
  - Policy overrides
  - Very large salaries stay exact
  - Idempotence + canonical report hash

Run:  py -3 test_analysis.py
"""

from __future__ import annotations

import os
import sys
from decimal import Decimal

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from org_hierarchy.analysis import (
    OrganizationAnalyzer,
    analyze_reporting_depth,
    analyze_salary_bands,
    compute_reporting_depth,
    compute_salary_band,
    evaluate_salary_band,
)
from org_hierarchy.domain_types import (
    AnalysisPolicy, Employee, OVERPAID, UNDERPAID, quantize_money,
)
from org_hierarchy.hashing import canonical_hash
from org_hierarchy.hierarchy import build_hierarchy
from org_hierarchy.reporting import depth_finding_line, salary_finding_line


_pass = 0
_fail = 0


def _test(name, fn):
    global _pass, _fail
    try:
        fn()
        print(f"  [PASS] {name}")
        _pass += 1
    except Exception as exc:
        print(f"  [FAIL] {name}: {exc}")
        _fail += 1


def _emp(eid, manager_id=None, salary="1000.00", first=None, last=None):
    return Employee(
        id=eid,
        first_name=first or f"First{eid}",
        last_name=last or f"Last{eid}",
        salary=Decimal(salary),
        manager_id=manager_id,
    )


def _built(*employees):
    org = {e.id: e for e in employees}
    build_hierarchy(org)
    return org


def _team(manager_salary):
    """Manager 1 with direct reports earning 1000.00, 2000.00, 3000.00."""
    return _built(
        _emp(1, salary=manager_salary),
        _emp(2, 1, "1000.00"),
        _emp(3, 1, "2000.00"),
        _emp(4, 1, "3000.00"),
    )


def _chain(length):
    """1 <- 2 <- ... <- length, each managed by the previous id."""
    emps = [_emp(1)]
    emps += [_emp(i, i - 1) for i in range(2, length + 1)]
    return _built(*emps)


# ---------------------------------------------------------------------------
# Salary band
# ---------------------------------------------------------------------------

def test_band_values():
    avg, minimum, maximum = compute_salary_band(
        [Decimal("1000.00"), Decimal("2000.00"), Decimal("3000.00")],
        AnalysisPolicy(),
    )
    assert str(avg) == "2000.00"
    assert str(minimum) == "2400.00"
    assert str(maximum) == "3000.00"


def test_band_rounds_each_step_half_up():
    # avg 0.025 -> 0.03; min 0.036 -> 0.04; max 0.045 -> 0.05
    avg, minimum, maximum = compute_salary_band(
        [Decimal("0.01"), Decimal("0.04")], AnalysisPolicy(),
    )
    assert str(avg) == "0.03"
    assert str(minimum) == "0.04"
    assert str(maximum) == "0.05"


def test_band_repeating_average():
    # 301 / 3 = 100.333.. -> 100.33; 120.396 -> 120.40; 150.495 -> 150.50
    avg, minimum, maximum = compute_salary_band(
        [Decimal("100.00"), Decimal("100.00"), Decimal("101.00")],
        AnalysisPolicy(),
    )
    assert str(avg) == "100.33"
    assert str(minimum) == "120.40"
    assert str(maximum) == "150.50"


def test_band_requires_salaries():
    try:
        compute_salary_band([], AnalysisPolicy())
    except ValueError:
        return
    raise AssertionError("Expected ValueError for empty salary list")


def test_underpaid_manager():
    org = _team("2000.00")
    findings = analyze_salary_bands(org)
    assert len(findings) == 1
    f = findings[0]
    assert f.manager_id == 1
    assert f.kind == UNDERPAID
    assert f.is_underpaid
    assert f.amount == Decimal("400.00")
    assert f.minimum == Decimal("2400.00")


def test_overpaid_manager():
    org = _team("3500.00")
    findings = analyze_salary_bands(org)
    assert len(findings) == 1
    f = findings[0]
    assert f.kind == OVERPAID
    assert f.is_overpaid
    assert f.amount == Decimal("500.00")
    assert f.maximum == Decimal("3000.00")


def test_compliant_manager():
    assert analyze_salary_bands(_team("2700.00")) == []


def test_band_limits_inclusive():
    assert analyze_salary_bands(_team("2400.00")) == []
    assert analyze_salary_bands(_team("3000.00")) == []
    assert len(analyze_salary_bands(_team("2399.99"))) == 1
    assert len(analyze_salary_bands(_team("3000.01"))) == 1


def test_only_direct_reports_count():
    # Manager 2's own report (5) earns a lot; it must not affect manager 1.
    org = _built(
        _emp(1, salary="1500.00"),
        _emp(2, 1, "1000.00"),
        _emp(5, 2, "900000.00"),
    )
    findings = {f.manager_id: f for f in analyze_salary_bands(org)}
    assert 1 not in findings
    assert findings[2].is_underpaid


def test_leaves_not_evaluated():
    leaf = _emp(9, salary="1.00")
    assert evaluate_salary_band(leaf, AnalysisPolicy()) is None
    org = _built(_emp(1, salary="1.00"))
    assert analyze_salary_bands(org) == []


def test_salary_line_format():
    f = analyze_salary_bands(_team("2000.00"))[0]
    line = salary_finding_line(f)
    assert line == (
        "Manager having ID: 1 and name: First1 Last1 earns 2000.00; "
        "400.00 LESS than allowed (min: 2400.00)"
    )
    f = analyze_salary_bands(_team("3500.00"))[0]
    assert "500.00 MORE than allowed (max: 3000.00)" in salary_finding_line(f)


# ---------------------------------------------------------------------------
# Reporting depth
# ---------------------------------------------------------------------------

def test_depth_of_chain():
    org = _chain(6)
    assert compute_reporting_depth(org[1], org) == (0, False)
    assert compute_reporting_depth(org[5], org) == (4, False)
    assert compute_reporting_depth(org[6], org) == (5, False)


def test_depth_over_limit():
    findings = analyze_reporting_depth(_chain(6))
    assert len(findings) == 1
    f = findings[0]
    assert f.employee_id == 6
    assert f.depth == 5
    assert f.overage == 1
    assert f.limit == 4
    assert not f.cycle_detected


def test_depth_at_limit_no_finding():
    assert analyze_reporting_depth(_chain(5)) == []


def test_depth_dangling_reference():
    org = _built(_emp(1), _emp(7, 99), _emp(8, 7))
    assert compute_reporting_depth(org[7], org) == (1, False)
    assert compute_reporting_depth(org[8], org) == (2, False)


def test_depth_dangling_deep_chain():
    # 2 -> 99 is dangling; everything below still counts the dangling hop
    emps = [_emp(2, 99)] + [_emp(i, i - 1) for i in range(3, 7)]
    org = _built(*emps)
    findings = analyze_reporting_depth(org)
    assert [(f.employee_id, f.depth) for f in findings] == [(6, 5)]


def test_depth_cycle_terminates():
    org = _built(_emp(10, 11), _emp(11, 10))
    assert compute_reporting_depth(org[10], org) == (2, True)
    assert compute_reporting_depth(org[11], org) == (2, True)

    findings = analyze_reporting_depth(org, AnalysisPolicy(max_reporting_depth=1))
    assert len(findings) == 2
    assert all(f.cycle_detected for f in findings)


def test_depth_self_managed():
    org = _built(_emp(3, 3))
    assert compute_reporting_depth(org[3], org) == (1, True)


def test_depth_policy_override():
    findings = analyze_reporting_depth(_chain(4), AnalysisPolicy(max_reporting_depth=2))
    assert [(f.employee_id, f.overage) for f in findings] == [(4, 1)]


def test_depth_line_format():
    f = analyze_reporting_depth(_chain(6))[0]
    assert depth_finding_line(f) == (
        "Employee having ID: 6 and name: First6 Last6 has 5 levels; "
        "1 levels above 4"
    )


# ---------------------------------------------------------------------------
# Analyzer
# ---------------------------------------------------------------------------

def _mixed_org():
    return _built(
        _emp(1, salary="10000.00"),
        _emp(2, 1, "2000.00"),
        _emp(3, 2, "1000.00"),
        _emp(4, 3, "1000.00"),
        _emp(5, 4, "1000.00"),
        _emp(6, 5, "1000.00"),
        _emp(7, 99, "1000.00"),
    )


def test_analyzer_report():
    report = OrganizationAnalyzer(_mixed_org()).analyze()
    assert report.analyzed_employees == 7
    assert report.analyzed_managers == 5
    assert {f.manager_id for f in report.salary_findings} == {1, 2, 3, 4, 5}
    assert [f.employee_id for f in report.depth_findings] == [6]
    assert not report.is_clean


def test_analyzer_idempotent():
    org = _mixed_org()
    analyzer = OrganizationAnalyzer(org)
    first = analyzer.analyze()
    second = analyzer.analyze()
    assert first == second
    assert canonical_hash(first) == canonical_hash(second)

    # A fresh analyzer over the same hierarchy agrees too
    third = OrganizationAnalyzer(org).analyze()
    assert canonical_hash(first) == canonical_hash(third)


def test_hash_changes_with_findings():
    clean = OrganizationAnalyzer(_team("2700.00")).analyze()
    dirty = OrganizationAnalyzer(_team("2000.00")).analyze()
    assert clean.is_clean
    assert canonical_hash(clean) != canonical_hash(dirty)


def test_band_huge_salaries():
    org = _built(_emp(1, salary="1E+60"), _emp(2, 1, "1E+60"))
    avg, minimum, maximum = compute_salary_band(
        [Decimal("1E+60"), Decimal("1E+60")], AnalysisPolicy(),
    )
    assert avg == Decimal("1E+60")
    assert minimum == Decimal("1.2E+60")
    assert maximum == Decimal("1.5E+60")
    findings = analyze_salary_bands(org)
    assert len(findings) == 1
    assert findings[0].kind == UNDERPAID
    assert findings[0].amount == Decimal("2E+59")


def test_quantize_large_value():
    value = quantize_money(Decimal("1E+60"))
    assert value == Decimal("1E+60")
    assert value.as_tuple().exponent == -2


def test_policy_validation():
    try:
        AnalysisPolicy(min_salary_factor=Decimal("2"), max_salary_factor=Decimal("1"))
    except ValueError:
        return
    raise AssertionError("Expected ValueError for inverted band")


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------

def main():
    tests = [
        ("Band: values", test_band_values),
        ("Band: half-up at each step", test_band_rounds_each_step_half_up),
        ("Band: repeating average", test_band_repeating_average),
        ("Band: empty rejected", test_band_requires_salaries),
        ("Band: very large salaries", test_band_huge_salaries),
        ("Band: quantize large value", test_quantize_large_value),
        ("Salary: underpaid", test_underpaid_manager),
        ("Salary: overpaid", test_overpaid_manager),
        ("Salary: compliant", test_compliant_manager),
        ("Salary: limits inclusive", test_band_limits_inclusive),
        ("Salary: direct reports only", test_only_direct_reports_count),
        ("Salary: leaves skipped", test_leaves_not_evaluated),
        ("Salary: line format", test_salary_line_format),
        ("Depth: chain", test_depth_of_chain),
        ("Depth: over limit", test_depth_over_limit),
        ("Depth: at limit", test_depth_at_limit_no_finding),
        ("Depth: dangling reference", test_depth_dangling_reference),
        ("Depth: dangling deep chain", test_depth_dangling_deep_chain),
        ("Depth: cycle terminates", test_depth_cycle_terminates),
        ("Depth: self-managed", test_depth_self_managed),
        ("Depth: policy override", test_depth_policy_override),
        ("Depth: line format", test_depth_line_format),
        ("Analyzer: report", test_analyzer_report),
        ("Analyzer: idempotent", test_analyzer_idempotent),
        ("Analyzer: hash sensitivity", test_hash_changes_with_findings),
        ("Policy: validation", test_policy_validation),
    ]

    print(f"\nRunning {len(tests)} tests...\n")
    for name, fn in tests:
        _test(name, fn)

    print(f"\n{'='*60}")
    print(f"  {_pass} passed, {_fail} failed out of {_pass + _fail}")
    print(f"{'='*60}")

    if _fail > 0:
        sys.exit(1)


if __name__ == "__main__":
    main()
