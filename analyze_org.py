"""
Command-line entry point: load an employee CSV, build the hierarchy and
print salary-band and reporting-depth findings.

Run:  py -3 analyze_org.py employees.csv [--json]
"""

from __future__ import annotations

import json
import os
import sys
from typing import Optional

import click

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from org_hierarchy import __version__
from org_hierarchy.config import configure_logging, settings
from org_hierarchy.engine import OrgAnalysisEngine
from org_hierarchy.hashing import canonical_hash
from org_hierarchy.records import RecordSourceError
from org_hierarchy.reporting import report_lines, report_to_dict


@click.command()
@click.version_option(version=__version__)
@click.argument("csv_path", required=False, type=click.Path(dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Emit the full report as JSON.")
@click.option("--max-depth", type=click.IntRange(min=0), default=None,
              help="Override the maximum reporting depth.")
@click.option("--log-level", default=None,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              help="Logging level (defaults to ORG_LOG_LEVEL).")
def main(
    csv_path: Optional[str],
    as_json: bool,
    max_depth: Optional[int],
    log_level: Optional[str],
) -> None:
    """Analyze the organization described by CSV_PATH.

    Findings are not failures: the exit code is 0 whenever the file could
    be read, and 1 when it could not.
    """
    configure_logging(log_level or settings.LOG_LEVEL)

    path = csv_path or settings.EMPLOYEES_CSV
    engine = OrgAnalysisEngine(settings.policy(max_reporting_depth=max_depth))
    try:
        report = engine.run_file(path)
    except RecordSourceError as exc:
        raise click.ClickException(str(exc)) from exc

    if as_json:
        doc = {
            "source": str(path),
            "report_hash": canonical_hash(report),
            "hierarchy": engine.hierarchy.to_dict(),
            "diagnostics": engine.get_diagnostics(report),
            "report": report_to_dict(report),
        }
        click.echo(json.dumps(doc, indent=2, ensure_ascii=False))
        return

    lines = report_lines(report)
    for line in lines:
        click.echo(line)
    if not lines:
        click.echo("No salary or reporting-depth violations found.")
    for warning in engine.get_diagnostics(report)["warnings"]:
        click.echo(f"WARN: {warning}", err=True)


if __name__ == "__main__":
    main()
