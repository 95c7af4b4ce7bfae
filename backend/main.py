# file: backend/main.py
"""
FastAPI Backend — Organizational Hierarchy API v1.

Stateless: every request builds its own engine, hierarchy and report.
No in-memory state between requests.

Endpoints:
  POST /analyze      — JSON employee list → hierarchy + findings
  POST /analyze-csv  — CSV text → hierarchy + findings + skipped rows
  GET  /health
"""
from __future__ import annotations

import logging
import os
import sys
from decimal import Decimal
from typing import List, Optional

from dotenv import load_dotenv

env_path = os.path.join(os.path.dirname(__file__), ".env")
if os.path.exists(env_path):
    load_dotenv(env_path)

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

# Add project root to path for package imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from org_hierarchy import __version__
from org_hierarchy.config import configure_logging, settings
from org_hierarchy.domain_types import Employee
from org_hierarchy.engine import OrgAnalysisEngine
from org_hierarchy.hashing import canonical_hash
from org_hierarchy.records import RecordSourceError
from org_hierarchy.reporting import report_to_dict

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="OrgHierarchy API",
    version=__version__,
    description="Organizational hierarchy construction and analysis",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.FRONTEND_URL,
        "http://localhost:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class EmployeeRecord(BaseModel):
    id: int = Field(gt=0)
    first_name: str
    last_name: str
    salary: Decimal
    manager_id: Optional[int] = None


class AnalyzeRequest(BaseModel):
    employees: List[EmployeeRecord]
    max_reporting_depth: Optional[int] = Field(default=None, ge=0)


class AnalyzeCsvRequest(BaseModel):
    csv_text: str
    max_reporting_depth: Optional[int] = Field(default=None, ge=0)


# ---------------------------------------------------------------------------
# Core helper
# ---------------------------------------------------------------------------


def _build_and_analyze(engine: OrgAnalysisEngine) -> dict:
    """
    Build + analyze whatever the engine has loaded.
    This is the core stateless operation — called by every endpoint.
    """
    hierarchy = engine.build()
    report = engine.analyze()
    return {
        "employee_count": len(engine.employees),
        "report_hash": canonical_hash(report),
        "hierarchy": hierarchy.to_dict(),
        "diagnostics": engine.get_diagnostics(report),
        "report": report_to_dict(report),
    }


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.post("/analyze")
def analyze(req: AnalyzeRequest):
    engine = OrgAnalysisEngine(settings.policy(max_reporting_depth=req.max_reporting_depth))
    engine.load_employees(
        Employee(
            id=rec.id,
            first_name=rec.first_name,
            last_name=rec.last_name,
            salary=rec.salary,
            manager_id=rec.manager_id,
        )
        for rec in req.employees
    )
    return _build_and_analyze(engine)


@app.post("/analyze-csv")
def analyze_csv(req: AnalyzeCsvRequest):
    engine = OrgAnalysisEngine(settings.policy(max_reporting_depth=req.max_reporting_depth))
    try:
        load = engine.load_csv_text(req.csv_text)
    except RecordSourceError as exc:
        logger.warning("Rejected CSV upload: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))

    result = _build_and_analyze(engine)
    result["skipped_records"] = [
        {"line": s.line, "reason": s.reason} for s in load.skipped
    ]
    return result


@app.get("/health")
def health():
    return {"status": "ok", "version": __version__}
