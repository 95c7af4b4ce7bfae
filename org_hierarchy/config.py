"""
Organizational Hierarchy — Runtime Configuration

Environment-driven settings. A `.env` file in the working directory is
loaded first if present; real environment variables win.
"""

from __future__ import annotations

import logging
import os
from decimal import Decimal

from dotenv import load_dotenv

from .constants import MAX_REPORTING_DEPTH, MAX_SALARY_FACTOR, MIN_SALARY_FACTOR
from .domain_types import AnalysisPolicy, to_decimal

load_dotenv()

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


class Settings:
    """Snapshot of the environment at construction time."""

    def __init__(self) -> None:
        self.LOG_LEVEL: str = os.getenv("ORG_LOG_LEVEL", "INFO").upper()
        self.EMPLOYEES_CSV: str = os.getenv("ORG_EMPLOYEES_CSV", "employees.csv")
        self.FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:3000")

        self.MIN_SALARY_FACTOR: Decimal = _env_decimal(
            "ORG_MIN_SALARY_FACTOR", MIN_SALARY_FACTOR,
        )
        self.MAX_SALARY_FACTOR: Decimal = _env_decimal(
            "ORG_MAX_SALARY_FACTOR", MAX_SALARY_FACTOR,
        )
        self.MAX_REPORTING_DEPTH: int = _env_int(
            "ORG_MAX_REPORTING_DEPTH", MAX_REPORTING_DEPTH,
        )

        if not isinstance(logging.getLevelName(self.LOG_LEVEL), int):
            raise ValueError(f"ORG_LOG_LEVEL={self.LOG_LEVEL!r} is not a logging level")

    def policy(self, **overrides) -> AnalysisPolicy:
        """AnalysisPolicy from settings; keyword overrides win."""
        values = {
            "min_salary_factor": self.MIN_SALARY_FACTOR,
            "max_salary_factor": self.MAX_SALARY_FACTOR,
            "max_reporting_depth": self.MAX_REPORTING_DEPTH,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return AnalysisPolicy(**values)


def _env_decimal(name: str, default: Decimal) -> Decimal:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return to_decimal(raw)
    except ValueError as exc:
        raise ValueError(f"{name}: {exc}") from None


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name}={raw!r} is not an integer") from None


def configure_logging(level: str = "INFO") -> None:
    """Single stream handler on the root logger. Safe to call repeatedly."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, force=True)


settings = Settings()
