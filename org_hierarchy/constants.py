"""
Organizational Hierarchy — Threshold Constants (Default Values)

All magic numbers live here as module-level defaults.
Runtime overrides are carried by AnalysisPolicy (see config.py).

All factors are exact decimals.
"""

from decimal import Decimal

# --- Salary Band ---
MIN_SALARY_FACTOR: Decimal = Decimal("1.2")
MAX_SALARY_FACTOR: Decimal = Decimal("1.5")

# Rounding scale for average / band limits (half-up).
DECIMAL_PLACES: int = 2

# --- Reporting Depth ---
MAX_REPORTING_DEPTH: int = 4

# --- Record Source ---
COLUMN_ID: str = "Id"
COLUMN_FIRST_NAME: str = "firstName"
COLUMN_LAST_NAME: str = "lastName"
COLUMN_SALARY: str = "salary"
COLUMN_MANAGER_ID: str = "managerId"

REQUIRED_COLUMNS = (
    COLUMN_ID,
    COLUMN_FIRST_NAME,
    COLUMN_LAST_NAME,
    COLUMN_SALARY,
    COLUMN_MANAGER_ID,
)

# Largest decimal exponent magnitude accepted for a salary (1E+1000 ...
# 1E-1000). Keeps exact arithmetic bounded.
MAX_DECIMAL_EXPONENT: int = 1000
