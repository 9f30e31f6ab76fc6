"""
core.balance
Balance specification (every economic constant of the quarterly model).

Kept in core so balancing lives in one place; the engine and config loader
only pass a BalanceSpec around.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping

from .errors import ConfigError


# Per-employee cost of one quarter at 100% of the industry baseline.
INDUSTRY_SALARY_PER_QUARTER = 30_000
# One-time cost per new hire, charged in the quarter of hiring.
HIRE_COST = 5_000

MAX_QUALITY = 100.0
QUALITY_PER_ENGINEER = 0.5
DEMAND_PER_QUALITY = 10.0
PRICE_SENSITIVITY = 0.0001
UNITS_PER_SALES_HEAD = 0.5

# Reaching this year with positive cash wins the game.
HORIZON_YEARS = 10

START_CASH = 1_000_000.0
START_ENGINEERS = 4
START_SALES_STAFF = 2
START_QUALITY = 50.0

MIN_PRICE = 1
# Upper bound on each hire field per quarter; keeps headcount products finite.
MAX_HIRES_PER_QUARTER = 1_000_000
SALARY_PCT_MIN = 50
SALARY_PCT_MAX = 200


@dataclass(frozen=True)
class BalanceSpec:
    industry_salary_per_quarter: float = INDUSTRY_SALARY_PER_QUARTER
    hire_cost: float = HIRE_COST
    max_quality: float = MAX_QUALITY
    quality_per_engineer: float = QUALITY_PER_ENGINEER
    demand_per_quality: float = DEMAND_PER_QUALITY
    price_sensitivity: float = PRICE_SENSITIVITY
    units_per_sales_head: float = UNITS_PER_SALES_HEAD
    horizon_years: int = HORIZON_YEARS
    start_cash: float = START_CASH
    start_engineers: int = START_ENGINEERS
    start_sales_staff: int = START_SALES_STAFF
    start_quality: float = START_QUALITY
    min_price: int = MIN_PRICE
    max_hires_per_quarter: int = MAX_HIRES_PER_QUARTER
    salary_pct_min: int = SALARY_PCT_MIN
    salary_pct_max: int = SALARY_PCT_MAX

    def __post_init__(self):
        if self.industry_salary_per_quarter < 0 or self.hire_cost < 0:
            raise ConfigError("salary and hire cost must be non-negative")
        if not (0 < self.max_quality <= 100):
            raise ConfigError("max_quality must be within (0, 100]")
        if not (0 <= self.start_quality <= self.max_quality):
            raise ConfigError("start_quality must be within [0, max_quality]")
        if self.start_engineers < 0 or self.start_sales_staff < 0:
            raise ConfigError("starting headcount must be non-negative")
        if self.horizon_years < 1:
            raise ConfigError("horizon_years must be >= 1")
        if self.min_price < 1:
            raise ConfigError("min_price must be >= 1")
        if self.max_hires_per_quarter < 0:
            raise ConfigError("max_hires_per_quarter must be non-negative")
        if not (0 < self.salary_pct_min <= self.salary_pct_max):
            raise ConfigError("salary_pct bounds must satisfy 0 < min <= max")


DEFAULT_BALANCE = BalanceSpec()

_INT_FIELDS = {"horizon_years", "start_engineers", "start_sales_staff", "min_price", "max_hires_per_quarter", "salary_pct_min", "salary_pct_max"}


def balance_to_dict(spec: BalanceSpec) -> Dict[str, Any]:
    return {f.name: getattr(spec, f.name) for f in fields(spec)}


def balance_from_mapping(d: Mapping[str, Any], base: BalanceSpec = DEFAULT_BALANCE) -> BalanceSpec:
    """Override `base` with the keys present in `d` (unknown keys are an error)."""
    known = {f.name for f in fields(BalanceSpec)}
    unknown = sorted(set(d.keys()) - known)
    if unknown:
        raise ConfigError(f"Unknown balance keys: {unknown}")
    overrides: Dict[str, Any] = {}
    for k, v in dict(d).items():
        try:
            overrides[k] = int(v) if k in _INT_FIELDS else float(v)
        except (TypeError, ValueError, OverflowError) as exc:
            raise ConfigError(f"balance.{k} must be numeric, got {v!r}") from exc
    return replace(base, **overrides)
