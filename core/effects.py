"""
core.effects
Economy rules for one quarter:
- decision sanitization (clamp rules)
- quality growth, demand, units sold
- payroll and hiring cost
- terminal evaluation

Every function is pure; the order they are applied in lives in engine.pipeline.
"""

from __future__ import annotations

import math
from typing import Tuple

from .balance import DEFAULT_BALANCE, BalanceSpec
from .state import DecisionInput, clamp


def round_half_up(x: float) -> int:
    """Nearest integer, halves rounded towards +inf (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(float(x) + 0.5))


def sanitize_decision(raw: DecisionInput, balance: BalanceSpec = DEFAULT_BALANCE) -> DecisionInput:
    """Normalize untrusted input. Never raises; out-of-range values are clamped.

    - price: rounded, at least min_price
    - hires: floored, within [0, max_hires_per_quarter] (no firing through this input)
    - salary_pct: rounded, within [salary_pct_min, salary_pct_max]
    """
    max_hires = int(balance.max_hires_per_quarter)
    return DecisionInput(
        price=max(int(balance.min_price), round_half_up(raw.price)),
        new_engineers=int(clamp(math.floor(raw.new_engineers), 0, max_hires)),
        new_sales_staff=int(clamp(math.floor(raw.new_sales_staff), 0, max_hires)),
        salary_pct=int(clamp(round_half_up(raw.salary_pct), balance.salary_pct_min, balance.salary_pct_max)),
    )


def salary_cost_per_head(salary_pct: float, balance: BalanceSpec = DEFAULT_BALANCE) -> float:
    """Quarterly cost of one employee (not a total)."""
    return (float(salary_pct) / 100.0) * float(balance.industry_salary_per_quarter)


def next_quality(quality: float, engineers: int, balance: BalanceSpec = DEFAULT_BALANCE) -> float:
    # No decay: quality only grows and saturates at max_quality.
    # A state already above a lowered max_quality keeps its value.
    grown = min(float(balance.max_quality), float(quality) + engineers * balance.quality_per_engineer)
    return max(float(quality), grown)


def demand_for(quality: float, price: float, balance: BalanceSpec = DEFAULT_BALANCE) -> float:
    return max(0.0, quality * balance.demand_per_quality - price * balance.price_sensitivity)


def units_sold(demand: float, sales_staff: int, balance: BalanceSpec = DEFAULT_BALANCE) -> int:
    # Floor the product, never the intermediate demand.
    return int(math.floor(demand * sales_staff * balance.units_per_sales_head))


def payroll_for(salary_cost: float, engineers: int, sales_staff: int) -> float:
    return salary_cost * (engineers + sales_staff)


def hire_cost_for(new_engineers: int, new_sales_staff: int, balance: BalanceSpec = DEFAULT_BALANCE) -> float:
    return (new_engineers + new_sales_staff) * float(balance.hire_cost)


def evaluate_terminal(cash: float, year: int, balance: BalanceSpec = DEFAULT_BALANCE) -> Tuple[bool, bool]:
    """Return (is_over, is_won).

    Bankruptcy (cash <= 0) always loses, even on the horizon year.
    """
    reached_horizon = year >= balance.horizon_years
    is_over = cash <= 0 or reached_horizon
    is_won = reached_horizon and cash > 0
    return is_over, is_won
