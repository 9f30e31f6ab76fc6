"""engine.pipeline

Core quarter flow (headless).

Responsibilities:
- Short-circuit finished games (idempotent no-op)
- Sanitize the decision, apply hires, run the economy rules
- Advance the calendar and evaluate win/loss
- Produce the next state, the quarter snapshot and a quarter log

This layer is storage-agnostic.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Tuple

from core.balance import DEFAULT_BALANCE, BalanceSpec
from core.calendar import quarter_index_to_calendar
from core.effects import (
    demand_for,
    evaluate_terminal,
    hire_cost_for,
    next_quality,
    payroll_for,
    salary_cost_per_head,
    sanitize_decision,
    units_sold,
)
from core.state import DecisionInput, GameState, QuarterSnapshot, snapshot_of, state_to_dict


def _outcome(state: GameState) -> str:
    if not state.is_over:
        return "running"
    return "won" if state.is_won else "lost"


def apply_decision(
    state: GameState,
    decision: DecisionInput,
    *,
    balance: BalanceSpec = DEFAULT_BALANCE,
) -> Tuple[GameState, QuarterSnapshot, Dict[str, Any]]:
    """Apply one quarter's decision and advance to the next quarter.

    Returns (next_state, snapshot, quarter_log).
    """
    before = state_to_dict(state)

    # 0) finished games are frozen
    if state.is_over:
        log: Dict[str, Any] = {
            "quarter": int(state.quarter),
            "before": before,
            "after": dict(before),
            "outcome": "already_over",
        }
        return state, snapshot_of(state), log

    # 1) sanitize
    d = sanitize_decision(decision, balance)

    # 2) hires take effect within this quarter
    engineers = state.engineers + d.new_engineers
    sales_staff = state.sales_staff + d.new_sales_staff

    # 3-9) economy
    salary_cost = salary_cost_per_head(d.salary_pct, balance)
    quality = next_quality(state.quality, engineers, balance)
    demand = demand_for(quality, d.price, balance)
    units = units_sold(demand, sales_staff, balance)
    revenue = float(d.price * units)
    payroll = payroll_for(salary_cost, engineers, sales_staff)
    net_income = revenue - payroll

    # 10-11) one-time hiring cost, cash may go negative
    hire_cost = hire_cost_for(d.new_engineers, d.new_sales_staff, balance)
    cash = state.cash + net_income - hire_cost

    # 12-13) calendar + terminal
    quarter = state.quarter + 1
    year, quarter_in_year = quarter_index_to_calendar(quarter)
    is_over, is_won = evaluate_terminal(cash, year, balance)

    # 14-15) assemble
    new_state = GameState(
        owner_id=state.owner_id,
        quarter=quarter,
        cash=cash,
        engineers=engineers,
        sales_staff=sales_staff,
        quality=quality,
        last_revenue=revenue,
        last_net_income=net_income,
        total_revenue=state.total_revenue + revenue,
        total_net_income=state.total_net_income + net_income,
        is_over=is_over,
        is_won=is_won,
    )
    snapshot = QuarterSnapshot(
        quarter=quarter,
        year=year,
        quarter_in_year=quarter_in_year,
        cash=cash,
        revenue=revenue,
        net_income=net_income,
        engineers=engineers,
        sales_staff=sales_staff,
        quality=quality,
    )

    log = {
        "quarter": int(state.quarter),
        "decision": asdict(d),
        "before": before,
        "after": state_to_dict(new_state),
        "salary_cost": float(salary_cost),
        "demand": float(demand),
        "units": int(units),
        "revenue": float(revenue),
        "payroll": float(payroll),
        "net_income": float(net_income),
        "hire_cost": float(hire_cost),
        "outcome": _outcome(new_state),
    }
    return new_state, snapshot, log


def advance(
    state: GameState,
    decision: DecisionInput,
    *,
    balance: BalanceSpec = DEFAULT_BALANCE,
) -> Tuple[GameState, QuarterSnapshot]:
    """Pure quarterly transition: (state, decision) -> (next_state, snapshot).

    Once `state.is_over` is set, the same state object comes back together with
    a snapshot of its last known figures, whatever the decision.
    """
    new_state, snapshot, _ = apply_decision(state, decision, balance=balance)
    return new_state, snapshot
