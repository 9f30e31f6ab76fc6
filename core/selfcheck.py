"""
core.selfcheck
Minimal "it runs" proof for the quarterly core.

Run:
  python -m core.selfcheck
"""

from __future__ import annotations

import math
from dataclasses import asdict

from .balance import DEFAULT_BALANCE
from .calendar import quarter_index_to_calendar
from .effects import (
    demand_for,
    evaluate_terminal,
    hire_cost_for,
    next_quality,
    payroll_for,
    salary_cost_per_head,
    sanitize_decision,
    units_sold,
)
from .state import DecisionInput, GameState, initial_state


def run_full_game_smoke() -> GameState:
    """Play up to 40 quarters with the effect rules only and check invariants each step."""
    state = initial_state("selfcheck")
    b = DEFAULT_BALANCE

    for q in range(1, 41):
        if state.is_over:
            break

        # alternate a cautious and an expansion quarter
        raw = DecisionInput(price=1200.4, new_engineers=1, new_sales_staff=1 if q % 2 else 0, salary_pct=95)
        d = sanitize_decision(raw)

        engineers = state.engineers + d.new_engineers
        sales_staff = state.sales_staff + d.new_sales_staff
        quality = next_quality(state.quality, engineers)
        units = units_sold(demand_for(quality, d.price), sales_staff)
        revenue = float(d.price * units)
        net = revenue - payroll_for(salary_cost_per_head(d.salary_pct), engineers, sales_staff)
        cash = state.cash + net - hire_cost_for(d.new_engineers, d.new_sales_staff)
        year, _ = quarter_index_to_calendar(state.quarter + 1)
        is_over, is_won = evaluate_terminal(cash, year)

        nxt = GameState(
            owner_id=state.owner_id,
            quarter=state.quarter + 1,
            cash=cash,
            engineers=engineers,
            sales_staff=sales_staff,
            quality=quality,
            last_revenue=revenue,
            last_net_income=net,
            total_revenue=state.total_revenue + revenue,
            total_net_income=state.total_net_income + net,
            is_over=is_over,
            is_won=is_won,
        )

        # invariants
        assert nxt.quarter == state.quarter + 1
        assert nxt.engineers >= state.engineers
        assert nxt.sales_staff >= state.sales_staff
        assert state.quality <= nxt.quality <= b.max_quality
        assert not (nxt.is_won and nxt.cash <= 0)
        assert math.isfinite(nxt.cash)
        state = nxt

    print("OK: quarterly core smoke test passed.")
    print("Final state:", asdict(state))
    return state


if __name__ == "__main__":
    run_full_game_smoke()
