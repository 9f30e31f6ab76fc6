import dataclasses
import math

import pytest

from core.balance import BalanceSpec
from core.state import DecisionInput, GameState, initial_state
from engine.pipeline import advance, apply_decision

STEADY = DecisionInput(price=1000, new_engineers=0, new_sales_staff=0, salary_pct=100)


def _state(**overrides) -> GameState:
    return dataclasses.replace(initial_state("u1"), **overrides)


def test_first_quarter_scenario():
    nxt, snap = advance(initial_state("u1"), STEADY)

    assert nxt.quality == 52
    assert nxt.last_revenue == 519_000
    assert nxt.last_net_income == 339_000
    assert nxt.cash == 1_339_000
    assert nxt.quarter == 2
    assert not nxt.is_over and not nxt.is_won
    assert nxt.total_revenue == 519_000
    assert nxt.total_net_income == 339_000

    assert (snap.quarter, snap.year, snap.quarter_in_year) == (2, 1, 2)
    assert snap.cash == 1_339_000
    assert snap.revenue == 519_000
    assert snap.net_income == 339_000
    assert (snap.engineers, snap.sales_staff, snap.quality) == (4, 2, 52)


def test_hires_count_this_quarter_and_pay_one_time_cost():
    decision = DecisionInput(price=1000, new_engineers=2, new_sales_staff=1, salary_pct=100)
    nxt, _, log = apply_decision(initial_state("u1"), decision)

    assert (nxt.engineers, nxt.sales_staff) == (6, 3)
    assert nxt.quality == 53
    # demand = 530 - 0.1, units = floor(529.9 * 3 * 0.5) = 794
    assert log["units"] == 794
    assert log["payroll"] == 30_000 * 9
    assert log["hire_cost"] == 15_000
    assert nxt.cash == 1_000_000 + 794_000 - 270_000 - 15_000


def test_input_is_sanitized_before_use():
    raw = DecisionInput(price=-5, new_engineers=-2, new_sales_staff=2.9, salary_pct=1000)
    _, _, log = apply_decision(initial_state("u1"), raw)
    assert log["decision"] == {"price": 1, "new_engineers": 0, "new_sales_staff": 2, "salary_pct": 200}
    assert log["salary_cost"] == 60_000


def test_input_state_is_not_mutated():
    start = initial_state("u1")
    before = dataclasses.asdict(start)
    advance(start, STEADY)
    assert dataclasses.asdict(start) == before


def test_forced_loss_then_frozen():
    ruin = DecisionInput(price=1, new_engineers=1000, new_sales_staff=0, salary_pct=200)
    lost, snap = advance(initial_state("u1"), ruin)

    assert lost.cash <= 0
    assert lost.is_over and not lost.is_won
    assert lost.quarter == 2
    assert snap.cash == lost.cash

    again, snap2 = advance(lost, STEADY)
    assert again is lost
    assert snap2.quarter == lost.quarter
    assert snap2.revenue == lost.last_revenue
    assert snap2.net_income == lost.last_net_income


def test_terminal_state_is_idempotent_for_any_decision():
    over = _state(quarter=20, cash=-5.0, last_revenue=11.0, last_net_income=-7.0, is_over=True)
    for d in (STEADY, DecisionInput(price=1e9, new_engineers=50, new_sales_staff=50, salary_pct=50)):
        nxt, snap = advance(over, d)
        assert nxt == over
        assert (snap.revenue, snap.net_income) == (11.0, -7.0)
        assert (snap.year, snap.quarter_in_year) == (5, 4)


def test_win_boundary_at_quarter_37():
    nxt, snap = advance(_state(quarter=36, cash=5_000_000.0), STEADY)
    assert nxt.quarter == 37
    assert (snap.year, snap.quarter_in_year) == (10, 1)
    assert nxt.is_over and nxt.is_won


def test_bankrupt_on_horizon_is_a_loss():
    nxt, _ = advance(_state(quarter=36, cash=-10_000_000.0), STEADY)
    assert nxt.is_over and not nxt.is_won


def test_quarter_before_horizon_keeps_running():
    nxt, _ = advance(_state(quarter=35, cash=5_000_000.0), STEADY)
    assert nxt.quarter == 36
    assert not nxt.is_over


@pytest.mark.parametrize("price", [1, 500, 25_000, 10_000_000])
@pytest.mark.parametrize("hires", [(0, 0), (3, 1), (0, 4)])
def test_monotonic_headcount_quality_and_exclusive_outcome(price, hires):
    state = _state(quality=99.0)
    decision = DecisionInput(price=price, new_engineers=hires[0], new_sales_staff=hires[1], salary_pct=150)
    nxt, _ = advance(state, decision)

    assert nxt.quarter == state.quarter + 1
    assert nxt.engineers >= state.engineers
    assert nxt.sales_staff >= state.sales_staff
    assert state.quality <= nxt.quality <= 100
    if nxt.is_won:
        assert nxt.is_over
        assert nxt.cash > 0


def test_log_outcome_labels():
    _, _, log = apply_decision(_state(quarter=36, cash=5_000_000.0), STEADY)
    assert log["outcome"] == "won"
    over = _state(is_over=True)
    _, _, log = apply_decision(over, STEADY)
    assert log["outcome"] == "already_over"


@pytest.mark.parametrize(
    "hires",
    [(0, 1e306), (1.7e308, 1.7e308), (10**400, 0)],
)
def test_huge_finite_hires_are_capped_not_fatal(hires):
    decision = DecisionInput(price=1000, new_engineers=hires[0], new_sales_staff=hires[1], salary_pct=100)
    nxt, snap = advance(initial_state("u1"), decision)

    assert nxt.quarter == 2
    assert nxt.engineers <= 4 + 1_000_000
    assert nxt.sales_staff <= 2 + 1_000_000
    assert math.isfinite(nxt.cash)
    assert snap.cash == nxt.cash
    assert not nxt.is_won


def test_quality_never_drops_under_a_lowered_cap():
    nxt, _ = advance(_state(quality=95.0), STEADY, balance=BalanceSpec(max_quality=80, start_quality=50))
    assert nxt.quality == 95.0
