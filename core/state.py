"""
core.state
Core domain data models (storage/UI independent).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .balance import DEFAULT_BALANCE, BalanceSpec
from .calendar import quarter_index_to_calendar
from .errors import InvalidGameState


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


@dataclass(frozen=True)
class DecisionInput:
    """One quarter of player input. Untrusted until sanitized by core.effects."""

    price: float
    new_engineers: float
    new_sales_staff: float
    salary_pct: float


@dataclass(frozen=True)
class GameState:
    """Persistent per-owner simulation state.

    Invariants are checked on construction so that a corrupt persisted row
    fails loudly instead of feeding the transition:
    - quarter >= 1
    - engineers, sales_staff >= 0
    - 0 <= quality <= 100
    - is_won implies is_over
    """

    owner_id: str
    quarter: int
    cash: float
    engineers: int
    sales_staff: int
    quality: float
    last_revenue: float = 0.0
    last_net_income: float = 0.0
    total_revenue: float = 0.0
    total_net_income: float = 0.0
    is_over: bool = False
    is_won: bool = False

    def __post_init__(self):
        if self.quarter < 1:
            raise InvalidGameState(f"quarter must be >= 1, got {self.quarter}")
        if self.engineers < 0 or self.sales_staff < 0:
            raise InvalidGameState("headcount must be non-negative")
        if not (0.0 <= self.quality <= 100.0):
            raise InvalidGameState(f"quality must be within [0, 100], got {self.quality}")
        if self.is_won and not self.is_over:
            raise InvalidGameState("is_won requires is_over")

    @property
    def year(self) -> int:
        return quarter_index_to_calendar(self.quarter)[0]

    @property
    def quarter_in_year(self) -> int:
        return quarter_index_to_calendar(self.quarter)[1]


@dataclass(frozen=True)
class QuarterSnapshot:
    """Immutable record of one completed quarter, as observed right after the transition."""

    quarter: int
    year: int
    quarter_in_year: int
    cash: float
    revenue: float
    net_income: float
    engineers: int
    sales_staff: int
    quality: float


def initial_state(owner_id: str, balance: Optional[BalanceSpec] = None) -> GameState:
    """Baseline start state.

    Keep it in core so headless runs, tests and the session layer share the same baseline.
    """
    b = balance or DEFAULT_BALANCE
    return GameState(
        owner_id=str(owner_id),
        quarter=1,
        cash=float(b.start_cash),
        engineers=int(b.start_engineers),
        sales_staff=int(b.start_sales_staff),
        quality=float(b.start_quality),
        last_revenue=0.0,
        last_net_income=0.0,
        total_revenue=0.0,
        total_net_income=0.0,
        is_over=False,
        is_won=False,
    )


def snapshot_of(state: GameState) -> QuarterSnapshot:
    """Snapshot of the state as it stands (last completed quarter's figures)."""
    year, qiy = quarter_index_to_calendar(state.quarter)
    return QuarterSnapshot(
        quarter=int(state.quarter),
        year=year,
        quarter_in_year=qiy,
        cash=float(state.cash),
        revenue=float(state.last_revenue),
        net_income=float(state.last_net_income),
        engineers=int(state.engineers),
        sales_staff=int(state.sales_staff),
        quality=float(state.quality),
    )


# -------------------------
# Mapping bridges (persisted rows <-> dataclasses)
# -------------------------


def _row_int(d: Mapping[str, Any], key: str) -> int:
    v = d[key]
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise InvalidGameState(f"{key} must be an integer, got {v!r}")
    if isinstance(v, float) and not v.is_integer():
        raise InvalidGameState(f"{key} must be integral, got {v!r}")
    return int(v)


def _row_flag(d: Mapping[str, Any], key: str) -> bool:
    v = d.get(key, False)
    if not isinstance(v, bool):
        raise InvalidGameState(f"{key} must be a boolean, got {v!r}")
    return v


def state_from_mapping(d: Mapping[str, Any]) -> GameState:
    """Bridge helper for dict-based rows. Accepts `user_id` as an alias of `owner_id`."""
    owner = d.get("owner_id", d.get("user_id"))
    if owner is None:
        raise InvalidGameState("state row has no owner_id")
    try:
        return GameState(
            owner_id=str(owner),
            quarter=_row_int(d, "quarter"),
            cash=float(d["cash"]),
            engineers=_row_int(d, "engineers"),
            sales_staff=_row_int(d, "sales_staff"),
            quality=float(d["quality"]),
            last_revenue=float(d.get("last_revenue", 0.0)),
            last_net_income=float(d.get("last_net_income", 0.0)),
            total_revenue=float(d.get("total_revenue", 0.0)),
            total_net_income=float(d.get("total_net_income", 0.0)),
            is_over=_row_flag(d, "is_over"),
            is_won=_row_flag(d, "is_won"),
        )
    except InvalidGameState:
        raise
    except KeyError as exc:
        raise InvalidGameState(f"state row is missing field {exc}") from exc
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidGameState(f"state row has a malformed field: {exc}") from exc


def state_to_dict(s: GameState) -> Dict[str, Any]:
    return {
        "owner_id": s.owner_id,
        "quarter": int(s.quarter),
        "cash": float(s.cash),
        "engineers": int(s.engineers),
        "sales_staff": int(s.sales_staff),
        "quality": float(s.quality),
        "last_revenue": float(s.last_revenue),
        "last_net_income": float(s.last_net_income),
        "total_revenue": float(s.total_revenue),
        "total_net_income": float(s.total_net_income),
        "is_over": bool(s.is_over),
        "is_won": bool(s.is_won),
    }


def snapshot_from_mapping(d: Mapping[str, Any]) -> QuarterSnapshot:
    quarter = int(d["quarter"])
    year, qiy = quarter_index_to_calendar(quarter)
    return QuarterSnapshot(
        quarter=quarter,
        year=int(d.get("year", year)),
        quarter_in_year=int(d.get("quarter_in_year", qiy)),
        cash=float(d["cash"]),
        revenue=float(d.get("revenue", 0.0)),
        net_income=float(d.get("net_income", 0.0)),
        engineers=int(d["engineers"]),
        sales_staff=int(d["sales_staff"]),
        quality=float(d["quality"]),
    )


def snapshot_to_dict(s: QuarterSnapshot) -> Dict[str, Any]:
    return {
        "quarter": int(s.quarter),
        "year": int(s.year),
        "quarter_in_year": int(s.quarter_in_year),
        "cash": float(s.cash),
        "revenue": float(s.revenue),
        "net_income": float(s.net_income),
        "engineers": int(s.engineers),
        "sales_staff": int(s.sales_staff),
        "quality": float(s.quality),
    }
