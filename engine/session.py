"""engine.session

Boundary orchestration around the pure engine:
- load_or_create: fetch an owner's game, creating (and seeding history for) a new one
- play_turn: parse the decision, advance one quarter, persist state + snapshot

Authentication happens before this layer; an empty owner id is rejected as
unauthorized. Failures are kept distinct: Unauthorized, InvalidDecisionInput,
GameNotFound, StorageError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, TypeVar

from core.errors import GameNotFound, SimulationError, StorageError, Unauthorized
from core.state import GameState, QuarterSnapshot, initial_state, snapshot_of, snapshot_to_dict, state_to_dict

from .config import EngineConfig
from .decisions import decision_from_mapping
from .pipeline import advance
from .store import GameStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class GameView:
    """What the boundary hands back: current state + recent history (ascending)."""

    state: GameState
    history: List[QuarterSnapshot] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gameState": state_to_dict(self.state),
            "history": [snapshot_to_dict(s) for s in self.history],
        }


def _require_owner(owner_id: Optional[str]) -> str:
    owner = str(owner_id or "").strip()
    if not owner:
        raise Unauthorized("a verified owner id is required")
    return owner


def _store_call(what: str, fn: Callable[..., T], *args: Any) -> T:
    try:
        return fn(*args)
    except SimulationError:
        raise
    except Exception as exc:
        raise StorageError(f"{what} failed: {exc}") from exc


def load_or_create(store: GameStore, owner_id: Optional[str], config: Optional[EngineConfig] = None) -> GameView:
    cfg = config or EngineConfig()
    owner = _require_owner(owner_id)

    state = _store_call("load", store.load, owner)
    if state is None:
        state = initial_state(owner, cfg.balance)
        _store_call("save", store.save, state)
        _store_call("append_history", store.append_history, owner, snapshot_of(state))
        logger.info("Created game for %s", owner)

    history = _store_call("recent_history", store.recent_history, owner, cfg.history_limit)
    return GameView(state=state, history=list(history))


def play_turn(
    store: GameStore,
    owner_id: Optional[str],
    raw_decision: Any,
    config: Optional[EngineConfig] = None,
) -> GameView:
    cfg = config or EngineConfig()
    owner = _require_owner(owner_id)
    decision = decision_from_mapping(raw_decision)

    current = _store_call("load", store.load, owner)
    if current is None:
        raise GameNotFound(f"no game state for {owner}")

    if current.is_over:
        logger.debug("Game for %s is already over; turn ignored", owner)

    new_state, snapshot = advance(current, decision, balance=cfg.balance)

    _store_call("save", store.save, new_state)
    _store_call("append_history", store.append_history, owner, snapshot)

    if not current.is_over:
        logger.info(
            "Owner %s finished quarter %d: cash=%.2f revenue=%.2f net_income=%.2f",
            owner,
            current.quarter,
            new_state.cash,
            new_state.last_revenue,
            new_state.last_net_income,
        )
        if new_state.is_over:
            logger.info("Game for %s ended at quarter %d: %s", owner, new_state.quarter, "won" if new_state.is_won else "lost")

    history = _store_call("recent_history", store.recent_history, owner, cfg.history_limit)
    return GameView(state=new_state, history=list(history))
