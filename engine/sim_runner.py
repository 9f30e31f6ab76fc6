"""engine.sim_runner

Headless runner for quick sanity checks.

This keeps runs deterministic and CI-friendly by avoiding storage and network.
Decisions come from a tiny scripted policy instead of a player.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from core.state import DecisionInput, GameState, QuarterSnapshot, initial_state

from .config import EngineConfig
from .pipeline import apply_decision
from .run_log import make_run_export

DEFAULT_DECISION = DecisionInput(price=1000, new_engineers=0, new_sales_staff=0, salary_pct=100)


@dataclass
class ScriptedPolicy:
    """Deterministic player for tests: cycles through `decisions`."""

    decisions: Sequence[DecisionInput] = field(default_factory=lambda: [DEFAULT_DECISION])

    def decide(self, state: GameState) -> DecisionInput:
        if not self.decisions:
            return DEFAULT_DECISION
        return self.decisions[(int(state.quarter) - 1) % len(self.decisions)]


def run_headless_sim(
    policy: Optional[ScriptedPolicy] = None,
    *,
    max_quarters: int = 40,
    owner_id: str = "headless",
    config: Optional[EngineConfig] = None,
) -> Dict[str, Any]:
    """Play until the game is over or `max_quarters` transitions ran; return summary."""
    cfg = config or EngineConfig()
    pol = policy or ScriptedPolicy()

    start = initial_state(owner_id, cfg.balance)
    state = start
    snapshots: List[QuarterSnapshot] = []
    logs: List[Dict[str, Any]] = []

    for _ in range(int(max_quarters)):
        if state.is_over:
            break
        state, snapshot, log = apply_decision(state, pol.decide(state), balance=cfg.balance)
        snapshots.append(snapshot)
        logs.append(log)

    if not state.is_over:
        outcome = "running"
    else:
        outcome = "won" if state.is_won else "lost"

    return {
        "quarters_played": len(logs),
        "final": state,
        "snapshots": snapshots,
        "logs": logs,
        "outcome": outcome,
        "export": make_run_export(config=cfg.to_dict(), initial_state=start, quarter_logs=logs),
    }
