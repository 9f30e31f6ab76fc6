"""engine.store

Storage collaborator interface.

A store's job is to keep one GameState per owner and an append-only,
owner-scoped history of QuarterSnapshots keyed by ascending quarter.
The engine never persists anything itself; engine.session drives a store.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Protocol

from core.errors import StorageError
from core.state import GameState, QuarterSnapshot


class GameStore(Protocol):
    def load(self, owner_id: str) -> Optional[GameState]: ...

    def save(self, state: GameState) -> None:
        """Replace the owner's record with `state`."""
        ...

    def append_history(self, owner_id: str, snapshot: QuarterSnapshot) -> None: ...

    def recent_history(self, owner_id: str, limit: int) -> List[QuarterSnapshot]:
        """Return the last `limit` snapshots, ascending by quarter."""
        ...


class InMemoryGameStore:
    """Dict-backed store for tests and headless runs."""

    def __init__(self) -> None:
        self.states: Dict[str, GameState] = {}
        self.history: Dict[str, List[QuarterSnapshot]] = {}

    def load(self, owner_id: str) -> Optional[GameState]:
        return self.states.get(owner_id)

    def save(self, state: GameState) -> None:
        self.states[state.owner_id] = state

    def append_history(self, owner_id: str, snapshot: QuarterSnapshot) -> None:
        rows = self.history.setdefault(owner_id, [])
        if rows:
            last = rows[-1]
            if snapshot == last:
                # finished games replay their last snapshot; keep quarters unique
                return
            if snapshot.quarter <= last.quarter:
                raise StorageError(
                    f"history for {owner_id!r} already has quarter {last.quarter}; got {snapshot.quarter}"
                )
        rows.append(snapshot)

    def recent_history(self, owner_id: str, limit: int) -> List[QuarterSnapshot]:
        rows = self.history.get(owner_id, [])
        if limit <= 0:
            return []
        return list(rows[-int(limit):])
