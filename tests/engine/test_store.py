import pytest

from core.errors import StorageError
from core.state import initial_state, snapshot_of
from engine.pipeline import advance
from engine.sim_runner import DEFAULT_DECISION
from engine.store import InMemoryGameStore


def test_history_rejects_out_of_order_quarters():
    store = InMemoryGameStore()
    start = initial_state("u1")
    nxt, snap = advance(start, DEFAULT_DECISION)
    store.append_history("u1", snap)
    with pytest.raises(StorageError):
        store.append_history("u1", snapshot_of(start))


def test_recent_history_limit():
    store = InMemoryGameStore()
    state = initial_state("u1")
    store.append_history("u1", snapshot_of(state))
    for _ in range(3):
        state, snap = advance(state, DEFAULT_DECISION)
        store.append_history("u1", snap)
    assert [s.quarter for s in store.recent_history("u1", 2)] == [3, 4]
    assert store.recent_history("u1", 0) == []
    assert store.recent_history("nobody", 4) == []
