import logging

import pytest

from core.errors import GameNotFound, InvalidDecisionInput, StorageError, Unauthorized
from core.state import initial_state
from engine.config import EngineConfig
from engine.session import load_or_create, play_turn
from engine.store import InMemoryGameStore

BODY = {"price": 1000, "new_engineers": 0, "new_sales_staff": 0, "salary_pct": 100}


def test_load_or_create_seeds_state_and_history():
    store = InMemoryGameStore()
    view = load_or_create(store, "u1")

    assert view.state == initial_state("u1")
    assert store.load("u1") == view.state
    assert [s.quarter for s in view.history] == [1]
    assert view.history[0].revenue == 0
    assert view.history[0].cash == 1_000_000


def test_load_or_create_returns_existing_game():
    store = InMemoryGameStore()
    load_or_create(store, "u1")
    play_turn(store, "u1", BODY)
    view = load_or_create(store, "u1")
    assert view.state.quarter == 2
    assert [s.quarter for s in view.history] == [1, 2]


def test_play_turn_persists_and_returns_last_four_ascending():
    store = InMemoryGameStore()
    load_or_create(store, "u1")
    for _ in range(6):
        view = play_turn(store, "u1", BODY)

    assert view.state.quarter == 7
    assert store.load("u1") == view.state
    assert [s.quarter for s in view.history] == [4, 5, 6, 7]
    assert len(store.history["u1"]) == 7


def test_history_limit_from_config():
    store = InMemoryGameStore()
    cfg = EngineConfig(history_limit=2)
    load_or_create(store, "u1", cfg)
    view = play_turn(store, "u1", BODY, cfg)
    assert [s.quarter for s in view.history] == [1, 2]


def test_play_turn_without_game_is_not_found():
    with pytest.raises(GameNotFound):
        play_turn(InMemoryGameStore(), "ghost", BODY)


@pytest.mark.parametrize("owner", [None, "", "   "])
def test_missing_owner_is_unauthorized(owner):
    store = InMemoryGameStore()
    with pytest.raises(Unauthorized):
        load_or_create(store, owner)
    with pytest.raises(Unauthorized):
        play_turn(store, owner, BODY)


def test_malformed_body_is_rejected_before_touching_state():
    store = InMemoryGameStore()
    load_or_create(store, "u1")
    with pytest.raises(InvalidDecisionInput):
        play_turn(store, "u1", {"price": "cheap"})
    assert store.load("u1").quarter == 1


def test_finished_game_does_not_grow_history():
    store = InMemoryGameStore()
    load_or_create(store, "u1")
    ruin = {"price": 1, "new_engineers": 1000, "new_sales_staff": 0, "salary_pct": 200}
    lost = play_turn(store, "u1", ruin).state
    assert lost.is_over and not lost.is_won

    view = play_turn(store, "u1", BODY)
    assert view.state == lost
    assert [s.quarter for s in store.history["u1"]] == [1, 2]


def test_store_failures_become_storage_errors():
    class BrokenStore(InMemoryGameStore):
        def save(self, state):
            raise OSError("disk full")

    store = BrokenStore()
    with pytest.raises(StorageError, match="disk full"):
        load_or_create(store, "u1")


def test_turn_is_logged(caplog):
    store = InMemoryGameStore()
    with caplog.at_level(logging.INFO, logger="engine.session"):
        load_or_create(store, "u1")
        play_turn(store, "u1", BODY)
    messages = [r.getMessage() for r in caplog.records]
    assert any("Created game for u1" in m for m in messages)
    assert any("finished quarter 1" in m for m in messages)


def test_view_to_dict_shape():
    view = load_or_create(InMemoryGameStore(), "u1")
    d = view.to_dict()
    assert d["gameState"]["owner_id"] == "u1"
    assert d["history"][0]["quarter_in_year"] == 1


def test_oversized_integer_body_is_invalid_input():
    store = InMemoryGameStore()
    load_or_create(store, "u1")
    body = dict(BODY, new_engineers=10**400)
    with pytest.raises(InvalidDecisionInput):
        play_turn(store, "u1", body)
    assert store.load("u1").quarter == 1
