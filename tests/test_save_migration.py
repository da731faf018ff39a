import json
import random
from dataclasses import replace

import pytest

from bookie_sim.actions import DoMission, EndDay, SimulateGames
from bookie_sim.models import Mission, MissionReward
from bookie_sim.reducer import create_initial_state, reduce
from bookie_sim.session import GameSession
from bookie_sim.storage import (
    STORAGE_KEY,
    JsonFileStore,
    MemoryStore,
    SaveSlot,
    state_from_dict,
    state_to_dict,
)


def _played_week(seed: int = 5):
    rng = random.Random(seed)
    state = create_initial_state(rng)
    for _ in range(6):
        state = reduce(state, EndDay(), rng)
    return reduce(state, SimulateGames(), rng)


def test_state_round_trips_through_plain_dicts() -> None:
    state = _played_week()
    payload = state_to_dict(state)
    json.dumps(payload)
    assert state_from_dict(payload) == state


def test_game_status_keeps_its_kind() -> None:
    state = _played_week()
    payload = state_to_dict(state)
    kinds = {g["status"]["kind"] for g in payload["games"]}
    assert kinds == {"final"}
    restored = state_from_dict(payload)
    assert all(g.is_complete for g in restored.games)


def test_missing_save_loads_as_none() -> None:
    slot = SaveSlot(MemoryStore())
    assert slot.load() is None
    assert slot.last_load_error == ""


def test_save_then_load_from_memory() -> None:
    store = MemoryStore()
    state = _played_week(2)
    SaveSlot(store).save(state)
    assert SaveSlot(store).load() == state


@pytest.mark.regression
def test_loads_unversioned_payload(tmp_path) -> None:
    state = create_initial_state(random.Random(1))
    (tmp_path / f"{STORAGE_KEY}.json").write_text(json.dumps(state_to_dict(state)), encoding="utf-8")
    slot = SaveSlot(JsonFileStore(tmp_path))
    assert slot.load() == state


@pytest.mark.regression
def test_rejects_future_save_version_with_clear_error(tmp_path) -> None:
    state = create_initial_state(random.Random(1))
    (tmp_path / f"{STORAGE_KEY}.json").write_text(
        json.dumps({"save_version": 999, "game_state": state_to_dict(state)}),
        encoding="utf-8",
    )
    slot = SaveSlot(JsonFileStore(tmp_path))
    assert slot.load() is None
    assert "Unsupported save version" in slot.last_load_error


@pytest.mark.regression
def test_corrupt_save_is_reported_not_raised(tmp_path) -> None:
    (tmp_path / f"{STORAGE_KEY}.json").write_text("{not json", encoding="utf-8")
    slot = SaveSlot(JsonFileStore(tmp_path))
    assert slot.load() is None
    assert "Failed to load saved game" in slot.last_load_error


@pytest.mark.regression
def test_malformed_state_is_reported_not_raised(tmp_path) -> None:
    (tmp_path / f"{STORAGE_KEY}.json").write_text(
        json.dumps({"save_version": 1, "game_state": {"week": "soon"}}),
        encoding="utf-8",
    )
    slot = SaveSlot(JsonFileStore(tmp_path))
    assert slot.load() is None
    assert slot.last_load_error


@pytest.mark.regression
def test_save_includes_save_version_and_backup(tmp_path) -> None:
    slot = SaveSlot(JsonFileStore(tmp_path))
    save_path = tmp_path / f"{STORAGE_KEY}.json"
    backup_path = tmp_path / f"{STORAGE_KEY}.json.bak"
    state = create_initial_state(random.Random(3))

    # First write creates the primary file.
    slot.save(state)
    payload = json.loads(save_path.read_text(encoding="utf-8"))
    assert payload["save_version"] == SaveSlot.SAVE_VERSION
    assert not backup_path.exists()

    # Second write should create/refresh backup.
    slot.save(state)
    assert backup_path.exists()


def test_clear_removes_the_save(tmp_path) -> None:
    store = JsonFileStore(tmp_path)
    slot = SaveSlot(store)
    slot.save(create_initial_state(random.Random(3)))
    slot.clear()
    assert slot.load() is None
    slot.clear()


def test_session_starts_fresh_and_persists_each_move(tmp_path) -> None:
    store = JsonFileStore(tmp_path)
    session = GameSession(store, random.Random(4))
    assert session.state.day == 1
    assert (tmp_path / f"{STORAGE_KEY}.json").exists()

    session.dispatch(EndDay())
    resumed = GameSession(store, random.Random(99))
    assert resumed.state == session.state
    assert resumed.state.day == 2


def test_session_recovers_from_a_corrupt_save(tmp_path) -> None:
    (tmp_path / f"{STORAGE_KEY}.json").write_text("[]", encoding="utf-8")
    session = GameSession(JsonFileStore(tmp_path), random.Random(4))
    assert session.state.week == 1
    assert "invalid format" in session.last_load_error


def test_session_leaves_finished_books_alone() -> None:
    store = MemoryStore()
    session = GameSession(store, random.Random(4))
    mission = Mission(
        mission_id="mission-f",
        mission_type="fix_game",
        title="Get to the officials",
        description="",
        location="Parking Garage",
        energy_cost=1,
        money_cost=0,
        risk=0.0,
        reward=MissionReward(heat=35),
    )
    session.state = replace(session.state, heat=80, available_missions=(mission,))
    session.save()
    before = store.get(STORAGE_KEY)

    session.dispatch(DoMission(mission_id="mission-f"))
    assert session.state.is_game_over
    assert store.get(STORAGE_KEY) == before
