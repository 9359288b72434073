import json

import pytest

from dropfour.data.saves import SaveStore
from dropfour.errors import InvalidBoard
from dropfour.game.board import Board


@pytest.fixture
def store(options):
    return SaveStore(options.save_dir)


def test_no_saves_yet(store):
    assert store.list_saves() == []


def test_save_and_load_round_trip(store):
    board = Board.from_serialized("33445")
    record = store.save_game("friday", board)

    assert record["moves"] == "33445"
    assert record["rules"] == "classic"
    assert store.load_game("friday") == board


def test_saving_same_name_replaces_slot(store):
    store.save_game("slot", Board.from_serialized("123"))
    store.save_game("slot", Board.from_serialized("1234"))

    slots = store.list_saves()
    assert len(slots) == 1
    assert slots[0]["moves"] == "1234"


def test_short_game_is_not_saved(store):
    board = Board()
    board.drop(0)
    with pytest.raises(ValueError):
        store.save_game("tiny", board)
    assert store.list_saves() == []


def test_missing_slot(store):
    with pytest.raises(KeyError):
        store.load_game("nope")
    with pytest.raises(KeyError):
        store.delete_save("nope")


def test_delete_slot(store):
    store.save_game("a", Board.from_serialized("123"))
    store.save_game("b", Board.from_serialized("456"))
    store.delete_save("a")

    assert [slot["name"] for slot in store.list_saves()] == ["b"]


def test_tampered_slot_fails_to_load(store):
    store.save_game("a", Board.from_serialized("123"))
    with open(store.path) as f:
        slots = json.load(f)
    slots[0]["moves"] = "789"
    with open(store.path, "w") as f:
        json.dump(slots, f)

    with pytest.raises(InvalidBoard):
        store.load_game("a")
