"""
saves.py - Named save slots for dropfour games

Save strings are kept in a single JSON file in the save directory. Reads and
writes take a file lock, and writes go through a temporary file that is moved
into place.
"""

import datetime
import json
import os
import shutil
from typing import Any, Dict, List, Optional

import filelock

from dropfour.config import DEFAULT_SAVE_DIR
from dropfour.debug import debug
from dropfour.game.board import Board
from dropfour.utils import MIN_SAVE_LENGTH, RulesVariation

SAVES_FILENAME = "saves.json"


class SaveStore:
    """JSON-backed collection of save slots."""

    def __init__(self, save_dir: Optional[str] = None):
        self.save_dir = save_dir or DEFAULT_SAVE_DIR
        self.path = os.path.join(self.save_dir, SAVES_FILENAME)
        self._lock = filelock.FileLock(f"{self.path}.lock")

    def _read(self) -> List[Dict[str, Any]]:
        if not os.path.exists(self.path):
            return []
        with open(self.path, 'r') as f:
            try:
                return json.load(f)
            except json.JSONDecodeError as e:
                debug.error(f"Error decoding JSON from {self.path}: {e}", "saves")
                raise

    def _write(self, slots: List[Dict[str, Any]]):
        temp_file = f"{self.path}.tmp"
        try:
            with open(temp_file, 'w') as f:
                json.dump(slots, f, indent=2)
            shutil.move(temp_file, self.path)
        except OSError as e:
            debug.error(f"Error writing to {self.path}: {e}", "saves")
            raise

    def save_game(self, name: str, board: Board) -> Dict[str, Any]:
        """
        Store a board under a slot name, replacing any slot with that name.

        Returns:
            The stored slot record

        Raises:
            ValueError: the board has too few moves to be reloaded
        """
        if len(board.history) < MIN_SAVE_LENGTH:
            raise ValueError(f"a save needs at least {MIN_SAVE_LENGTH} moves")

        record = {
            "name": name,
            "moves": board.serialize(),
            "rules": board.variation.name.lower(),
            "saved_at": datetime.datetime.now().isoformat(timespec="seconds"),
        }

        os.makedirs(self.save_dir, exist_ok=True)
        with self._lock:
            slots = [slot for slot in self._read() if slot["name"] != name]
            slots.append(record)
            self._write(slots)

        debug.info(f"Saved '{name}' ({len(board.history)} moves)", "saves")
        return record

    def get_slot(self, name: str) -> Dict[str, Any]:
        """
        Raises:
            KeyError: no slot with that name
        """
        for slot in self.list_saves():
            if slot["name"] == name:
                return slot
        raise KeyError(name)

    def load_game(self, name: str) -> Board:
        """
        Rebuild the board stored in a slot.

        Raises:
            KeyError: no slot with that name
            BoardError: the stored moves no longer replay
        """
        slot = self.get_slot(name)
        board = Board.from_serialized(slot["moves"], RulesVariation.from_name(slot["rules"]))
        debug.debug(f"Loaded '{name}'", "saves")
        return board

    def list_saves(self) -> List[Dict[str, Any]]:
        if not os.path.exists(self.path):
            return []
        with self._lock:
            return self._read()

    def delete_save(self, name: str):
        """
        Raises:
            KeyError: no slot with that name
        """
        if not os.path.exists(self.path):
            raise KeyError(name)
        with self._lock:
            slots = self._read()
            remaining = [slot for slot in slots if slot["name"] != name]
            if len(remaining) == len(slots):
                raise KeyError(name)
            self._write(remaining)
        debug.info(f"Deleted '{name}'", "saves")
