"""
rules.py - Game flow and Gymnasium environment for dropfour

This module provides:
1. DropFourGame, which runs the drop / win check / switch turn cycle
2. DropFourEnv, a gymnasium-compatible environment over the same game
"""

from dataclasses import replace
from enum import Enum, auto
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from dropfour.config import GameOptions
from dropfour.debug import debug
from dropfour.errors import EndOfInput, GameOver, GamePlayError, InvalidBoard, PlayerInputError
from dropfour.game.board import Board
from dropfour.players import Player
from dropfour.utils import Cell, RulesVariation, Token


class GameResult(Enum):
    """Outcome of a game so far."""
    IN_PROGRESS = auto()
    RED_WIN = auto()
    YELLOW_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        return self != GameResult.IN_PROGRESS


class DropFourGame:
    """
    A single game session.

    play() drops the current token, records a win or a draw and otherwise
    passes the turn, which is the sequence a shell would otherwise have to
    call on the Board by hand.
    """

    def __init__(self, options: Optional[GameOptions] = None):
        self.options = options or GameOptions()
        self.reset()

    def reset(self):
        """Start over on an empty board."""
        debug.debug("Resetting game", "game")
        self.board = Board(self.options.rules)
        self.result = GameResult.IN_PROGRESS
        self.winning_cells: List[Cell] = []

    @property
    def current_token(self) -> Token:
        return self.board.current_token

    @property
    def winner(self) -> Optional[Token]:
        if self.result == GameResult.RED_WIN:
            return Token.RED
        elif self.result == GameResult.YELLOW_WIN:
            return Token.YELLOW
        return None

    def is_game_over(self) -> bool:
        return self.result.is_game_over()

    def play(self, column: int) -> int:
        """
        Play the current token into a column.

        Args:
            column: Zero-based column index

        Returns:
            The row the token landed in

        Raises:
            GameOver: the game has already been decided
            InvalidColumn, ColumnFull: the move was rejected
        """
        if self.is_game_over():
            raise GameOver(f"game is over ({self.result.name})", column)

        mover = self.board.current_token
        row = self.board.drop(column)
        self._update_result()

        if self.is_game_over():
            debug.info(f"Game over after {len(self.board.history)} moves: {self.result.name}", "game")
        else:
            self.board.switch_turn()

        debug.debug(f"{mover.name} played column {column}", "game")
        return row

    def _update_result(self):
        self.winning_cells = self.board.winning_cells()
        if self.winning_cells:
            token = self.board.cell(*self.board.last_move)
            self.result = GameResult.RED_WIN if token == Token.RED else GameResult.YELLOW_WIN
        elif self.board.is_full():
            self.result = GameResult.DRAW
        else:
            self.result = GameResult.IN_PROGRESS

    def load(self, text: str, rules: Optional[RulesVariation] = None):
        """
        Replace the board with one rebuilt from a save string.

        The moves are replayed through play(), so the loaded game ends up
        exactly as a live game would: the winner keeps the turn, and a save
        string that carries on after a win is rejected.

        Args:
            text: Save string
            rules: Rules variation to load with, defaults to the game's own

        Raises:
            BadFormat, InvalidBoard: the save string was rejected; the
                current game is left as it was
        """
        options = replace(self.options, rules=rules) if rules is not None else self.options
        moves = Board.from_serialized(text, options.rules).history

        replay = DropFourGame(options)
        for position, column in enumerate(moves):
            try:
                replay.play(column)
            except GameOver:
                raise InvalidBoard(f"move {position} is played after the game was decided") from None

        self.options = options
        self.board = replay.board
        self.result = replay.result
        self.winning_cells = replay.winning_cells
        debug.info(f"Loaded game of {len(moves)} moves ({self.result.name})", "game")

    def save(self) -> str:
        return self.board.serialize()

    def run(self, players: Sequence[Player],
            on_move: Optional[Callable[['DropFourGame', Player, int, int], None]] = None,
            on_error: Optional[Callable[[Player, Exception], None]] = None) -> GameResult:
        """
        Play the game to the end with two players.

        players[0] plays RED and players[1] plays YELLOW. Rejected input or
        rejected moves are reported to on_error and the same player is asked
        again.

        Raises:
            EndOfInput: a player ran out of input before the game ended
        """
        if len(players) != 2:
            raise ValueError("a game needs exactly two players")

        while not self.is_game_over():
            player = players[0] if self.current_token == Token.RED else players[1]
            try:
                column = player.next_move()
                row = self.play(column)
            except EndOfInput:
                debug.warning(f"{player.name()} stopped providing moves", "game")
                raise
            except (PlayerInputError, GamePlayError) as e:
                debug.debug(f"Rejected move from {player.name()}: {e}", "game")
                if on_error:
                    on_error(player, e)
                continue

            if on_move:
                on_move(self, player, column, row)

        return self.result

    def render(self) -> str:
        return self.board.render(self.winning_cells)


class DropFourEnv(gym.Env):
    """
    dropfour environment following the Gymnasium interface.

    Actions are column indices. The observation is the grid, shape
    (columns, rows), with 0 for empty, 1 for RED and 2 for YELLOW. Rewards
    are given from the point of view of the player who just moved.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, options: Optional[GameOptions] = None, render_mode: Optional[str] = None):
        debug.debug("Initializing DropFourEnv", "env")
        self.game = DropFourGame(options)
        self.render_mode = render_mode

        columns, rows = self.game.board.columns, self.game.board.rows
        self.action_space = spaces.Discrete(columns)
        self.observation_space = spaces.Box(low=0, high=2, shape=(columns, rows), dtype=np.int8)

        self.reward_win = 1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        super().reset(seed=seed)
        self.game.reset()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play one column.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        action = int(action)
        if self.game.is_game_over() or not self.game.board.is_valid_move(action):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        self.game.play(action)

        reward = self.reward_step
        terminated = self.game.is_game_over()
        if self.game.winner is not None:
            reward = self.reward_win
        elif self.game.result == GameResult.DRAW:
            reward = self.reward_draw

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.game.render()
        elif self.render_mode == "human":
            print(self.game.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.game.board.get_state()

    def _get_info(self) -> Dict:
        board = self.game.board
        return {
            'valid_moves': [] if self.game.is_game_over() else board.get_valid_moves(),
            'current_player': board.current_token.value,
            'game_result': self.game.result.name,
            'moves_made': len(board.history),
            'winning_cells': list(self.game.winning_cells),
            'last_move': board.last_move,
        }
