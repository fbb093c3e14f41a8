"""
Gymnasium environment wrapper for the minefield game.

Provides a standard RL interface so agents can play full games,
including flags and power-ups.
"""
import random
from enum import IntEnum
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board
from .cell import OBS_DESTROYED, OBS_WATER, POWER_UP_OBSERVATIONS
from .difficulty import BoardConfig
from .player import MAX_HEALTH
from .powerup import PowerUpKind
from .session import GameSession


# ============================================================================
# Constants
# ============================================================================

class ActionType(IntEnum):
    """What an action does to its target cell."""

    CLICK = 0
    FLAG = 1
    REVEAL_AREA = 2
    CLEAR_AREA = 3
    HEAL = 4


REWARD_CELL = 1.0
REWARD_POWER_UP = 0.5
REWARD_DAMAGE = -1.0
REWARD_WIN = 10.0
REWARD_LOSS = -10.0
REWARD_INVALID = -0.1

_ANSI_SYMBOLS = {
    -1: ".",
    -2: "F",
    OBS_WATER: "~",
    OBS_DESTROYED: "x",
    0: " ",
    9: "*",
    POWER_UP_OBSERVATIONS[PowerUpKind.HEAL]: "H",
    POWER_UP_OBSERVATIONS[PowerUpKind.REVEAL]: "R",
    POWER_UP_OBSERVATIONS[PowerUpKind.BOMB]: "B",
}


# ============================================================================
# Minefield Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for the minefield game.

    Observation:
        2D array of Cell.to_observation codes:
        - -1 = hidden, -2 = flagged, -3 = water, -4 = destroyed
        - 0-8 = revealed cell with adjacent bomb count
        - 9 = revealed bomb
        - 10-12 = heal/reveal/bomb power-up icon

    Actions:
        Discrete action space of size len(ActionType) * rows * cols.
        Action i applies ActionType(i // cells) to cell i % cells, where
        cell k is (k // cols, k % cols). HEAL ignores its cell.

    Rewards:
        - +1 per cell counted toward the win
        - +0.5 per power-up picked up
        - -1 per health point lost
        - +10 for winning, -10 for losing
        - -0.1 for an action that does nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        use_noise: bool = False,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Board configuration (default: 9x9 with 10 bombs).
            use_noise: Play on generated island maps of the same size.
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.use_noise = use_noise
        self.render_mode = render_mode
        self._cells = self.config.rows * self.config.cols

        self.observation_space = spaces.Box(
            low=OBS_DESTROYED,
            high=max(POWER_UP_OBSERVATIONS.values()),
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(len(ActionType) * self._cells)

        self._steps = 0
        self._last_pickup = False
        self.session = self._new_session()

    @property
    def board(self) -> Board:
        return self.session.board

    def _new_session(self) -> GameSession:
        """Start a game using the environment's random generator."""
        rng = random.Random(int(self.np_random.integers(2**63)))
        if not self.use_noise:
            return GameSession(Board(self.config, rng=rng))

        from terrain.generator import build_noise_board, random_seed

        board = build_noise_board(
            self.config.rows,
            self.config.cols,
            random_seed(rng),
            self.config.difficulty,
            rng=rng,
        )
        return GameSession(board)

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.session = self._new_session()
        self._steps = 0
        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Encoded action (see class docstring).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        action_type, row, col = self.decode_action(action)
        self._steps += 1

        reward = self._calculate_reward(action_type, row, col)
        observation = self.board.get_observation()
        terminated = self.session.is_over

        return observation, reward, terminated, False, self._get_info()

    def decode_action(self, action: int) -> Tuple[ActionType, int, int]:
        """Convert a flat action into (type, row, col)."""
        action_type = ActionType(int(action) // self._cells)
        row, col = divmod(int(action) % self._cells, self.config.cols)
        return action_type, row, col

    def encode_action(self, action_type: ActionType, row: int, col: int) -> int:
        """Convert (type, row, col) into a flat action."""
        return int(action_type) * self._cells + row * self.config.cols + col

    def _calculate_reward(
        self, action_type: ActionType, row: int, col: int
    ) -> float:
        """Apply an action and score its effect."""
        revealed_before = self.board.revealed_count
        health_before = self.session.player.health

        if not self._apply(action_type, row, col):
            return REWARD_INVALID

        reward = REWARD_CELL * (self.board.revealed_count - revealed_before)
        reward += REWARD_DAMAGE * (health_before - self.session.player.health)
        if action_type == ActionType.CLICK and self._last_pickup:
            reward += REWARD_POWER_UP
        if self.board.is_won:
            reward += REWARD_WIN
        elif self.board.is_lost:
            reward += REWARD_LOSS
        return reward

    def _apply(self, action_type: ActionType, row: int, col: int) -> bool:
        """Apply an action; returns False if it did nothing."""
        self._last_pickup = False
        if self.session.is_over:
            return False
        if action_type == ActionType.CLICK:
            cell = self.board.get_cell(row, col)
            if cell is None or not cell.is_playable:
                return False
            if not (cell.is_hidden or cell.has_icon):
                return False
            self._last_pickup = cell.has_icon
            self.session.click(row, col)
            return True
        if action_type == ActionType.FLAG:
            return self.session.toggle_flag(row, col)
        if action_type == ActionType.REVEAL_AREA:
            return self.session.use_reveal(row, col)
        if action_type == ActionType.CLEAR_AREA:
            return self.session.use_bomb(row, col)
        return self.session.use_heal()

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        player = self.session.player
        return {
            "steps": self._steps,
            "revealed": self.board.revealed_count,
            "total_safe": self.board.playable_count - self.board.bomb_budget,
            "game_state": self.board.game_state.name,
            "health": player.health,
            "charges": {kind.value: player.charges(kind) for kind in PowerUpKind},
            "flags": self.board.flags_placed,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """Render board as ASCII string."""
        return render_observation(self.board.get_observation())

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.session.is_over:
            return mask

        player = self.session.player
        for row, col in self.board.get_valid_actions():
            mask[self.encode_action(ActionType.CLICK, row, col)] = True

        area_ready = self.board.can_use_area_power_up
        for row, col in self.board.iter_positions():
            cell = self.board.get_cell(row, col)
            if not cell.is_playable:
                continue
            if not cell.is_revealed:
                mask[self.encode_action(ActionType.FLAG, row, col)] = True
            if area_ready and player.reveal_charges > 0:
                mask[self.encode_action(ActionType.REVEAL_AREA, row, col)] = True
            if area_ready and player.bomb_charges > 0:
                mask[self.encode_action(ActionType.CLEAR_AREA, row, col)] = True

        if player.heal_charges > 0 and player.health < MAX_HEALTH:
            mask[self.encode_action(ActionType.HEAL, 0, 0)] = True
        return mask


def render_observation(obs: np.ndarray) -> str:
    """Render an observation array as ASCII text."""
    lines = []
    for row in range(obs.shape[0]):
        row_str = ""
        for col in range(obs.shape[1]):
            val = int(obs[row, col])
            row_str += _ANSI_SYMBOLS.get(val, str(val))
            row_str += " "
        lines.append(row_str)
    return "\n".join(lines)
