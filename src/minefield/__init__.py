"""
Minefield game module.

Provides core game logic including board management, cell state,
power-ups, the player and game sessions.
"""
from .powerup import PowerUpKind, describe
from .cell import Cell, CellState
from .player import Player, MAX_HEALTH
from .difficulty import (
    Difficulty,
    BoardConfig,
    CustomGameSettings,
    InvalidSettingsError,
    EASY_CONFIG,
    MEDIUM_CONFIG,
    HARD_CONFIG,
)
from .board import Board, CellView, GameState
from .session import GameSession
from .environment import ActionType, MinesweeperEnv

__all__ = [
    "PowerUpKind",
    "describe",
    "Cell",
    "CellState",
    "Player",
    "MAX_HEALTH",
    "Difficulty",
    "BoardConfig",
    "CustomGameSettings",
    "InvalidSettingsError",
    "EASY_CONFIG",
    "MEDIUM_CONFIG",
    "HARD_CONFIG",
    "Board",
    "CellView",
    "GameState",
    "GameSession",
    "ActionType",
    "MinesweeperEnv",
]
