"""
Base agent interface for minefield agents.

Defines the abstract interface that all agents must implement.
"""
from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np

from minefield.environment import ActionType


# ============================================================================
# Base Agent Interface
# ============================================================================

class BaseAgent(ABC):
    """
    Abstract base class for minefield agents.

    All agents must implement the select_action method to choose an
    action from the current observation.
    """

    def __init__(self, board_rows: int, board_cols: int) -> None:
        """
        Initialize the agent.

        Args:
            board_rows: Number of rows in the board.
            board_cols: Number of columns in the board.
        """
        self.board_rows = board_rows
        self.board_cols = board_cols
        self.total_cells = board_rows * board_cols
        self.num_actions = len(ActionType) * self.total_cells

    @abstractmethod
    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select an action based on the current observation.

        Args:
            observation: 2D array of cell codes.
            valid_actions: Optional mask of valid actions.

        Returns:
            Encoded action index.
        """
        pass

    def action_to_position(self, action: int) -> Tuple[ActionType, int, int]:
        """Convert flat action index to (type, row, col)."""
        action_type = ActionType(action // self.total_cells)
        row, col = divmod(action % self.total_cells, self.board_cols)
        return action_type, row, col

    def position_to_action(
        self, row: int, col: int, action_type: ActionType = ActionType.CLICK
    ) -> int:
        """Convert (row, col) position to flat action index."""
        return int(action_type) * self.total_cells + row * self.board_cols + col

    def get_valid_actions_from_obs(self, observation: np.ndarray) -> np.ndarray:
        """
        Get a click-only valid actions mask from observation.

        Args:
            observation: 2D array of cell codes.

        Returns:
            Boolean mask where True = valid action.
        """
        mask = np.zeros(self.num_actions, dtype=bool)
        # Hidden cells (value -1) can be clicked
        mask[: self.total_cells] = observation.flatten() == -1
        return mask

    def reset(self) -> None:
        """Reset agent state for new episode."""
        pass
