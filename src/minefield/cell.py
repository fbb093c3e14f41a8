"""
Cell module for the minefield game.

Represents individual cells on the game board with their visual state
(hidden/revealed/flagged), their content (bomb/number/power-up) and
whether they are part of the playable land at all.
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional

from .powerup import PowerUpKind


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# Observation codes for non-numeric cells
OBS_HIDDEN = -1
OBS_FLAGGED = -2
OBS_WATER = -3
OBS_DESTROYED = -4
OBS_BOMB = 9

POWER_UP_OBSERVATIONS = {
    PowerUpKind.HEAL: 10,
    PowerUpKind.REVEAL: 11,
    PowerUpKind.BOMB: 12,
}


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the grid.

    Attributes:
        is_bomb: Whether this cell contains a bomb.
        adjacent_bombs: Count of bombs in neighboring cells (0-8).
        state: Current visual state (hidden, revealed, or flagged).
        is_destroyed: Whether the cell was blown up by a bomb power-up.
        hidden_power_up: Power-up buried in the cell, until first reveal.
        revealed_power_up: Power-up icon showing on a revealed cell,
            until the player claims it.
        is_playable: False for water cells on island maps.
    """

    is_bomb: bool = False
    adjacent_bombs: int = 0
    state: CellState = CellState.HIDDEN
    is_destroyed: bool = False
    hidden_power_up: Optional[PowerUpKind] = None
    revealed_power_up: Optional[PowerUpKind] = None
    is_playable: bool = True

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was successfully revealed, False if already
            revealed or flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    def destroy(self) -> None:
        """Blow the cell up: it becomes revealed and loses any power-up."""
        self.is_destroyed = True
        self.state = CellState.REVEALED
        self.hidden_power_up = None
        self.revealed_power_up = None

    def claim_hidden_power_up(self) -> Optional[PowerUpKind]:
        """
        Move the buried power-up onto the tile face.

        The icon becomes visible but is not yet in the player's inventory.

        Returns:
            The power-up kind, or None if the cell had none.
        """
        kind = self.hidden_power_up
        if kind is not None:
            self.revealed_power_up = kind
        self.hidden_power_up = None
        return kind

    def collect_revealed_power_up(self) -> Optional[PowerUpKind]:
        """
        Pick up the icon showing on this cell.

        Returns:
            The power-up kind, or None if no icon was showing.
        """
        kind = self.revealed_power_up
        self.revealed_power_up = None
        return kind

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def has_icon(self) -> bool:
        """Check if a claimable power-up icon is showing."""
        return self.is_revealed and self.revealed_power_up is not None

    def to_observation(self) -> int:
        """
        Convert cell to observation value for agents and renderers.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            -3: Water (not playable)
            -4: Destroyed cell
            0-8: Revealed cell with adjacent bomb count
            9: Revealed bomb
            10-12: Revealed heal/reveal/bomb power-up icon
        """
        if not self.is_playable:
            return OBS_WATER
        if self.state == CellState.HIDDEN:
            return OBS_HIDDEN
        if self.state == CellState.FLAGGED:
            return OBS_FLAGGED
        if self.is_destroyed:
            return OBS_DESTROYED
        if self.is_bomb:
            return OBS_BOMB
        if self.revealed_power_up is not None:
            return POWER_UP_OBSERVATIONS[self.revealed_power_up]
        return self.adjacent_bombs
