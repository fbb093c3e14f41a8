"""
Board module for the minefield game.

Implements the game board with bomb and power-up placement, budgeted
cascade revealing, area-effect power-ups and game state management.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .cell import Cell
from .difficulty import BoardConfig, Difficulty
from .player import Player
from .powerup import PowerUpKind


logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


# Power-ups placed per game: MIN_POWER_UPS plus one per this many cells
MIN_POWER_UPS = 2
CELLS_PER_EXTRA_POWER_UP = 75


@dataclass(frozen=True)
class CellView:
    """
    What a front end may show for one cell.

    Bomb and count information is only exposed once the cell is revealed.
    """

    playable: bool
    revealed: bool
    flagged: bool
    destroyed: bool
    bomb: bool
    adjacent_bombs: Optional[int]
    power_up: Optional[PowerUpKind]


# ============================================================================
# Board Class
# ============================================================================

@dataclass(eq=False)
class Board:
    """
    Game board.

    Manages the grid of cells, bomb and power-up placement, revealing
    logic and win/lose conditions. Cells are stored row-major in a flat
    list. Boards built from an island map only play on land cells.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    playable: Optional[np.ndarray] = field(default=None, repr=False)
    rng: random.Random = field(default_factory=random.Random, repr=False)
    _cells: List[Cell] = field(default_factory=list, init=False, repr=False)
    _game_state: GameState = field(default=GameState.PLAYING, init=False)
    _first_click: bool = field(default=True, init=False)
    _revealed_count: int = field(default=0, init=False)
    _flags_placed: int = field(default=0, init=False)
    _playable_count: int = field(default=0, init=False)
    _bomb_budget: int = field(default=0, init=False)
    _cascade_remaining: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate the playable map and initialize the grid."""
        if self.playable is not None:
            self.playable = np.asarray(self.playable, dtype=bool)
            expected = (self.config.rows, self.config.cols)
            if self.playable.shape != expected:
                raise ValueError(
                    f"Playable map shape {self.playable.shape} does not "
                    f"match board size {expected}"
                )
            self._playable_count = int(self.playable.sum())
        else:
            self._playable_count = self.config.rows * self.config.cols

        # At least one playable cell must stay safe
        self._bomb_budget = min(
            self.config.num_bombs, max(0, self._playable_count - 1)
        )
        self._init_grid()

    @classmethod
    def from_layout(
        cls,
        config: BoardConfig,
        bombs: Iterable[Position],
        power_ups: Optional[Dict[Position, PowerUpKind]] = None,
        playable: Optional[np.ndarray] = None,
        rng: Optional[random.Random] = None,
    ) -> "Board":
        """
        Build a board with a fixed bomb and power-up layout.

        The board skips lazy placement: the first click is an ordinary
        click. The bomb budget is the number of bombs given.

        Args:
            config: Board size and difficulty (its bomb count is ignored).
            bombs: Positions holding bombs.
            power_ups: Positions holding hidden power-ups.
            playable: Optional island map.
            rng: Random source (unused once laid out).

        Raises:
            ValueError: If a position is off the board or on water, or
                if no safe playable cell would remain.
        """
        board = cls(config, playable, rng or random.Random())
        bomb_positions = set(bombs)
        if len(bomb_positions) > max(0, board._playable_count - 1):
            raise ValueError("Layout leaves no safe playable cell")

        for row, col in bomb_positions:
            board._get_playable_cell(row, col).is_bomb = True
        for (row, col), kind in (power_ups or {}).items():
            cell = board._get_playable_cell(row, col)
            if cell.is_bomb:
                raise ValueError(f"Power-up at {(row, col)} sits on a bomb")
            cell.hidden_power_up = kind

        board._bomb_budget = len(bomb_positions)
        board._calculate_adjacent_bombs()
        board._first_click = False
        return board

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._cells = []
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                is_playable = (
                    self.playable is None or bool(self.playable[row, col])
                )
                self._cells.append(Cell(is_playable=is_playable))

    def _index(self, row: int, col: int) -> int:
        return row * self.config.cols + col

    def _cell_at(self, row: int, col: int) -> Cell:
        return self._cells[self._index(row, col)]

    def _get_playable_cell(self, row: int, col: int) -> Cell:
        if not self._is_valid_position(row, col):
            raise ValueError(f"Position {(row, col)} is off the board")
        cell = self._cell_at(row, col)
        if not cell.is_playable:
            raise ValueError(f"Position {(row, col)} is not playable")
        return cell

    def setup(self, safe_row: int, safe_col: int) -> None:
        """
        Place bombs and power-ups, keeping one cell bomb-free.

        Runs once per game, normally on the first click.

        Args:
            safe_row: Row of the cell that must not hold a bomb.
            safe_col: Column of the cell that must not hold a bomb.
        """
        if not self._first_click:
            return
        safe = (safe_row, safe_col)
        self._place_bombs(safe)
        self._place_power_ups()
        self._calculate_adjacent_bombs()
        self._first_click = False
        logger.debug(
            "Board %dx%d set up around %s: %d bombs on %d playable cells",
            self.config.rows, self.config.cols, safe,
            self._bomb_budget, self._playable_count,
        )

    def _place_bombs(self, safe: Position) -> None:
        """
        Place bombs by sampling random cells until the budget is spent.

        Terminates because the budget never exceeds the playable cells
        other than the safe one.
        """
        placed = 0
        while placed < self._bomb_budget:
            row = self.rng.randrange(self.config.rows)
            col = self.rng.randrange(self.config.cols)
            cell = self._cell_at(row, col)
            if cell.is_playable and not cell.is_bomb and (row, col) != safe:
                cell.is_bomb = True
                placed += 1

    def _place_power_ups(self) -> None:
        """Bury random power-ups on distinct playable non-bomb cells."""
        count = MIN_POWER_UPS + self._playable_count // CELLS_PER_EXTRA_POWER_UP
        free = [
            (row, col) for row, col in self.iter_positions()
            if self._cell_at(row, col).is_playable
            and not self._cell_at(row, col).is_bomb
        ]
        kinds = list(PowerUpKind)
        for row, col in self.rng.sample(free, min(count, len(free))):
            self._cell_at(row, col).hidden_power_up = self.rng.choice(kinds)

    def _calculate_adjacent_bombs(self) -> None:
        """Calculate adjacent bomb counts for playable non-bomb cells."""
        for row, col in self.iter_positions():
            cell = self._cell_at(row, col)
            if cell.is_playable and not cell.is_bomb:
                cell.adjacent_bombs = self._count_adjacent_bombs(row, col)

    def _count_adjacent_bombs(self, row: int, col: int) -> int:
        """Count bombs adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self._get_neighbors(row, col):
            if self._cell_at(neighbor_row, neighbor_col).is_bomb:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Neighbors are ordered rows outer, columns inner.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for valid neighbors.
        """
        return [
            position for position in self._get_area(row, col)
            if position != (row, col)
        ]

    def _get_area(self, row: int, col: int) -> List[Position]:
        """Get the in-bounds 3x3 block centered on a position."""
        area = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    area.append((new_row, new_col))
        return area

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.rows and 0 <= col < self.config.cols

    def iter_positions(self) -> Iterator[Position]:
        """Iterate over every board position in row-major order."""
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                yield row, col

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def click(
        self, row: int, col: int, player: Player
    ) -> Optional[PowerUpKind]:
        """
        Click a cell.

        Clicking a revealed power-up icon picks it up. Otherwise the cell
        is revealed, cascading through empty regions up to the cascade
        budget of the difficulty. The first click of a game places the
        bombs and is always safe.

        Args:
            row: Row index.
            col: Column index.
            player: Player taking damage and receiving power-ups.

        Returns:
            The power-up picked up, or the one exposed on the clicked
            cell, or None.
        """
        if not self._can_interact(row, col):
            return None

        cell = self._cell_at(row, col)
        if cell.has_icon:
            return self._pick_up_power_up(cell, player)

        if self._first_click:
            self.setup(row, col)

        self._cascade_remaining = self.cascade_budget
        return self._reveal_recursive(row, col, player)

    def _can_interact(self, row: int, col: int) -> bool:
        """Check the game is running and the position is playable land."""
        if self._game_state != GameState.PLAYING:
            return False
        if not self._is_valid_position(row, col):
            return False
        return self._cell_at(row, col).is_playable

    def _pick_up_power_up(self, cell: Cell, player: Player) -> PowerUpKind:
        """Move a revealed icon into the inventory; the cell now counts."""
        kind = cell.collect_revealed_power_up()
        player.add_power_up(kind)
        self._revealed_count += 1
        self._check_win_condition()
        return kind

    def _reveal_recursive(
        self, row: int, col: int, player: Player
    ) -> Optional[PowerUpKind]:
        """
        Reveal a cell and cascade into its neighbors when it is empty.

        Each revealed cell spends one unit of the click's cascade budget.
        A cell showing a power-up icon only counts toward the win once
        the icon is picked up, and never cascades.
        """
        if self._cascade_remaining <= 0:
            return None
        if not self._is_valid_position(row, col):
            return None
        cell = self._cell_at(row, col)
        if not cell.is_playable or not cell.is_hidden:
            return None

        cell.reveal()
        self._cascade_remaining -= 1

        if cell.is_bomb:
            player.take_damage(1)
            logger.debug(
                "Bomb hit at %s, health now %d", (row, col), player.health
            )
            if not player.is_alive:
                self._lose()
            return None

        kind = cell.claim_hidden_power_up()
        if kind is None:
            self._revealed_count += 1
            if cell.adjacent_bombs == 0:
                for neighbor_row, neighbor_col in self._get_neighbors(row, col):
                    self._reveal_recursive(neighbor_row, neighbor_col, player)

        self._check_win_condition()
        return kind

    def reveal_area(self, row: int, col: int) -> int:
        """
        Reveal the 3x3 block around a cell (Reveal power-up).

        Bombs in the block are shown without exploding and nothing
        cascades. Power-up icons still need to be picked up before
        their cells count.

        Does nothing before the first click has placed the bombs.

        Returns:
            Number of cells revealed.
        """
        if not self.can_use_area_power_up:
            return 0

        revealed = 0
        for area_row, area_col in self._get_area(row, col):
            cell = self._cell_at(area_row, area_col)
            if not cell.is_playable or not cell.reveal():
                continue
            revealed += 1
            if not cell.is_bomb and cell.claim_hidden_power_up() is None:
                self._revealed_count += 1

        self._check_win_condition()
        return revealed

    def clear_area(self, row: int, col: int, player: Player) -> int:
        """
        Destroy the 3x3 block around a cell (Bomb power-up).

        Every playable unrevealed cell in the block is destroyed, along
        with any power-up it hid. On Hard each destroyed bomb costs one
        health point.

        Does nothing before the first click has placed the bombs.

        Returns:
            Number of cells destroyed.
        """
        if not self.can_use_area_power_up:
            return 0

        destroyed = 0
        for area_row, area_col in self._get_area(row, col):
            cell = self._cell_at(area_row, area_col)
            if not cell.is_playable or cell.is_revealed:
                continue
            if cell.is_bomb and self.difficulty.damages_on_area_clear:
                player.take_damage(1)
                if not player.is_alive:
                    self._game_state = GameState.LOST
            if cell.is_flagged:
                self._flags_placed -= 1
            cell.destroy()
            destroyed += 1
            if not cell.is_bomb:
                self._revealed_count += 1

        if self._game_state == GameState.LOST:
            self._reveal_all_bombs()
            logger.info("Game lost to an area clear at %s", (row, col))
        else:
            self._check_win_condition()
        return destroyed

    def _check_win_condition(self) -> None:
        """Check if every safe cell has been counted."""
        if self._game_state != GameState.PLAYING:
            return
        safe_cells = self._playable_count - self._bomb_budget
        if self._revealed_count >= safe_cells:
            self._game_state = GameState.WON
            logger.info("Game won with %d cells cleared", self._revealed_count)

    def _lose(self) -> None:
        """End the game as lost and disclose every bomb."""
        self._game_state = GameState.LOST
        self._reveal_all_bombs()
        logger.info("Game lost")

    def _reveal_all_bombs(self) -> None:
        """Reveal every bomb, lifting flags placed on them."""
        for cell in self._cells:
            if not cell.is_bomb:
                continue
            if cell.is_flagged:
                cell.toggle_flag()
                self._flags_placed -= 1
            cell.reveal()

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Toggle flag on a cell.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if flag was toggled, False otherwise.
        """
        if not self._can_interact(row, col):
            return False
        cell = self._cell_at(row, col)
        if not cell.toggle_flag():
            return False
        self._flags_placed += 1 if cell.is_flagged else -1
        return True

    def auto_flag_bombs_on_win(self) -> int:
        """
        Flag every remaining hidden bomb once the game is won.

        Returns:
            Number of flags placed.
        """
        if self._game_state != GameState.WON:
            return 0
        placed = 0
        for cell in self._cells:
            if cell.is_playable and cell.is_bomb and cell.is_hidden:
                cell.toggle_flag()
                placed += 1
        self._flags_placed += placed
        return placed

    def force_loss(self) -> bool:
        """
        End a running game as lost, e.g. when a time limit expires.

        Returns:
            True if the game was running and is now lost.
        """
        if self._game_state != GameState.PLAYING:
            return False
        self._lose()
        return True

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def cols(self) -> int:
        return self.config.cols

    @property
    def difficulty(self) -> Difficulty:
        return self.config.difficulty

    @property
    def cascade_budget(self) -> int:
        """Maximum cells one click may reveal on this difficulty."""
        return self.config.difficulty.cascade_budget

    @property
    def bomb_budget(self) -> int:
        """Number of bombs on the board after clamping."""
        return self._bomb_budget

    @property
    def playable_count(self) -> int:
        return self._playable_count

    @property
    def revealed_count(self) -> int:
        """Cells counted toward the win so far."""
        return self._revealed_count

    @property
    def flags_placed(self) -> int:
        return self._flags_placed

    @property
    def first_click_pending(self) -> bool:
        """Check if bombs are still waiting to be placed."""
        return self._first_click

    @property
    def can_use_area_power_up(self) -> bool:
        """Check if Reveal and Bomb power-ups may target the board."""
        return self._game_state == GameState.PLAYING and not self._first_click

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._game_state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._game_state == GameState.LOST

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self._is_valid_position(row, col):
            return None
        return self._cell_at(row, col)

    def cell_view(self, row: int, col: int) -> Optional[CellView]:
        """Get the displayable state of a cell, or None if invalid."""
        cell = self.get_cell(row, col)
        if cell is None:
            return None
        shown = cell.is_revealed and not cell.is_destroyed
        return CellView(
            playable=cell.is_playable,
            revealed=cell.is_revealed,
            flagged=cell.is_flagged,
            destroyed=cell.is_destroyed,
            bomb=shown and cell.is_bomb,
            adjacent_bombs=(
                cell.adjacent_bombs if shown and not cell.is_bomb else None
            ),
            power_up=cell.revealed_power_up if cell.is_revealed else None,
        )

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array.

        Returns:
            2D int8 array of Cell.to_observation codes.
        """
        obs = np.zeros((self.config.rows, self.config.cols), dtype=np.int8)
        for row, col in self.iter_positions():
            obs[row, col] = self._cell_at(row, col).to_observation()
        return obs

    def get_valid_actions(self) -> List[Position]:
        """
        Get list of cells a click would act on.

        Returns:
            Hidden playable cells and cells showing a power-up icon.
        """
        if self._game_state != GameState.PLAYING:
            return []
        actions = []
        for row, col in self.iter_positions():
            cell = self._cell_at(row, col)
            if cell.is_playable and (cell.is_hidden or cell.has_icon):
                actions.append((row, col))
        return actions

    def count_bombs(self) -> int:
        """Count bombs currently placed on the board."""
        return sum(1 for cell in self._cells if cell.is_bomb)

    def reset(self) -> None:
        """Reset board to initial state for new game."""
        self._init_grid()
        self._game_state = GameState.PLAYING
        self._first_click = True
        self._revealed_count = 0
        self._flags_placed = 0
