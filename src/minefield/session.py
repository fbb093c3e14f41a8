"""
Game session for the minefield game.

A wrapper around Board and Player that manages power-up usage, the
optional time limit and end-of-game bookkeeping. Front ends drive a
session rather than a bare board.
"""
import logging
import random
from typing import Any, Dict, Optional

from .board import Board, GameState
from .difficulty import BoardConfig, CustomGameSettings, Difficulty
from .player import Player
from .powerup import PowerUpKind


logger = logging.getLogger(__name__)


class GameSession:
    """
    One game: a board, the player and the clock.

    Attributes:
        board: The board being played.
        player: Health and inventory of the player.
        time_limit: Seconds allowed, or None for no limit.
        time_elapsed: Seconds counted by tick().
    """

    def __init__(
        self,
        board: Board,
        player: Optional[Player] = None,
        time_limit: Optional[int] = None,
    ) -> None:
        self.board = board
        self.player = player or Player()
        self.time_limit = time_limit
        self.time_elapsed = 0
        self._finished = False

    @classmethod
    def new_game(
        cls,
        difficulty: Difficulty,
        use_noise: bool = False,
        seed: Optional[int] = None,
        time_limit: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> "GameSession":
        """
        Start a preset game.

        Args:
            difficulty: Preset tier (not CUSTOM).
            use_noise: Play on a generated island map of the preset size.
            seed: Terrain seed for noise games; random if None.
            time_limit: Seconds allowed, or None.
            rng: Random source for placement.
        """
        config = BoardConfig.for_difficulty(difficulty)
        return cls(_build_board(config, use_noise, seed, rng), time_limit=time_limit)

    @classmethod
    def custom_game(
        cls,
        settings: CustomGameSettings,
        seed: Optional[int] = None,
        time_limit: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> "GameSession":
        """Start a game from clamped custom settings."""
        board = _build_board(settings.to_config(), settings.use_noise, seed, rng)
        return cls(board, time_limit=time_limit)

    @classmethod
    def from_board(
        cls, board: Board, time_limit: Optional[int] = None
    ) -> "GameSession":
        """Start a game on a prepared board, such as the daily challenge."""
        return cls(board, time_limit=time_limit)

    # ========================================================================
    # Actions
    # ========================================================================

    def click(self, row: int, col: int) -> Optional[PowerUpKind]:
        """Click a cell; returns the power-up picked up or exposed."""
        kind = self.board.click(row, col, self.player)
        self._after_action()
        return kind

    def toggle_flag(self, row: int, col: int) -> bool:
        """Toggle a flag on a cell."""
        return self.board.toggle_flag(row, col)

    def use_heal(self) -> bool:
        """Spend a heal charge if it would restore health."""
        if not self.board.is_playing:
            return False
        return self.player.use_heal()

    def use_reveal(self, row: int, col: int) -> bool:
        """
        Spend a reveal charge on the 3x3 block around a cell.

        Nothing is spent before the first click has placed the bombs.

        Returns:
            True if a charge was spent.
        """
        if not self.board.can_use_area_power_up or not self.player.use_reveal():
            return False
        self.board.reveal_area(row, col)
        self._after_action()
        return True

    def use_bomb(self, row: int, col: int) -> bool:
        """
        Spend a bomb charge on the 3x3 block around a cell.

        Nothing is spent before the first click has placed the bombs.

        Returns:
            True if a charge was spent.
        """
        if not self.board.can_use_area_power_up or not self.player.use_bomb():
            return False
        self.board.clear_area(row, col, self.player)
        self._after_action()
        return True

    def tick(self, seconds: int = 1) -> None:
        """
        Advance the game clock.

        The game is lost once a time limit is reached.
        """
        if not self.board.is_playing:
            return
        self.time_elapsed += seconds
        if self.time_limit is not None and self.time_remaining <= 0:
            logger.info("Time limit of %ds reached", self.time_limit)
            self.board.force_loss()
            self._after_action()

    def _after_action(self) -> None:
        """Run end-of-game bookkeeping once."""
        if self._finished or self.board.is_playing:
            return
        self._finished = True
        if self.board.is_won:
            self.board.auto_flag_bombs_on_win()

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def time_remaining(self) -> Optional[int]:
        """Seconds left, or None without a time limit."""
        if self.time_limit is None:
            return None
        return self.time_limit - self.time_elapsed

    @property
    def game_state(self) -> GameState:
        return self.board.game_state

    @property
    def is_over(self) -> bool:
        return not self.board.is_playing

    def get_state(self) -> Dict[str, Any]:
        """
        Return the visible board and game status.
        """
        return {
            "board": self.board.get_observation().tolist(),
            "game_state": self.board.game_state.name,
            "health": self.player.health,
            "charges": {
                kind.value: self.player.charges(kind) for kind in PowerUpKind
            },
            "flags_placed": self.board.flags_placed,
            "bombs": self.board.bomb_budget,
            "time_elapsed": self.time_elapsed,
            "time_remaining": self.time_remaining,
            "dimensions": (self.board.rows, self.board.cols),
        }


def _build_board(
    config: BoardConfig,
    use_noise: bool,
    seed: Optional[int],
    rng: Optional[random.Random],
) -> Board:
    if not use_noise:
        return Board(config, rng=rng or random.Random())

    # Imported here: terrain builds boards, so it depends on this package
    from terrain.generator import build_noise_board, random_seed

    if seed is None:
        seed = random_seed()
    return build_noise_board(
        config.rows, config.cols, seed, config.difficulty, rng=rng
    )
