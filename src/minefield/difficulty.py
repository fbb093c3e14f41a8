"""
Difficulty and board configuration for the minefield game.

Holds the difficulty presets, the validated board configuration and the
conversion of raw custom-game input into clamped settings.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Union


# ============================================================================
# Difficulty Tiers
# ============================================================================

class Difficulty(Enum):
    """Difficulty tiers with their preset board sizes."""

    EASY = (9, 9, 10)
    MEDIUM = (16, 16, 40)
    HARD = (16, 30, 99)
    CUSTOM = (0, 0, 0)

    @property
    def rows(self) -> int:
        return self.value[0]

    @property
    def cols(self) -> int:
        return self.value[1]

    @property
    def num_bombs(self) -> int:
        return self.value[2]

    @property
    def cascade_budget(self) -> int:
        """Maximum cells a single click may reveal."""
        if self is Difficulty.EASY:
            return 300
        if self is Difficulty.MEDIUM:
            return 30
        return 15

    @property
    def damages_on_area_clear(self) -> bool:
        """Whether the bomb power-up hurts the player when it hits bombs."""
        return self is Difficulty.HARD


# Custom game limits
MIN_CUSTOM_ROWS = 9
MAX_CUSTOM_ROWS = 24
MIN_CUSTOM_COLS = 9
MAX_CUSTOM_COLS = 40
CUSTOM_SAFE_MARGIN = 9


# ============================================================================
# Board Configuration
# ============================================================================

@dataclass
class BoardConfig:
    """
    Configuration for a board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        num_bombs: Requested bombs; the board clamps it to its playable area.
        difficulty: Tier controlling cascade budget and hard-mode damage.
    """

    rows: int = 9
    cols: int = 9
    num_bombs: int = 10
    difficulty: Difficulty = Difficulty.EASY

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise ValueError("Board dimensions must be positive")
        if self.num_bombs < 0:
            raise ValueError("Number of bombs cannot be negative")

    @classmethod
    def for_difficulty(cls, difficulty: Difficulty) -> "BoardConfig":
        """Build the preset configuration of a difficulty tier."""
        if difficulty is Difficulty.CUSTOM:
            raise ValueError("Custom difficulty has no preset configuration")
        return cls(
            difficulty.rows, difficulty.cols, difficulty.num_bombs, difficulty
        )


# Preset difficulty levels
EASY_CONFIG = BoardConfig.for_difficulty(Difficulty.EASY)
MEDIUM_CONFIG = BoardConfig.for_difficulty(Difficulty.MEDIUM)
HARD_CONFIG = BoardConfig.for_difficulty(Difficulty.HARD)


# ============================================================================
# Custom Game Settings
# ============================================================================

class InvalidSettingsError(ValueError):
    """Raised when custom game input is not a number."""


def _clamp(value: int, low: int, high: int) -> int:
    return min(high, max(low, value))


def _parse_int(name: str, raw: Union[str, int]) -> int:
    if isinstance(raw, bool):
        raise InvalidSettingsError(f"{name} must be a whole number")
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        raise InvalidSettingsError(
            f"{name} must be a whole number, got {raw!r}"
        ) from None


@dataclass(frozen=True)
class CustomGameSettings:
    """Clamped settings for a user-defined game."""

    rows: int
    cols: int
    num_bombs: int
    use_noise: bool = False

    @classmethod
    def parse(
        cls,
        rows: Union[str, int],
        cols: Union[str, int],
        bombs: Union[str, int] = 0,
        use_noise: bool = False,
    ) -> "CustomGameSettings":
        """
        Convert raw user input into clamped settings.

        Args:
            rows: Requested rows (clamped to 9-24).
            cols: Requested columns (clamped to 9-40).
            bombs: Requested bombs (clamped to 1..rows*cols-9). Ignored
                for noise games, whose bomb count comes from the terrain.
            use_noise: Whether the board uses a generated island map.

        Raises:
            InvalidSettingsError: If any value is not a whole number.
        """
        parsed_rows = _clamp(
            _parse_int("Rows", rows), MIN_CUSTOM_ROWS, MAX_CUSTOM_ROWS
        )
        parsed_cols = _clamp(
            _parse_int("Columns", cols), MIN_CUSTOM_COLS, MAX_CUSTOM_COLS
        )
        if use_noise:
            num_bombs = 0
        else:
            max_bombs = parsed_rows * parsed_cols - CUSTOM_SAFE_MARGIN
            num_bombs = _clamp(_parse_int("Bombs", bombs), 1, max_bombs)
        return cls(parsed_rows, parsed_cols, num_bombs, use_noise)

    def to_config(self) -> BoardConfig:
        """Get the board configuration for these settings."""
        return BoardConfig(
            self.rows, self.cols, self.num_bombs, Difficulty.CUSTOM
        )
