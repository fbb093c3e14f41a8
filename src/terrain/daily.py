"""
Daily challenge module.

Produces one stable island board per calendar day. The seed for a day
is drawn once and kept in a small seed store so every game started on
that day gets the same terrain.
"""
import json
import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path
from typing import Optional, Tuple

from minefield.board import Board
from minefield.difficulty import Difficulty

from .generator import build_noise_board, random_seed


logger = logging.getLogger(__name__)

DAILY_ROWS = 22
DAILY_COLS = 22
DAILY_DIFFICULTY = Difficulty.HARD


# ============================================================================
# Seed Selection
# ============================================================================

def daily_board(
    current_date: date,
    stored_seed_date: Optional[date],
    stored_seed: Optional[int],
    rng: Optional[random.Random] = None,
) -> Tuple[Board, date, int]:
    """
    Build the board for a day.

    The stored seed is reused when it belongs to the current date;
    otherwise a fresh seed is drawn for it.

    Args:
        current_date: Day to play.
        stored_seed_date: Day the stored seed was drawn for.
        stored_seed: Previously drawn seed, if any.
        rng: Random source for new seeds and board placement.

    Returns:
        Tuple of (board, seed date, seed) to store back.
    """
    if stored_seed is not None and stored_seed_date == current_date:
        seed = stored_seed
        logger.info("Reusing daily seed for %s", current_date.isoformat())
    else:
        seed = random_seed(rng)
        logger.info("Drew new daily seed for %s", current_date.isoformat())

    board = build_noise_board(
        DAILY_ROWS, DAILY_COLS, seed, DAILY_DIFFICULTY, rng=rng
    )
    return board, current_date, seed


# ============================================================================
# Seed Stores
# ============================================================================

@dataclass
class DailyState:
    """
    Persisted daily challenge state.

    Attributes:
        current_date: Internal calendar date, None to follow the real date.
        seed_date: Day the stored seed belongs to.
        seed: Stored seed.
    """

    current_date: Optional[date] = None
    seed_date: Optional[date] = None
    seed: Optional[int] = None


class SeedStore(ABC):
    """Key-value storage for the daily challenge state."""

    @abstractmethod
    def load(self) -> DailyState:
        """Read the stored state."""

    @abstractmethod
    def save(self, state: DailyState) -> None:
        """Replace the stored state."""


class InMemorySeedStore(SeedStore):
    """Seed store living for the lifetime of the process."""

    def __init__(self, state: Optional[DailyState] = None) -> None:
        self._state = state or DailyState()

    def load(self) -> DailyState:
        return DailyState(
            self._state.current_date, self._state.seed_date, self._state.seed
        )

    def save(self, state: DailyState) -> None:
        self._state = DailyState(state.current_date, state.seed_date, state.seed)


def _parse_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    return date.fromisoformat(value)


class JsonSeedStore(SeedStore):
    """Seed store kept in a JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> DailyState:
        if not self.path.exists():
            return DailyState()
        try:
            with open(self.path) as f:
                data = json.load(f)
            seed = data.get("seed")
            if seed is not None and (
                not isinstance(seed, int) or isinstance(seed, bool)
            ):
                raise ValueError(f"seed must be an integer, got {seed!r}")
            return DailyState(
                current_date=_parse_date(data.get("date")),
                seed_date=_parse_date(data.get("seed_date")),
                seed=seed,
            )
        except (OSError, ValueError, AttributeError, TypeError) as e:
            logger.warning("Ignoring unreadable seed file %s: %s", self.path, e)
            return DailyState()

    def save(self, state: DailyState) -> None:
        data = {
            "date": state.current_date.isoformat() if state.current_date else None,
            "seed_date": state.seed_date.isoformat() if state.seed_date else None,
            "seed": state.seed,
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(data, f, indent=2)


# ============================================================================
# Daily Challenge
# ============================================================================

class DailyChallenge:
    """
    Daily challenge backed by a seed store.

    The internal date follows the real date until advance_day() moves it
    forward, which simulates a day rollover for testing.
    """

    def __init__(
        self,
        store: Optional[SeedStore] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.store = store or InMemorySeedStore()
        self.rng = rng

    def current_date(self, today: Optional[date] = None) -> date:
        """Get the internal date, defaulting to today."""
        state = self.store.load()
        return state.current_date or today or date.today()

    def generate(self, today: Optional[date] = None) -> Board:
        """
        Build today's board, storing the seed it used.

        Args:
            today: Real date to use when no internal date is stored.
        """
        state = self.store.load()
        current = state.current_date or today or date.today()
        board, seed_date, seed = daily_board(
            current, state.seed_date, state.seed, self.rng
        )
        state.seed_date = seed_date
        state.seed = seed
        self.store.save(state)
        return board

    def advance_day(self, today: Optional[date] = None) -> date:
        """
        Move the internal date forward by one day.

        Returns:
            The new internal date.
        """
        state = self.store.load()
        new_date = (state.current_date or today or date.today()) + timedelta(days=1)
        state.current_date = new_date
        self.store.save(state)
        logger.info("Internal date advanced to %s", new_date.isoformat())
        return new_date
