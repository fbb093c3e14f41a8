"""
Power-up module for the minefield game.

Power-ups are one-shot consumables hidden under board cells. Behaviour
differs only by kind, so they are modelled as a closed enumeration.
"""
from enum import Enum


# ============================================================================
# Power-up Kinds
# ============================================================================

class PowerUpKind(Enum):
    """Kinds of collectible power-ups."""

    HEAL = "heal"
    REVEAL = "reveal"
    BOMB = "bomb"


_DESCRIPTIONS = {
    PowerUpKind.HEAL: "Restores one health point.",
    PowerUpKind.REVEAL: "Reveals a 3x3 area.",
    PowerUpKind.BOMB: "Destroys a 3x3 area. Be careful on Hard mode!",
}


def describe(kind: PowerUpKind) -> str:
    """Get the player-facing description of a power-up kind."""
    return _DESCRIPTIONS[kind]
