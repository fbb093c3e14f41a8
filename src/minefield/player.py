"""
Player module for the minefield game.

Tracks health and the power-up inventory consumed by the board's
damage and pickup logic.
"""
from dataclasses import dataclass

from .powerup import PowerUpKind


MAX_HEALTH = 3


@dataclass
class Player:
    """
    Player health and power-up charges.

    Attributes:
        health: Remaining health points (0 to MAX_HEALTH).
        heal_charges: Heal power-ups in inventory.
        reveal_charges: Reveal power-ups in inventory.
        bomb_charges: Bomb power-ups in inventory.
    """

    health: int = MAX_HEALTH
    heal_charges: int = 1
    reveal_charges: int = 1
    bomb_charges: int = 1

    def take_damage(self, amount: int = 1) -> None:
        """Lose health, never dropping below zero."""
        self.health = max(0, self.health - amount)

    def heal(self, amount: int = 1) -> None:
        """Restore health, never exceeding MAX_HEALTH."""
        self.health = min(MAX_HEALTH, self.health + amount)

    @property
    def is_alive(self) -> bool:
        """Check if the player has health left."""
        return self.health > 0

    def add_power_up(self, kind: PowerUpKind) -> None:
        """Add one charge of the given kind to the inventory."""
        if kind is PowerUpKind.HEAL:
            self.heal_charges += 1
        elif kind is PowerUpKind.REVEAL:
            self.reveal_charges += 1
        elif kind is PowerUpKind.BOMB:
            self.bomb_charges += 1

    def charges(self, kind: PowerUpKind) -> int:
        """Get the number of charges held for a kind."""
        if kind is PowerUpKind.HEAL:
            return self.heal_charges
        if kind is PowerUpKind.REVEAL:
            return self.reveal_charges
        return self.bomb_charges

    def use_heal(self) -> bool:
        """
        Spend a heal charge to restore one health point.

        Returns:
            True if a charge was spent, False if none held or at full health.
        """
        if self.heal_charges > 0 and self.health < MAX_HEALTH:
            self.heal(1)
            self.heal_charges -= 1
            return True
        return False

    def use_reveal(self) -> bool:
        """Spend a reveal charge. Returns False if none held."""
        if self.reveal_charges > 0:
            self.reveal_charges -= 1
            return True
        return False

    def use_bomb(self) -> bool:
        """Spend a bomb charge. Returns False if none held."""
        if self.bomb_charges > 0:
            self.bomb_charges -= 1
            return True
        return False
