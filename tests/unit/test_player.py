"""
Unit tests for Player and power-up kinds.
"""
import pytest
from minefield import MAX_HEALTH, Player, PowerUpKind, describe


class TestPlayerHealth:
    """Test damage and healing."""

    def test_starts_at_full_health_with_one_of_each(self) -> None:
        """A new player has full health and one charge per kind."""
        player = Player()
        assert player.health == MAX_HEALTH == 3
        for kind in PowerUpKind:
            assert player.charges(kind) == 1

    def test_damage_floors_at_zero(self, player: Player) -> None:
        """Health never goes negative."""
        player.take_damage(5)
        assert player.health == 0
        assert player.is_alive is False

    def test_heal_caps_at_max(self, player: Player) -> None:
        """Health never exceeds the maximum."""
        player.heal(2)
        assert player.health == MAX_HEALTH


class TestPlayerInventory:
    """Test power-up charges."""

    @pytest.mark.parametrize("kind", list(PowerUpKind))
    def test_add_power_up(self, player: Player, kind: PowerUpKind) -> None:
        """Picking up a power-up adds one charge of its kind."""
        player.add_power_up(kind)
        assert player.charges(kind) == 2

    def test_use_heal_needs_missing_health(self, player: Player) -> None:
        """Healing at full health keeps the charge."""
        assert player.use_heal() is False
        assert player.heal_charges == 1

    def test_use_heal_restores_one_point(self, player: Player) -> None:
        """A heal charge restores one health point."""
        player.take_damage(2)
        assert player.use_heal() is True
        assert player.health == 2
        assert player.heal_charges == 0

    def test_charges_run_out(self, player: Player) -> None:
        """Reveal and bomb charges can only be spent while held."""
        assert player.use_reveal() is True
        assert player.use_reveal() is False
        assert player.use_bomb() is True
        assert player.use_bomb() is False
        assert player.reveal_charges == 0
        assert player.bomb_charges == 0


class TestPowerUpKind:
    """Test power-up descriptions."""

    @pytest.mark.parametrize(
        "kind, text",
        [
            (PowerUpKind.HEAL, "Restores one health point."),
            (PowerUpKind.REVEAL, "Reveals a 3x3 area."),
            (PowerUpKind.BOMB, "Destroys a 3x3 area. Be careful on Hard mode!"),
        ],
    )
    def test_describe(self, kind: PowerUpKind, text: str) -> None:
        """Every kind has a player-facing description."""
        assert describe(kind) == text
