"""
Unit tests for agents.
"""
import numpy as np
from agents import RandomAgent
from minefield import ActionType


class TestRandomAgent:
    """Test the random baseline agent."""

    def test_action_mapping(self) -> None:
        """Flat actions map to (type, row, col) blocks."""
        agent = RandomAgent(4, 5)
        assert agent.num_actions == 5 * 20
        action = agent.position_to_action(2, 3, ActionType.FLAG)
        assert action == 20 + 13
        assert agent.action_to_position(action) == (ActionType.FLAG, 2, 3)

    def test_falls_back_to_hidden_clicks(self) -> None:
        """Without a mask only hidden cells are clicked."""
        agent = RandomAgent(2, 2, seed=0)
        obs = np.array([[1, -1], [-3, 2]], dtype=np.int8)
        for _ in range(10):
            assert agent.select_action(obs) == 1

    def test_respects_mask(self) -> None:
        """Only masked actions are chosen."""
        agent = RandomAgent(3, 3, seed=1)
        mask = np.zeros(agent.num_actions, dtype=bool)
        mask[[4, 30]] = True
        obs = np.full((3, 3), -1, dtype=np.int8)
        chosen = {agent.select_action(obs, mask) for _ in range(30)}
        assert chosen <= {4, 30}

    def test_no_valid_actions(self) -> None:
        """An empty mask yields action 0."""
        agent = RandomAgent(3, 3, seed=2)
        obs = np.zeros((3, 3), dtype=np.int8)
        assert agent.select_action(obs) == 0
