"""Named agent factories shared by the Play and Arena tabs."""

from __future__ import annotations

from typing import Callable

from connectfour.agent.base import Agent
from connectfour.agent.greedy_agent import GreedyAgent
from connectfour.agent.minimax_agent import MinimaxAgent
from connectfour.agent.random_agent import RandomAgent

# Factories rather than instances: every game gets its own agent
AGENT_FACTORIES: dict[str, Callable[[], Agent]] = {
    "MinimaxAgent": MinimaxAgent,
    "MinimaxAgent (d=2)": lambda: MinimaxAgent(max_depth=2),
    "MinimaxAgent (d=4)": lambda: MinimaxAgent(max_depth=4),
    "GreedyAgent": GreedyAgent,
    "RandomAgent": RandomAgent,
}

DEFAULT_AGENT = "MinimaxAgent"


def make_agent(name: str) -> Agent:
    """Create a fresh agent from its menu name; unknown names get a RandomAgent."""
    return AGENT_FACTORIES.get(name, RandomAgent)()
