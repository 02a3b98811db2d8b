"""
Configuration for Monte Carlo Tree Search (MCTS).

This module defines the tunable parameters of the search: the rollout
budget, the UCB1 exploration constant, how the hint budget is derived
from the full budget, and the optional random seed.
"""
from dataclasses import dataclass
from typing import Optional
import math

from tictactoe_ai.core.constants import (
    DEFAULT_DIFFICULTY, EXPLORATION_CONSTANT, HINT_FRACTION, HINT_ROLLOUT_CAP
)


@dataclass
class MCTSConfig:
    """
    Configuration parameters for Monte Carlo Tree Search.

    The rollout budget is the only difficulty knob: larger budgets play
    stronger at higher latency.
    """
    rollouts: int = DEFAULT_DIFFICULTY
    """Number of select/expand/simulate/backpropagate iterations per move"""

    exploration_weight: float = EXPLORATION_CONSTANT
    """UCB1 exploration parameter C (about sqrt(2))"""

    hint_fraction: float = HINT_FRACTION
    """Share of the full budget spent on a hint"""

    hint_rollout_cap: int = HINT_ROLLOUT_CAP
    """Upper bound on the hint budget"""

    seed: Optional[int] = None
    """Seed for the rollout random generator (None = unseeded)"""

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.rollouts < 0:
            raise ValueError("rollouts must be non-negative")

        if self.exploration_weight <= 0:
            raise ValueError("exploration_weight must be positive")

        if not 0 < self.hint_fraction <= 1:
            raise ValueError("hint_fraction must be in (0, 1]")

        if self.hint_rollout_cap < 0:
            raise ValueError("hint_rollout_cap must be non-negative")

    def hint_rollouts(self) -> int:
        """Budget for a hint: a fraction of the full budget rounded up, capped."""
        return min(math.ceil(self.rollouts * self.hint_fraction), self.hint_rollout_cap)

    @classmethod
    def default(cls) -> 'MCTSConfig':
        """Get the default configuration."""
        return cls()

    @classmethod
    def fast(cls) -> 'MCTSConfig':
        """
        Get a configuration optimized for speed (fewer rollouts).

        Returns:
            Fast MCTSConfig object
        """
        return cls(rollouts=200)

    @classmethod
    def strong(cls) -> 'MCTSConfig':
        """
        Get a configuration optimized for playing strength.

        Returns:
            Strong MCTSConfig object
        """
        return cls(rollouts=5000)

    @classmethod
    def from_difficulty(cls, rollouts: int, seed: Optional[int] = None) -> 'MCTSConfig':
        """Build a configuration from a difficulty setting (a rollout budget)."""
        return cls(rollouts=rollouts, seed=seed)

    @classmethod
    def from_dict(cls, config_dict: dict) -> 'MCTSConfig':
        """
        Create a configuration from a dictionary.

        Args:
            config_dict: Dictionary of configuration parameters

        Returns:
            MCTSConfig object
        """
        # Filter out any keys that aren't valid parameters
        valid_params = {k: v for k, v in config_dict.items()
                        if k in cls.__dataclass_fields__}
        return cls(**valid_params)

    def to_dict(self) -> dict:
        """Convert the configuration to a dictionary."""
        return {name: getattr(self, name) for name in self.__dataclass_fields__}

    def __str__(self) -> str:
        params = ", ".join(f"{name}={value}" for name, value in self.to_dict().items())
        return f"MCTSConfig({params})"
