"""
Configuration for minimax move selection.

This module defines the configuration parameters of the minimax gamer,
including the tree construction strategy, the time reserved for scoring and
the policy applied when no move could be found in the tree.
"""
from dataclasses import dataclass, fields
from typing import ClassVar, Literal

from minimax_gamer.core.constants import DEFAULT_MINIMAX_BUFFER, UNBOUNDED_DEPTH


@dataclass
class MinimaxConfig:
    """
    Configuration parameters for the minimax gamer.

    This class defines all tunable parameters of tree construction and move
    selection, with validation and sensible defaults.
    """
    # Tree construction
    strategy: Literal["breadth_first", "depth_limited"] = "breadth_first"
    """'breadth_first' expands until the deadline, 'depth_limited' to a fixed depth"""

    max_depth: int = 4
    """Lookahead for the depth-limited strategy (negative = unbounded)"""

    minimax_buffer: float = DEFAULT_MINIMAX_BUFFER
    """Seconds before the deadline at which tree construction stops"""

    # Move selection
    empty_root_policy: Literal["fallback", "raise"] = "fallback"
    """What to do when the tree has no children: play the first legal move or raise"""

    STRATEGIES: ClassVar[tuple] = ("breadth_first", "depth_limited")
    EMPTY_ROOT_POLICIES: ClassVar[tuple] = ("fallback", "raise")

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.strategy not in self.STRATEGIES:
            raise ValueError("strategy must be 'breadth_first' or 'depth_limited'")

        if not isinstance(self.max_depth, int):
            raise ValueError("max_depth must be an integer")

        if self.minimax_buffer < 0:
            raise ValueError("minimax_buffer must be non-negative")

        if self.empty_root_policy not in self.EMPTY_ROOT_POLICIES:
            raise ValueError("empty_root_policy must be 'fallback' or 'raise'")

    @classmethod
    def default(cls) -> 'MinimaxConfig':
        """
        Get the default configuration.

        Returns:
            Default MinimaxConfig object
        """
        return cls()

    @classmethod
    def fast(cls) -> 'MinimaxConfig':
        """
        Get a configuration with a shallow fixed lookahead.

        Returns:
            Fast MinimaxConfig object
        """
        return cls(strategy="depth_limited", max_depth=2)

    @classmethod
    def deep(cls) -> 'MinimaxConfig':
        """
        Get a configuration that expands the complete game tree.

        Only use this for games known to be finite and acyclic.

        Returns:
            Deep MinimaxConfig object
        """
        return cls(strategy="depth_limited", max_depth=UNBOUNDED_DEPTH)

    @classmethod
    def from_dict(cls, config_dict: dict) -> 'MinimaxConfig':
        """
        Create a configuration from a dictionary.

        Args:
            config_dict: Dictionary of configuration parameters

        Returns:
            MinimaxConfig object
        """
        # Filter out any keys that aren't valid parameters
        names = {f.name for f in fields(cls)}
        valid_params = {k: v for k, v in config_dict.items() if k in names}
        return cls(**valid_params)

    def to_dict(self) -> dict:
        """
        Convert the configuration to a dictionary.

        Returns:
            Dictionary of configuration parameters
        """
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def __str__(self) -> str:
        params = [f"{name}={value}" for name, value in self.to_dict().items()]
        return f"MinimaxConfig({', '.join(params)})"
