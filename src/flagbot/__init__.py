"""FlagBot - a scripted capture-the-flag agent for turn-based grid worlds.

A finite-state controller with local, memory-assisted obstacle avoidance,
plus a small in-memory arena to run it in.
"""

__version__ = "0.1.0"

from flagbot.agent import FlagController, run_turns
from flagbot.config import FlagbotConfig

__all__ = ["FlagController", "FlagbotConfig", "run_turns", "__version__"]
