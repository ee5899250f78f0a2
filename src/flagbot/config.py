"""
Configuration dataclass for FlagBot.

This module provides the central configuration for the agent and the
reference arena. All tunable constants live in a single FlagbotConfig
dataclass so that the controller, the arena and the CLI agree on them.

Key Features:
    - Type-safe configuration using Python dataclasses
    - Validation of parameters in __post_init__
    - Defaults matching the capture-the-flag rules the agent was tuned for
    - Loading from dictionaries and JSON files, ignoring unknown keys

Architecture Role:
    FlagbotConfig is used by:
    - agent/controller.py: Setup-phase length, vision radius, RNG seed
    - arena.py: Interaction radius, setup-phase flag rules
    - play.py / __main__.py: Map selection, match length, logging level

Example Usage:
    >>> config = FlagbotConfig(seed=1, max_turns=500)
    >>> config.setup_rounds
    200
    >>> config = FlagbotConfig.from_dict({"team": "B", "unknown": 1})

Dependencies:
    - dataclasses: For the dataclass decorator
    - json/pathlib: For loading config files
    - logging: For validating log level names
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from flagbot.world import Team


@dataclass
class FlagbotConfig:
    """
    Configuration for the FlagBot agent and its reference arena.

    Attributes:
        setup_rounds (int): Length of the cooperative setup phase. From this
            round on, agents still setting up are forced to hunt enemy flags.
        vision_radius_squared (int): Squared radius within which flags are
            sensed.
        interact_radius_squared (int): Squared radius for pickups and fills
            in the arena.
        idle_turns_after_capture (int): Turns spent idle after returning a
            flag, letting the capture register before the next hunt.

        seed (int | None): Seed for the controller's random source. None
            seeds from system entropy.
        team (str): Team the agent plays for in the arena, "A" or "B".

        map_name (str): Built-in arena map to play on.
        max_turns (int): Turns played by a match before it stops.

        log_level (str): Logging level name used by the CLI.
    """

    # =============================================================================
    # MATCH RULES
    # =============================================================================

    # Setup phase is time-boxed: at this round the guard forces the hunt
    setup_rounds: int = 200

    # Flags are only visible within this squared distance of the agent
    vision_radius_squared: int = 20

    # Pickups and fills must target a cell within this squared distance
    # 2 covers the agent's own cell and all 8 neighbours
    interact_radius_squared: int = 2

    # One idle turn gives the host time to register a capture
    idle_turns_after_capture: int = 1

    # =============================================================================
    # AGENT SETTINGS
    # =============================================================================

    seed: int | None = 7598

    team: str = "A"

    # =============================================================================
    # ARENA SETTINGS
    # =============================================================================

    map_name: str = "default"

    max_turns: int = 2000

    # =============================================================================
    # LOGGING
    # =============================================================================

    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """
        Validate configuration after initialization.

        Raises:
            ValueError: If a field has the wrong type, a count or radius is
                negative, max_turns < 1, the team is not "A"/"B", or log_level
                is not a logging level.
        """
        # Values may come straight from a JSON file
        for name in ("max_turns", "setup_rounds", "vision_radius_squared",
                     "interact_radius_squared", "idle_turns_after_capture"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"{name} must be an integer, got {value!r}.")
        if self.seed is not None and (not isinstance(self.seed, int) or isinstance(self.seed, bool)):
            raise ValueError(f"seed must be an integer or null, got {self.seed!r}.")
        for name in ("team", "map_name", "log_level"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ValueError(f"{name} must be a string, got {value!r}.")

        for name in (
            "setup_rounds",
            "vision_radius_squared",
            "interact_radius_squared",
            "idle_turns_after_capture",
        ):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}.")

        if self.max_turns < 1:
            raise ValueError(f"max_turns must be >= 1, got {self.max_turns}.")

        self.team = self.team.upper()
        if self.team not in ("A", "B"):
            raise ValueError(f"team must be 'A' or 'B', got {self.team!r}.")

        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"log_level is not a logging level: {self.log_level!r}.")

    @property
    def team_id(self) -> Team:
        """The configured team as a Team member."""
        return Team[self.team]

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> FlagbotConfig:
        """
        Create a FlagbotConfig from a dictionary, ignoring unknown keys.

        Args:
            d: Dictionary of configuration values. Missing keys use defaults.

        Returns:
            A new, validated FlagbotConfig.
        """
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in d.items() if k in valid_keys}
        return cls(**filtered)

    @classmethod
    def from_json(cls, path: str | Path) -> FlagbotConfig:
        """
        Load a FlagbotConfig from a JSON file holding a single object.

        Raises:
            ValueError: If the file does not contain a JSON object.
        """
        with open(path) as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a JSON object.")
        return cls.from_dict(data)
