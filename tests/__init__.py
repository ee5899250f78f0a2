"""
FlagBot Test Suite.

This package contains pytest tests for FlagBot. Tests are organized by
module:

    test_geometry.py    - Location, Direction and the lookup tables
    test_steering.py    - Direct routing and similarity ranking
    test_states.py      - Pre-dispatch guard
    test_controller.py  - FlagController state handlers
    test_navigation.py  - Obstacle navigation scenarios
    test_runner.py      - Turn loop and error policy
    test_arena.py       - Reference arena rules
    test_play.py        - Full matches in the arena
    test_config.py      - FlagbotConfig dataclass
    test_maps.py        - Built-in map catalog
    test_cli.py         - Command-line interface

Fixtures are defined in conftest.py; the HostWorld double is in fakes.py.
"""
