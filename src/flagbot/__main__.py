"""
CLI entry point for FlagBot.

This module provides the command-line interface for the FlagBot package.
It serves as the entry point when the package is invoked via:
- `flagbot <command>` (installed script)
- `python -m flagbot <command>` (module execution)

Available Commands:
    play: Run a match in the reference arena and print a summary
    maps: List the built-in arena maps
    info: Display configuration defaults
    rank: Show the similarity-ranked compass order for a direction

Examples:
    flagbot play
    flagbot play --map moat --turns 300 --seed 1 --render
    flagbot play --map-file my_map.txt --config match.json -v
    flagbot rank east --secondary north

Design Decisions:
    - Uses argparse subparsers for clean command separation
    - Returns exit codes (0=success, 1=error) for shell scripting
    - Command-line flags override values loaded from --config

Dependencies:
    - argparse: Command-line argument parsing
    - logging: Configured here, never inside the library
    - flagbot.play / flagbot.maps / flagbot.agent.steering: Command handlers
"""

import argparse
import dataclasses
import logging
import sys

# =============================================================================
# ARGUMENT PARSER
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="flagbot",
        description="FlagBot - scripted capture-the-flag agent",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # -------------------------------------------------------------------------
    # Play Command
    # -------------------------------------------------------------------------
    play_parser = subparsers.add_parser("play", help="Run a match in the reference arena")
    play_parser.add_argument(
        "--map", "-m",
        dest="map_name",
        default=None,
        help="Built-in map name (default: from config, 'default')",
    )
    play_parser.add_argument(
        "--map-file",
        default=None,
        help="Plain-text map layout file, one row per line",
    )
    play_parser.add_argument(
        "--turns", "-n",
        type=int,
        default=None,
        help="Number of turns to play (default: 2000)",
    )
    play_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for the agent (default: 7598)",
    )
    play_parser.add_argument(
        "--team",
        choices=["A", "B"],
        default=None,
        help="Team the agent plays for (default: A)",
    )
    play_parser.add_argument(
        "--config", "-c",
        default=None,
        help="JSON config file",
    )
    play_parser.add_argument(
        "--render",
        action="store_true",
        help="Print the arena after every turn",
    )
    play_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log at DEBUG level",
    )

    # -------------------------------------------------------------------------
    # Maps / Info Commands
    # -------------------------------------------------------------------------
    subparsers.add_parser("maps", help="List built-in arena maps")
    subparsers.add_parser("info", help="Show configuration defaults")

    # -------------------------------------------------------------------------
    # Rank Command
    # -------------------------------------------------------------------------
    rank_parser = subparsers.add_parser(
        "rank",
        help="Show compass directions ranked by similarity to a direction",
    )
    rank_parser.add_argument("ideal", help="Ideal direction, e.g. east or NE")
    rank_parser.add_argument(
        "--secondary",
        default="center",
        help="Tie-breaking preferred side (default: center)",
    )

    return parser


# =============================================================================
# COMMAND HANDLERS
# =============================================================================


def _cmd_play(args: argparse.Namespace) -> int:
    from flagbot.config import FlagbotConfig
    from flagbot.maps import load_map_file
    from flagbot.play import play_match
    from flagbot.world import FlagbotError

    config = FlagbotConfig.from_json(args.config) if args.config else FlagbotConfig()

    overrides = {
        "map_name": args.map_name,
        "max_turns": args.turns,
        "seed": args.seed,
        "team": args.team,
    }
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    config = dataclasses.replace(
        config, **{k: v for k, v in overrides.items() if v is not None}
    )

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    rows = load_map_file(args.map_file) if args.map_file else None

    def render(arena, controller):
        state = controller.state.name if controller.state else "-"
        print(f"--- round {arena.round_num - 1} [{state}] ---")
        print(arena.render())

    try:
        summary = play_match(config, rows, on_turn=render if args.render else None)
    except FlagbotError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Turns played:   {summary.turns}")
    print(f"Flags captured: {summary.captures}")
    print(f"Final state:    {summary.final_state.name if summary.final_state else '-'}")
    print(f"Location:       {summary.location if summary.location else '-'}")
    return 0


def _cmd_maps() -> int:
    from flagbot.maps import list_maps

    for name, description in list_maps().items():
        print(f"{name:<12} {description}")
    return 0


def _cmd_info() -> int:
    from flagbot import __version__
    from flagbot.config import FlagbotConfig

    print(f"FlagBot v{__version__}")
    print()
    print("Configuration defaults:")
    for field in dataclasses.fields(FlagbotConfig):
        print(f"  {field.name:<26} {getattr(FlagbotConfig(), field.name)!r}")
    return 0


def _cmd_rank(args: argparse.Namespace) -> int:
    from flagbot.agent.steering import order_by_similarity, similarity
    from flagbot.geometry import Direction

    ideal = Direction.from_name(args.ideal)
    secondary = Direction.from_name(args.secondary)

    print(f"Ranked by similarity to {ideal.name}, then {secondary.name}:")
    for i, direction in enumerate(order_by_similarity(ideal, secondary)):
        print(
            f"  {i}  {direction.name:<10} "
            f"{similarity(direction, ideal):>3} {similarity(direction, secondary):>3}"
        )
    return 0


# =============================================================================
# MAIN CLI FUNCTION
# =============================================================================


def main(argv: list[str] | None = None) -> int:
    """
    Main CLI entry point for FlagBot.

    Args:
        argv: Argument list (default: sys.argv[1:]).

    Returns:
        Exit code: 0 for success, 1 for errors or missing command.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "play":
            return _cmd_play(args)
        if args.command == "maps":
            return _cmd_maps()
        if args.command == "info":
            return _cmd_info()
        if args.command == "rank":
            return _cmd_rank(args)
    except (KeyError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
