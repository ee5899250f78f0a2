"""Tests for the flagbot command-line interface."""
import json

from flagbot.__main__ import build_parser, main


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage: flagbot" in capsys.readouterr().out


def test_play_defaults_parse():
    args = build_parser().parse_args(["play"])
    assert args.map_name is None
    assert args.turns is None
    assert not args.render


def test_play_prints_summary(capsys):
    assert main(["play", "--map", "moat", "--turns", "20", "--seed", "3"]) == 0
    out = capsys.readouterr().out
    assert "Turns played:   20" in out
    assert "Flags captured:" in out


def test_play_render(capsys):
    assert main(["play", "-m", "open", "-n", "2", "--render"]) == 0
    out = capsys.readouterr().out
    assert out.count("--- round") == 2
    assert "@" in out


def test_play_with_config_and_map_file(tmp_path, capsys):
    config = tmp_path / "match.json"
    config.write_text(json.dumps({"max_turns": 7, "setup_rounds": 0}))
    layout = tmp_path / "tiny.txt"
    layout.write_text("aA..Bb\n")

    assert main(["play", "--config", str(config), "--map-file", str(layout)]) == 0
    assert "Turns played:   7" in capsys.readouterr().out


def test_play_unknown_map_fails(capsys):
    assert main(["play", "--map", "atlantis", "--turns", "1"]) == 1
    assert "Unknown map" in capsys.readouterr().err


def test_play_missing_map_file_fails(tmp_path, capsys):
    assert main(["play", "--map-file", str(tmp_path / "nope.txt")]) == 1
    assert "Error" in capsys.readouterr().err


def test_maps_lists_builtin_maps(capsys):
    assert main(["maps"]) == 0
    out = capsys.readouterr().out
    assert "moat" in out
    assert "default" in out


def test_info_shows_defaults(capsys):
    assert main(["info"]) == 0
    out = capsys.readouterr().out
    assert "FlagBot v" in out
    assert "setup_rounds" in out
    assert "7598" in out


def test_rank_east_preferring_north(capsys):
    assert main(["rank", "east", "--secondary", "N"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Ranked by similarity to EAST, then NORTH:"
    names = [line.split()[1] for line in lines[1:]]
    assert names == [
        "EAST", "NORTHEAST", "SOUTHEAST", "NORTH",
        "SOUTH", "NORTHWEST", "SOUTHWEST", "WEST",
    ]


def test_rank_unknown_direction_fails(capsys):
    assert main(["rank", "up"]) == 1
    assert "Unknown direction" in capsys.readouterr().err


def test_play_badly_typed_config_fails(tmp_path, capsys):
    config = tmp_path / "bad.json"
    config.write_text(json.dumps({"team": 1}))

    assert main(["play", "--config", str(config)]) == 1
    assert "team must be a string" in capsys.readouterr().err
