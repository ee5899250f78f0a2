"""Tests for FlagbotConfig."""
import json

import pytest

from flagbot.config import FlagbotConfig
from flagbot.world import Team


class TestDefaults:

    def test_match_rules(self, default_config):
        assert default_config.setup_rounds == 200
        assert default_config.vision_radius_squared == 20
        assert default_config.interact_radius_squared == 2
        assert default_config.idle_turns_after_capture == 1

    def test_agent_settings(self, default_config):
        assert default_config.seed == 7598
        assert default_config.team_id is Team.A
        assert default_config.map_name == "default"
        assert default_config.log_level == "INFO"


class TestValidation:

    @pytest.mark.parametrize(
        "field",
        ["setup_rounds", "vision_radius_squared", "interact_radius_squared", "idle_turns_after_capture"],
    )
    def test_rejects_negative(self, field):
        with pytest.raises(ValueError, match=field):
            FlagbotConfig(**{field: -1})

    def test_rejects_zero_turns(self):
        with pytest.raises(ValueError, match="max_turns"):
            FlagbotConfig(max_turns=0)

    def test_team_is_normalized(self):
        assert FlagbotConfig(team="b").team_id is Team.B

    def test_rejects_unknown_team(self):
        with pytest.raises(ValueError, match="team"):
            FlagbotConfig(team="C")

    def test_log_level(self):
        assert FlagbotConfig(log_level="debug").log_level == "DEBUG"
        with pytest.raises(ValueError, match="log_level"):
            FlagbotConfig(log_level="LOUD")

    def test_seed_may_be_none(self):
        assert FlagbotConfig(seed=None).seed is None


class TestLoading:

    def test_from_dict_ignores_unknown_keys(self):
        config = FlagbotConfig.from_dict({"setup_rounds": 10, "learning_rate": 0.1})
        assert config.setup_rounds == 10

    def test_from_json(self, tmp_path):
        path = tmp_path / "match.json"
        path.write_text(json.dumps({"map_name": "moat", "team": "B"}))

        config = FlagbotConfig.from_json(path)

        assert config.map_name == "moat"
        assert config.team_id is Team.B

    def test_from_json_requires_object(self, tmp_path):
        path = tmp_path / "match.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError, match="JSON object"):
            FlagbotConfig.from_json(path)


@pytest.mark.parametrize(
    "values,field",
    [
        ({"team": 1}, "team"),
        ({"setup_rounds": "10"}, "setup_rounds"),
        ({"max_turns": 1.5}, "max_turns"),
        ({"seed": "abc"}, "seed"),
        ({"log_level": 10}, "log_level"),
        ({"vision_radius_squared": True}, "vision_radius_squared"),
    ],
)
def test_wrong_types_from_a_file_are_value_errors(values, field):
    with pytest.raises(ValueError, match=field):
        FlagbotConfig.from_dict(values)
