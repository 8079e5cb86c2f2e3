"""Tests for engine configuration loading."""

import pytest

from bstanim import ConfigError, EngineConfig, load_config


def test_defaults():
    config = EngineConfig()

    assert config.pacing.narration_interval == 0.5
    assert config.pacing.search_hop == 0.6
    assert config.pacing.traversal_hop == 0.8
    assert config.pacing.flash_interval == 0.12
    assert config.pacing.flash_toggles == 7
    assert config.layout.origin_x == 350.0
    assert config.layout.half_spread == 200.0
    assert config.initial_key == 10


def test_from_dict_partial_override():
    config = EngineConfig.from_dict(
        {"pacing": {"traversal_hop": 1, "flash_toggles": 5.0}, "initial_key": 42}
    )

    assert config.pacing.traversal_hop == 1.0
    assert isinstance(config.pacing.traversal_hop, float)
    assert config.pacing.flash_toggles == 5
    assert isinstance(config.pacing.flash_toggles, int)
    assert config.pacing.search_hop == 0.6
    assert config.initial_key == 42


def test_negative_origin_allowed():
    config = EngineConfig.from_dict({"layout": {"origin_x": -10, "spawn_y": -500}})

    assert config.layout.origin_x == -10.0
    assert config.layout.spawn_y == -500.0


@pytest.mark.parametrize(
    "data",
    [
        ["not", "a", "mapping"],
        {"colors": {}},
        {"pacing": {"hop": 1.0}},
        {"pacing": {"search_hop": "fast"}},
        {"pacing": {"search_hop": True}},
        {"pacing": {"search_hop": -1}},
        {"pacing": {"flash_toggles": 2.5}},
        {"pacing": [1, 2]},
        {"initial_key": 1.5},
    ],
)
def test_invalid_config_rejected(data):
    with pytest.raises(ConfigError):
        EngineConfig.from_dict(data)


def test_to_dict_round_trips():
    config = EngineConfig.from_dict({"layout": {"row_height": 60}})
    assert EngineConfig.from_dict(config.to_dict()) == config


def test_load_config_from_yaml(tmp_path):
    path = tmp_path / "bstanim.yaml"
    path.write_text("pacing:\n  search_hop: 0.25\nlayout:\n  row_height: 100\n")

    config = load_config(path)

    assert config.pacing.search_hop == 0.25
    assert config.layout.row_height == 100.0


def test_load_config_none_and_empty(tmp_path):
    assert load_config(None) == EngineConfig()

    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == EngineConfig()


def test_load_config_errors(tmp_path):
    with pytest.raises(ConfigError, match="Failed to read"):
        load_config(tmp_path / "missing.yaml")

    path = tmp_path / "broken.yaml"
    path.write_text("pacing: [unclosed\n")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config(path)
