import logging

import pytest

from rogue_pursuit.config import GameSettings, SearchSettings, Settings
from rogue_pursuit.exceptions import ConfigError


def test_defaults_load():
    s = Settings.load()
    assert s.search == SearchSettings()
    assert s.search.pursuer_horizon == 5
    assert s.search.evader_room_depth == 6
    assert s.search.evader_corridor_depth == 8
    assert s.game.max_turns is None
    assert s.game.monster_first is True


def test_user_file_overrides_single_key(tmp_path):
    cfg = tmp_path / "settings.yaml"
    cfg.write_text("search:\n  evader_room_depth: 4\n", encoding="utf-8")
    s = Settings.load(cfg)
    assert s.search.evader_room_depth == 4
    assert s.search.evader_corridor_depth == 8
    assert s.game == GameSettings()


def test_invalid_values_raise_config_error(tmp_path):
    cfg = tmp_path / "settings.yaml"
    cfg.write_text("search:\n  pursuer_horizon: -1\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        Settings.load(cfg)
    with pytest.raises(ConfigError):
        Settings.from_dict({"game": {"max_turns": 0}})


def test_missing_user_file_keeps_defaults(tmp_path, caplog):
    caplog.set_level(logging.WARNING)
    s = Settings.load(tmp_path / "nope.yaml")
    assert s == Settings()
    assert "not found" in caplog.text


def test_odd_depth_warns(caplog):
    caplog.set_level(logging.WARNING)
    s = Settings.from_dict({"search": {"evader_room_depth": 3}})
    assert s.search.evader_room_depth == 3
    assert "Odd minimax depth" in caplog.text


def test_save_then_load(tmp_path):
    s = Settings.from_dict({"search": {"pursuer_horizon": 2}, "game": {"max_turns": 50, "monster_first": False}})
    path = tmp_path / "out" / "settings.yaml"
    s.save(path)
    assert path.exists()
    assert Settings.load(path) == s
