import json
import pytest
from genmon.core.logging import logger
from genmon.system.settings import Settings, SettingsData


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger.set_level("INFO")


def test_defaults_when_missing(tmp_path):
    s = Settings.load(tmp_path / "settings.json")
    assert s.data == SettingsData()
    rules = s.rules()
    assert rules.heal_amount == 50
    assert rules.capture_hp_factor == 0.8


def test_load_normalizes_and_ignores_unknown(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({
        "log_level": "LOUD", "heal_amount": "-3", "capture_hp_factor": 4,
        "enemy_strategy": "strongest", "window_size": [800, 600],
    }), encoding="utf-8")
    s = Settings.load(path)
    assert s.data.log_level == "INFO"
    assert s.data.heal_amount == 0
    assert s.data.capture_hp_factor == 1.0
    assert s.data.enemy_strategy == "strongest"


def test_broken_file_falls_back(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("[1, 2", encoding="utf-8")
    assert Settings.load(path).data == SettingsData()


def test_save_and_reload(tmp_path):
    path = tmp_path / "settings.json"
    s = Settings.load(path)
    s.update(heal_amount=25, enemy_strategy="strongest")
    s.save()
    again = Settings.load(path)
    assert again.data.heal_amount == 25
    assert again.rules().heal_amount == 25


def test_update_normalizes_and_rejects_unknown(tmp_path):
    s = Settings.load(tmp_path / "settings.json")
    s.update(capture_hp_factor=0.5, enemy_strategy="sneaky")
    assert s.rules().capture_hp_factor == 0.5
    assert s.data.enemy_strategy == "random"
    with pytest.raises(AttributeError):
        s.update(volume=3)


def test_debug_forces_debug_logging(tmp_path):
    s = Settings.load(tmp_path / "settings.json")
    s.update(debug=True)
    assert logger.enabled("DEBUG")
