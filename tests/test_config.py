import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from config import Settings, load_settings


def test_defaults():
    settings = Settings.from_dict({})
    assert settings.layout == "thumbs"
    assert settings.seed is None
    assert settings.skip_untypeable is False
    assert settings.finger_targets is None
    assert settings.hand_targets is None


def test_from_dict():
    settings = Settings.from_dict({
        "layout": "modifiers",
        "seed": 3,
        "objective": "finger_alt",
        "skip_untypeable": True,
        "hand_targets": [3, 1],
    })
    assert settings.layout == "modifiers"
    assert settings.seed == 3
    assert settings.objective == "finger_alt"
    assert settings.skip_untypeable is True
    assert settings.hand_targets == (3.0, 1.0)


@pytest.mark.parametrize("data", [
    {"layout": "qwerty"},
    {"seed": "seven"},
    {"hand_targets": [1, 2, 3]},
    {"finger_targets": 1},
])
def test_invalid_settings(data):
    with pytest.raises(ValueError):
        Settings.from_dict(data)


def test_missing_config_is_created(tmp_path, capsys):
    config_path = tmp_path / "config.toml"
    settings = load_settings(config_path)
    assert config_path.exists()
    assert settings.layout == "thumbs"
    assert "creating default config" in capsys.readouterr().err


def test_load_settings(tmp_path):
    config_path = tmp_path / "config.toml"
    config_path.write_text('layout = "asetniop"\nseed = 12\n', encoding="utf-8")
    settings = load_settings(config_path)
    assert settings.layout == "asetniop"
    assert settings.seed == 12


def test_malformed_config(tmp_path):
    config_path = tmp_path / "config.toml"
    config_path.write_text('layout = \n', encoding="utf-8")
    with pytest.raises(ValueError, match="malformed config"):
        load_settings(config_path)
