import pytest

from hifumi.config import loader
from hifumi.config.core import Core, DEFAULT_DEV_CHANNEL_IDS, DEFAULT_LOG_CHANNEL_ID


def test_defaults_from_environment(monkeypatch):
    monkeypatch.setenv("BOT_TOKEN", "abc")
    monkeypatch.delenv("DEV_MODE", raising=False)
    monkeypatch.delenv("DEV_CHANNEL_IDS", raising=False)
    monkeypatch.delenv("LOG_CHANNEL_ID", raising=False)

    core = Core({})

    assert core.DISCORD_API_TOKEN == "abc"
    assert core.DEV_MODE is False
    assert (core.DEFAULT_PREFIX, core.DEV_PREFIX) == ("h!", "h?")
    assert core.DEV_CHANNEL_IDS == DEFAULT_DEV_CHANNEL_IDS
    assert core.LOG_CHANNEL_ID == DEFAULT_LOG_CHANNEL_ID
    assert (core.STATUS_INTERVAL_MIN, core.STATUS_INTERVAL_MAX) == (300, 900)


def test_section_values(monkeypatch):
    monkeypatch.setenv("SECRET_TOKEN", "xyz")
    monkeypatch.delenv("DEV_MODE", raising=False)

    core = Core(
        {
            "dev_mode": True,
            "discord": {
                "token_env": "SECRET_TOKEN",
                "dev_channel_ids": [1, 2],
                "log_channel_id": 3,
            },
            "prefixes": {"default": "a!", "dev": "a?"},
        }
    )

    assert core.DISCORD_API_TOKEN == "xyz"
    assert core.DEV_MODE is True
    assert core.DEV_CHANNEL_IDS == [1, 2]
    assert core.LOG_CHANNEL_ID == 3
    assert core.DEFAULT_PREFIX == "a!"


@pytest.mark.parametrize("env,section,expected", [("true", False, True), ("false", True, False)])
def test_dev_mode_environment_beats_file(monkeypatch, env, section, expected):
    monkeypatch.setenv("BOT_TOKEN", "abc")
    monkeypatch.setenv("DEV_MODE", env)

    assert Core({"dev_mode": section}).DEV_MODE is expected


def test_dev_channels_from_environment(monkeypatch):
    monkeypatch.setenv("BOT_TOKEN", "abc")
    monkeypatch.setenv("DEV_CHANNEL_IDS", "7, 8,")

    assert Core({}).DEV_CHANNEL_IDS == [7, 8]


def test_missing_token_raises(monkeypatch):
    monkeypatch.delenv("BOT_TOKEN", raising=False)

    with pytest.raises(ValueError, match="DISCORD_API_TOKEN"):
        Core({})


def test_inverted_interval_window_raises(monkeypatch):
    monkeypatch.setenv("BOT_TOKEN", "abc")

    with pytest.raises(ValueError):
        Core({"status": {"interval_min": 900, "interval_max": 300}})


def test_load_section_reads_file_named_by_env(monkeypatch, tmp_path):
    cfg = tmp_path / "bot.toml"
    cfg.write_text('[hifumi.prefixes]\ndefault = "b!"\n\n[other]\nkey = 1\n', encoding="utf-8")
    monkeypatch.setenv(loader.CONFIG_PATH_ENV, str(cfg))

    assert loader.load_section() == {"prefixes": {"default": "b!"}}


def test_load_section_missing_default_file_is_empty(monkeypatch, tmp_path):
    monkeypatch.delenv(loader.CONFIG_PATH_ENV, raising=False)
    monkeypatch.chdir(tmp_path)

    assert loader.load_section() == {}


def test_load_section_missing_named_file_raises(monkeypatch, tmp_path):
    monkeypatch.setenv(loader.CONFIG_PATH_ENV, str(tmp_path / "nope.toml"))

    with pytest.raises(ValueError, match="missing file"):
        loader.load_section()
