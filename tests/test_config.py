"""Tests for tracker configuration."""

import logging

import pytest

from mudadventure.config import TrackerConfig, configure_logging


class TestConfigFile:
    """Test JSON save/load."""

    def test_round_trip(self, tmp_path):
        path = tmp_path / "config.json"
        TrackerConfig(window_size=8, detect_died=False).save(path)
        loaded = TrackerConfig.load(path)
        assert loaded.window_size == 8
        assert loaded.detect_died is False
        assert loaded.journal_max_lines == 1024

    def test_missing_file_defaults(self, tmp_path):
        assert TrackerConfig.load(tmp_path / "nope.json") == TrackerConfig()

    def test_corrupt_file_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{oops", encoding="utf-8")
        assert TrackerConfig.load(path) == TrackerConfig()

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"window_size": 3, "theme": "dark"}', encoding="utf-8")
        assert TrackerConfig.load(path).window_size == 3

    def test_classifier_rules(self):
        rules = TrackerConfig(detect_lost_level=False).classifier_rules()
        assert rules.lost_level is False
        assert rules.died is True


class TestEnvOverrides:
    """Test MUDADVENTURE_* environment variables."""

    def test_overrides(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("MUDADVENTURE_WINDOW_SIZE", "7")
        monkeypatch.setenv("MUDADVENTURE_DETECT_DIED", "off")
        monkeypatch.setenv("MUDADVENTURE_LOG_LEVEL", "DEBUG")
        config = TrackerConfig.from_env()
        assert config.window_size == 7
        assert config.detect_died is False
        assert config.log_level == "DEBUG"

    def test_invalid_override_ignored(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("MUDADVENTURE_WINDOW_SIZE", "many")
        assert TrackerConfig.from_env().window_size == 5

    def test_config_path_from_env(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "custom.json"
        TrackerConfig(journal_max_lines=10).save(path)
        monkeypatch.setenv("MUDADVENTURE_CONFIG", str(path))
        assert TrackerConfig.from_env().journal_max_lines == 10


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLogging:
    """Test logging setup."""

    def test_file_handler(self, tmp_path, restore_root_logging):
        log_file = tmp_path / "tracker.log"
        configure_logging(TrackerConfig(log_level="debug", log_file=str(log_file)))
        logging.getLogger("mudadventure.test").debug("hello journal")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "hello journal" in log_file.read_text(encoding="utf-8")
        assert logging.getLogger().level == logging.DEBUG
