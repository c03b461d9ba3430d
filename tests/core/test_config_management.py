# tests/core/test_config_management.py
import json

import pytest

from frontscan.core.managers.config_manager import ConfigManager
from frontscan.core.utils.path_utils import PathUtils
from frontscan.model import CacheSettings, ScannerSettings

# A small, predictable configuration for the tests
MOCK_SETTINGS_CONTENT = {
    "debug": {
        "level": "WARNING"
    },
    "cache": {
        "dir": ".test-cache",
        "max_memory_entries": 10,
        "memory_ttl_s": 120
    },
    "scanner": {
        "batch_size": 5,
        "show_progress": False
    }
}


@pytest.fixture
def config_env(tmp_path, monkeypatch):
    """
    Sets up an isolated environment for the ConfigManager:
    - Creates a temporary package root.
    - Places a fake 'settings.json' in it.
    - Monkeypatches PathUtils to point at that location.
    """
    package_root = tmp_path / "frontscan"
    package_root.mkdir()
    settings_file = package_root / "settings.json"
    settings_file.write_text(json.dumps(MOCK_SETTINGS_CONTENT))

    monkeypatch.setattr(PathUtils, 'get_package_root', lambda: package_root)

    return ConfigManager(), settings_file


# --- Tests for the ConfigManager ---

def test_config_manager_load(config_env):
    """The manager loads the file found through PathUtils."""
    manager, _ = config_env
    config = manager.get_all()
    assert config["debug"]["level"] == "WARNING"
    assert config["cache"]["max_memory_entries"] == 10


def test_config_manager_explicit_path(config_env, tmp_path):
    """An explicit settings path wins over the package default."""
    other = tmp_path / "other.json"
    other.write_text(json.dumps({"debug": {"level": "ERROR"}}))

    manager = ConfigManager(other)
    assert manager.get_nested("debug.level") == "ERROR"


def test_config_manager_get_nested(config_env):
    manager, _ = config_env
    assert manager.get_nested("scanner.batch_size") == 5
    assert manager.get_nested("non.existent.key", "default") == "default"
    assert manager.get_nested("debug.level.deeper", "fallback") == "fallback"


def test_config_manager_set_nested(config_env):
    """Values are changed in memory and cast to the type of the old value."""
    manager, _ = config_env

    manager.set_nested("debug.level", "INFO")
    assert manager.get_nested("debug.level") == "INFO"

    # New keys create the intermediate sections
    manager.set_nested("patcher.default_lang", "nl-NL")
    assert manager.get_nested("patcher.default_lang") == "nl-NL"

    # The original is an int, so '20' must come back as an int
    manager.set_nested("scanner.batch_size", "20")
    assert manager.get_nested("scanner.batch_size") == 20
    assert isinstance(manager.get_nested("scanner.batch_size"), int)

    # Booleans are parsed, not passed through bool()
    manager.set_nested("scanner.show_progress", "true")
    assert manager.get_nested("scanner.show_progress") is True
    manager.set_nested("scanner.show_progress", "false")
    assert manager.get_nested("scanner.show_progress") is False


def test_config_manager_set_nested_through_scalar_fails(config_env):
    manager, _ = config_env
    assert manager.set_nested("debug.level.sub", "x") is False
    assert manager.get_nested("debug.level") == "WARNING"


def test_config_manager_section(config_env):
    """Sections are returned as typed settings, with defaults for missing keys."""
    manager, _ = config_env

    cache = manager.section("cache", CacheSettings)
    assert cache.dir == ".test-cache"
    assert cache.memory_ttl_s == 120
    assert cache.disk_ttl_s == 24 * 60 * 60

    scanner = manager.section("scanner", ScannerSettings)
    assert scanner.batch_size == 5
    assert scanner.show_progress is False
    assert scanner.max_dom_depth == 10


def test_config_manager_section_invalid_falls_back(config_env):
    manager, _ = config_env
    manager.set_nested("cache.max_memory_entries", 0)

    cache = manager.section("cache", CacheSettings)
    assert cache == CacheSettings()


def test_config_manager_reset(config_env):
    """reset() reloads the configuration from disk."""
    manager, _ = config_env

    manager.set_nested("debug.level", "DEBUG")
    assert manager.get_nested("debug.level") == "DEBUG"

    manager.reset()
    assert manager.get_nested("debug.level") == "WARNING"


def test_config_manager_missing_or_corrupt_file(tmp_path):
    missing = ConfigManager(tmp_path / "nope.json")
    assert missing.get_all() == {}

    corrupt = tmp_path / "corrupt.json"
    corrupt.write_text("{not json")
    assert ConfigManager(corrupt).get_all() == {}


def test_bundled_settings_are_valid():
    """The settings.json shipped with the package validates against every section model."""
    manager = ConfigManager()
    assert manager.section("cache", CacheSettings).dir == ".scan-cache"
    assert manager.section("scanner", ScannerSettings).batch_size == 50
