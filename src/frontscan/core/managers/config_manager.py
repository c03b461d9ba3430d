# src/frontscan/core/managers/config_manager.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from frontscan.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

SettingsT = TypeVar("SettingsT", bound=BaseModel)

TRUE_STRINGS = ("1", "true", "yes", "on")


def _cast_like(original: Any, value: Any) -> Any:
    """Converts `value` to the type of `original`. Strings like 'false' become real booleans."""
    if isinstance(original, bool) and isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    return type(original)(value)


class ConfigManager:
    """
    Holds the scanner configuration loaded from a settings.json file.

    Changes made through `set_nested` live in memory only; `reset()` rereads
    the file. Every ScanContext creates its own manager, so nothing is shared
    between contexts.
    """

    def __init__(self, settings_path: Optional[Union[str, Path]] = None):
        self._settings_path = Path(settings_path) if settings_path else PathUtils.get_settings_file()
        self._config: Dict[str, Any] = {}
        self.reset()

    @property
    def settings_path(self) -> Path:
        return self._settings_path

    def get_all(self) -> Dict[str, Any]:
        return self._config

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """Looks up a dotted path such as 'cache.memory_ttl_s'. Missing keys yield `default`."""
        node: Any = self._config
        for key in key_path.split('.'):
            if not isinstance(node, dict):
                return default
            node = node.get(key)
        return default if node is None else node

    def set_nested(self, key_path: str, value: Any) -> bool:
        """
        Sets a dotted path in memory, creating missing sections on the way.

        When the key already holds a value, the new value is cast to its type
        ('20' -> 20 for an int setting). Returns False when the path runs
        through a non-section value.
        """
        *parents, leaf = key_path.split('.')
        section = self._config
        for key in parents:
            section = section.setdefault(key, {})
            if not isinstance(section, dict):
                logger.error("Cannot set %s: '%s' is not a section.", key_path, key)
                return False

        if section.get(leaf) is not None:
            try:
                value = _cast_like(section[leaf], value)
            except (ValueError, TypeError):
                logger.warning("Keeping %s as %s; it does not convert to %s.",
                               key_path, type(value).__name__, type(section[leaf]).__name__)

        section[leaf] = value
        logger.info("Configuration updated: %s = %s", key_path, value)
        return True

    def section(self, name: str, model: Type[SettingsT]) -> SettingsT:
        """
        Validates a top-level section into its settings model (e.g. 'cache' -> CacheSettings).
        A missing or invalid section yields the model defaults.
        """
        try:
            return model.model_validate(self.get_nested(name, {}) or {})
        except ValidationError as e:
            logger.error("Invalid '%s' settings, falling back to defaults: %s", name, e)
            return model()

    def reset(self) -> None:
        """Discards in-memory changes and reloads the settings file."""
        path = self._settings_path
        if not path.exists():
            logger.warning("No settings file at %s; using built-in defaults.", path)
            self._config = {}
            return
        try:
            self._config = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Could not load settings from %s: %s", path, e)
            self._config = {}
            return
        logger.debug("Settings loaded from %s", path)
