# src/frontscan/core/utils/configure_logging.py
import logging
import sys
from typing import Mapping, Optional, Union

from tqdm import tqdm

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s"

Level = Union[str, int]


class LogWithTqdm(logging.Handler):
    """Routes records through `tqdm.write()` so a running scan bar is redrawn below them."""

    def emit(self, record):
        try:
            tqdm.write(self.format(record), file=sys.stderr)
            self.flush()
        except Exception:
            self.handleError(record)


def resolve_level(level: Optional[Level], default: int) -> int:
    """'debug' / 'DEBUG' / 10 -> 10. Unknown names fall back to `default`."""
    if level is None:
        return default
    if isinstance(level, str):
        return getattr(logging, level.upper(), default)
    return level


def configure_logger(
        general_level: Level = "INFO",
        module_specific_levels: Optional[Mapping[str, Level]] = None,
        silenced_loggers: Optional[Mapping[str, Level]] = None,
) -> logging.Handler:
    """
    Replaces the root handlers with a single tqdm-aware handler.

    `module_specific_levels` tunes individual frontscan/auditor/patcher loggers;
    `silenced_loggers` raises third-party loggers (bs4, asyncio) to a quiet level,
    CRITICAL when the given name is not a level.
    """
    handler = LogWithTqdm()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolve_level(general_level, logging.INFO))

    for name, level in (module_specific_levels or {}).items():
        logging.getLogger(name).setLevel(resolve_level(level, logging.INFO))
    for name, level in (silenced_loggers or {}).items():
        logging.getLogger(name).setLevel(resolve_level(level, logging.CRITICAL))

    return handler
