# src/frontscan/core/utils/path_utils.py
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for reliably retrieving important package and cache paths.
    """

    # --- Package specific paths

    @staticmethod
    def get_content_root() -> Path:
        """Returns the directory holding the frontscan, auditor and patcher packages."""
        return Path(__file__).resolve().parents[3]

    @staticmethod
    def get_package_root() -> Path:
        return PathUtils.get_content_root() / "frontscan"

    @staticmethod
    def get_settings_file() -> Path:
        return PathUtils.get_package_root() / "settings.json"

    # --- Working directory paths ---

    @staticmethod
    def get_cache_root(cache_dir: str = ".scan-cache") -> Path:
        """
        Returns the directory of the persistent scan cache.
        Relative values resolve against the current working directory (e.g. ./.scan-cache).
        """
        path = Path(cache_dir).expanduser()
        if not path.is_absolute():
            path = Path.cwd() / path
        return path

    # --- Helper methods ---

    @staticmethod
    def relative_posix(path: Path, root: Path) -> str:
        """Returns `path` relative to `root` with forward slashes, or the plain path if unrelated."""
        try:
            return path.resolve().relative_to(root.resolve()).as_posix()
        except ValueError:
            return path.as_posix()
