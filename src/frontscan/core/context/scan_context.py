# src/frontscan/core/context/scan_context.py
import logging
from pathlib import Path
from typing import List, Optional, Union

from auditor.controllers.scan_controller import ScanController
from auditor.detectors.detector_factory import Detector
from auditor.model import ConsolidatedResult
from frontscan.core.managers.cache_manager import ScanCache
from frontscan.core.managers.config_manager import ConfigManager
from frontscan.core.utils.configure_logging import configure_logger
from frontscan.model import CacheSettings, DebugSettings, PatcherSettings, ScannerSettings
from patcher.controllers.patch_controller import PatchSynthesizer
from patcher.model import PatchContext

logger = logging.getLogger(__name__)


class ScanContext:
    """
    Owns the services of one scanning session: configuration, cache,
    detector, scan controller and patch synthesizer.

    Nothing is shared between contexts; two contexts pointed at different
    cache directories are fully isolated.
    """

    def __init__(
            self,
            settings_path: Optional[Union[str, Path]] = None,
            cache_dir: Optional[Union[str, Path]] = None,
            config: Optional[ConfigManager] = None,
            setup_logging: bool = True,
    ):
        self.config = config or ConfigManager(settings_path)

        if setup_logging:
            debug = self.config.section("debug", DebugSettings)
            configure_logger(debug.level, debug.module_levels, debug.silenced)

        self.cache_settings = self.config.section("cache", CacheSettings)
        self.scanner_settings = self.config.section("scanner", ScannerSettings)
        self.patcher_settings = self.config.section("patcher", PatcherSettings)

        self.cache = ScanCache(self.cache_settings, cache_dir=cache_dir)
        self.detector = Detector(self.scanner_settings)
        self.scan_controller = ScanController(self.detector, self.cache, self.scanner_settings)
        self.patcher = PatchSynthesizer(self.patcher_settings)

        logger.debug(f"ScanContext ready (cache: {self.cache.cache_dir})")

    async def scan(self, root: Union[str, Path]) -> List[ConsolidatedResult]:
        return await self.scan_controller.scan_directory(root)

    def preview_fix(self, path: Union[str, Path], context: Optional[PatchContext] = None) -> str:
        return self.patcher.preview_fix_for_file(path, context)

    def apply_fix(self, path: Union[str, Path], context: Optional[PatchContext] = None) -> Path:
        return self.patcher.apply_fix_for_file(path, context)

    def __repr__(self) -> str:
        stats = self.cache.metadata()
        return f"<ScanContext cache={self.cache.cache_dir} hits={stats.hits} misses={stats.misses}>"
