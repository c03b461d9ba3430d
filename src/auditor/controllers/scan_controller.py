# src/auditor/controllers/scan_controller.py
import asyncio
import logging
import time
from pathlib import Path
from typing import List, Optional, Union

from tqdm import tqdm

from auditor.classifier.issue_mapper import classify
from auditor.detectors.detector_factory import Detector
from auditor.model import ConsolidatedResult, SourceDocument
from auditor.services import summary_service
from frontscan.core.managers.cache_manager import ScanCache
from frontscan.core.utils.file_utils import read_document, walk_dir
from frontscan.model import ScannerSettings

logger = logging.getLogger(__name__)


class ScanController:
    """
    Orchestrates scans: cache lookup, detection, classification and cache store.

    Every file goes through `cache.get -> (detect -> classify) -> cache.set`.
    Directory scans process files in batches and yield to the event loop
    between batches; results do not depend on the batching.
    """

    def __init__(self, detector: Detector, cache: ScanCache, settings: Optional[ScannerSettings] = None):
        self.detector = detector
        self.cache = cache
        self.settings = settings or ScannerSettings()

    def scan_document(self, document: SourceDocument) -> ConsolidatedResult:
        """Detects and classifies one document without touching the cache."""
        findings = self.detector.detect(document)
        return classify(findings, document)

    async def scan_content(self, document: SourceDocument) -> ConsolidatedResult:
        cached = await self.cache.get(document.content, file_name=document.path, file_format=document.format)
        if cached is not None:
            return cached

        start = time.perf_counter()
        result = self.scan_document(document)
        compute_ms = (time.perf_counter() - start) * 1000

        await self.cache.set(document.content, result, compute_ms=compute_ms, file_format=document.format)
        return result

    async def scan_file(self, path: Union[str, Path], root: Optional[Union[str, Path]] = None) -> ConsolidatedResult:
        document = read_document(path, root)
        return await self.scan_content(document)

    async def scan_directory(self, root: Union[str, Path], show_progress: Optional[bool] = None) -> List[ConsolidatedResult]:
        """
        Scans every supported file below `root`, in traversal order.

        Unreadable files are logged and skipped. A missing or invalid root
        raises FileNotFoundError / NotADirectoryError.
        """
        root = Path(root)
        files = list(walk_dir(root, exclude=[self.cache.cache_dir]))
        show = self.settings.show_progress if show_progress is None else show_progress
        batch_size = self.settings.batch_size

        logger.info(f"Found {len(files)} files to scan in {root}")
        results: List[ConsolidatedResult] = []
        hits_before = self.cache.metadata().hits

        pbar = tqdm(total=len(files), desc="Scanning", unit="file", disable=not show)
        try:
            for i in range(0, len(files), batch_size):
                for path in files[i:i + batch_size]:
                    try:
                        results.append(await self.scan_file(path, root))
                    except (OSError, UnicodeDecodeError) as e:
                        logger.warning(f"Skipping unreadable file {path}: {e}")
                    pbar.update(1)

                # Give other tasks a turn between batches.
                if i + batch_size < len(files):
                    await asyncio.sleep(0)
        finally:
            pbar.close()

        stats = self.cache.metadata()
        logger.info(
            f"Scan complete: {len(results)} files, {stats.hits - hits_before} served from cache "
            f"(hits={stats.hits}, misses={stats.misses}, saved~{stats.saved_time_ms:.0f}ms)"
        )
        if results:
            logger.info("\n" + summary_service.format_summary(summary_service.summarize_results(results)))
        return results
