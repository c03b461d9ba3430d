# src/auditor/detectors/detector_factory.py
import logging
from typing import Dict, List, Optional, Type

from frontscan.model import ScannerSettings
from ..model import FileFormat, Finding, SourceDocument
from .base_detector import BaseDetector
from .component_detector import ComponentDetector
from .markup_detector import MarkupDetector
from .stylesheet_detector import StylesheetDetector

logger = logging.getLogger(__name__)

# Closed dispatch table: every FileFormat has exactly one battery.
DETECTOR_TYPES: Dict[FileFormat, Type[BaseDetector]] = {
    FileFormat.MARKUP: MarkupDetector,
    FileFormat.COMPONENT: ComponentDetector,
    FileFormat.STYLESHEET: StylesheetDetector,
}


class Detector:
    """
    Entry point of the detector. Dispatches a document to the battery for its
    format; batteries are created on first use and reused afterwards.
    """

    def __init__(self, settings: Optional[ScannerSettings] = None):
        self.settings = settings or ScannerSettings()
        self._detectors: Dict[FileFormat, BaseDetector] = {}

    def for_format(self, file_format: FileFormat) -> BaseDetector:
        detector = self._detectors.get(file_format)
        if detector is None:
            detector = DETECTOR_TYPES[file_format](self.settings)
            self._detectors[file_format] = detector
        return detector

    def detect(self, document: SourceDocument) -> List[Finding]:
        findings = self.for_format(document.format).detect(document)
        logger.debug(f"{document.path}: {len(findings)} finding(s) [{document.format.value}]")
        return findings
