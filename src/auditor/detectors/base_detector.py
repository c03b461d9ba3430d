# src/auditor/detectors/base_detector.py
from abc import ABC, abstractmethod
from typing import List, Optional

from frontscan.model import ScannerSettings
from ..model import FileFormat, Finding, SourceDocument


class BaseDetector(ABC):
    """
    One rule battery for one document format.

    A battery has up to two passes: a structural pass over a parsed tree and a
    pattern pass over the raw text. Both are exposed so they can be exercised
    on their own.
    """

    format: FileFormat

    def __init__(self, settings: Optional[ScannerSettings] = None):
        self.settings = settings or ScannerSettings()

    def structural_pass(self, document: SourceDocument) -> Optional[List[Finding]]:
        """Findings from the parsed tree. None when the format has no parser or parsing failed."""
        return None

    @abstractmethod
    def pattern_pass(self, document: SourceDocument, structural_ok: bool = False) -> List[Finding]:
        """Findings from the raw text. `structural_ok` tells whether the structural pass succeeded."""

    def detect(self, document: SourceDocument) -> List[Finding]:
        structural = self.structural_pass(document)
        findings = list(structural or [])
        findings.extend(self.pattern_pass(document, structural_ok=structural is not None))
        return findings
