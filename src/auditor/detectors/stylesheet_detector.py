# src/auditor/detectors/stylesheet_detector.py
from typing import List

from ..model import FileFormat, Finding, SourceDocument
from ..patterns.core import PatternContext, run_rules
from ..patterns.stylesheet_rules import STYLESHEET_RULES
from .base_detector import BaseDetector


class StylesheetDetector(BaseDetector):
    format = FileFormat.STYLESHEET

    def pattern_pass(self, document: SourceDocument, structural_ok: bool = False) -> List[Finding]:
        ctx = PatternContext(settings=self.settings, is_document=False)
        return run_rules(STYLESHEET_RULES, document.content, ctx)
