# src/auditor/detectors/component_detector.py
from typing import List

from ..model import FileFormat, Finding, SourceDocument
from ..patterns.component_rules import COMPONENT_RULES
from ..patterns.core import PatternContext, run_rules
from ..patterns.tag_rules import TAG_RULES
from ..patterns.text_rules import TEXT_RULES
from .base_detector import BaseDetector


class ComponentDetector(BaseDetector):
    """Component sources (.tsx/.jsx/.ts/.js) embed markup in code and are scanned as text only."""

    format = FileFormat.COMPONENT

    def pattern_pass(self, document: SourceDocument, structural_ok: bool = False) -> List[Finding]:
        ctx = PatternContext.for_component(document.content, self.settings)
        return run_rules(TEXT_RULES + TAG_RULES + COMPONENT_RULES, document.content, ctx)
