# src/auditor/detectors/markup_detector.py
import logging
from typing import List, Optional

from frontscan.model import ScannerSettings
from ..dom.builder import DOMBuilder
from ..dom.qngine import QNGINE
from ..dom.registry import DOMRegistry
from ..model import FileFormat, Finding, SourceDocument
from ..patterns.core import PatternContext, run_rules
from ..patterns.tag_rules import TAG_RULES
from ..patterns.text_rules import TEXT_RULES
from .base_detector import BaseDetector

logger = logging.getLogger(__name__)


class MarkupDetector(BaseDetector):
    """
    Markup battery. The structural pass runs the element rules over the
    BeautifulSoup tree; the pattern pass always runs the raw-text rules and adds
    the tag-level regex rules when the tree could not be built.
    """

    format = FileFormat.MARKUP

    def __init__(self, settings: Optional[ScannerSettings] = None, registry: Optional[DOMRegistry] = None):
        super().__init__(settings)
        self.builder = DOMBuilder(self.settings)
        self.engine = QNGINE(registry)

    def structural_pass(self, document: SourceDocument) -> Optional[List[Finding]]:
        doc = self.builder.parse_doc(document.content, path=document.path)
        if doc is None:
            return None
        try:
            return self.engine.run_audit(doc)
        except Exception as e:
            logger.warning(f"Structural audit failed for {document.path}: {e}")
            return None

    def pattern_pass(self, document: SourceDocument, structural_ok: bool = False) -> List[Finding]:
        ctx = PatternContext.for_markup(document.content, self.settings)
        rules = TEXT_RULES if structural_ok else TEXT_RULES + TAG_RULES
        if not structural_ok:
            logger.debug(f"Using pattern fallback for {document.path}")
        return run_rules(rules, document.content, ctx)
