# src/auditor/dom/qngine.py
from typing import List, Optional

from ..model import Finding
from .core import DOCUMENT
from .models import MarkupDocument
from .registry import DOMRegistry


class QNGINE:
    """
    Quality Engine (QNGINE) for auditing markup documents.

    Walks the parsed tree built by the DOMBuilder and applies the rules
    registered for every element, then the document-wide rules.
    """

    def __init__(self, registry: Optional[DOMRegistry] = None):
        """Initializes the engine, discovering the element rules unless a registry is given."""
        self.registry = registry or DOMRegistry().discover()

    def run_audit(self, doc: MarkupDocument) -> List[Finding]:
        """
        Runs the full structural rule set on a parsed document.

        Args:
            doc (MarkupDocument): The parsed document.

        Returns:
            List[Finding]: Findings in document order, then rule declaration order.
        """
        findings: List[Finding] = []

        # --- Element Level Checks ---
        for node in doc.soup.find_all(True):
            for rule in self.registry.get_rules(node.name):
                findings.extend(rule(node, doc))

        # --- Document Level Checks ---
        for rule in self.registry.get_rules(DOCUMENT):
            findings.extend(rule(doc.soup, doc))

        return findings
