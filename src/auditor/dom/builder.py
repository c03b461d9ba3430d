# src/auditor/dom/builder.py
import logging
import re
from collections import Counter
from typing import Optional

from bs4 import BeautifulSoup, Doctype

from frontscan.model import ScannerSettings
from .core import TRANSLATION_CONVENTION, attr_tokens
from .models import MarkupDocument

logger = logging.getLogger(__name__)


class DOMBuilder:
    """
    Builder responsible for parsing raw markup into a MarkupDocument.
    Parsing failures are reported as None, never raised.
    """

    def __init__(self, settings: Optional[ScannerSettings] = None):
        self.settings = settings or ScannerSettings()

    def parse_doc(self, html: str, path: str = "") -> Optional[MarkupDocument]:
        """
        Parses raw markup into a MarkupDocument.

        Args:
            html (str): The raw markup string.
            path (str): Informational path of the document.

        Returns:
            Optional[MarkupDocument]: The parsed document, or None when the
            parser rejected the input.
        """
        # Basic cleanup of potentially dirty HTML (e.g., BOM)
        clean_html = html.replace('\ufeff', '')
        try:
            soup = BeautifulSoup(clean_html, 'html.parser')
        except Exception as e:
            logger.debug("Structural parse failed for %s: %s", path or "<memory>", e)
            return None

        # --- Basic Validity Checks ---
        found_doctype = bool(re.search(r'<!doctype', clean_html[:1000], re.IGNORECASE))
        if not found_doctype:
            found_doctype = any(isinstance(item, Doctype) for item in soup.contents)

        # --- Document-level facts ---
        id_counts: Counter = Counter()
        label_targets = set()
        used_classes = set()
        for tag in soup.find_all(True):
            tag_id = tag.get("id")
            if isinstance(tag_id, str) and tag_id.strip():
                id_counts[tag_id.strip()] += 1
            if tag.name == "label" and tag.get("for"):
                label_targets.add(str(tag.get("for")).strip())
            used_classes.update(c for c in attr_tokens(tag, "class"))

        return MarkupDocument(
            path=path,
            raw=clean_html,
            soup=soup,
            settings=self.settings,
            has_doctype=found_doctype,
            id_counts=id_counts,
            label_targets=label_targets,
            used_classes=used_classes,
            uses_translation=bool(TRANSLATION_CONVENTION.search(clean_html)),
        )
