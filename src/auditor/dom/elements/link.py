import re
from typing import List

from bs4 import Tag

from ...catalog import make_finding
from ...model import Finding
from ..core import ElementDefinition, attr_text, attr_tokens, audit_spec
from ..models import MarkupDocument

LANGUAGE_PATH = re.compile(r"/(en|es|fr|de|it|pt|ja|zh|ar|ru)/", re.IGNORECASE)


# --- RULES ---

@audit_spec(codes=["security-target-blank-rel", "security-target-blank-noopener"])
def check_target_blank(node: Tag, doc: MarkupDocument) -> List[Finding]:
    """Anchors opening a new browsing context must not leak window.opener."""
    if (attr_text(node, "target") or "").strip().lower() != "_blank":
        return []

    rel = attr_tokens(node, "rel")
    if not rel:
        return [make_finding("security-target-blank-rel")]
    if "noopener" not in rel:
        return [make_finding("security-target-blank-noopener")]
    return []


@audit_spec(codes=["broken-link", "security-http-link", "i18n-missing-hreflang"])
def check_href(node: Tag, doc: MarkupDocument) -> List[Finding]:
    res = []
    href = (attr_text(node, "href") or "").strip()

    if not href or href == "#":
        res.append(make_finding("broken-link"))
        return res

    if href.lower().startswith("http:"):
        res.append(make_finding("security-http-link", url=href))

    if not attr_text(node, "hreflang") and LANGUAGE_PATH.search(href):
        res.append(make_finding("i18n-missing-hreflang"))

    return res


# --- DEFINITION ---
DEFINITION = ElementDefinition(
    tag_names="a",
    audit_rules=[check_target_blank, check_href]
)
