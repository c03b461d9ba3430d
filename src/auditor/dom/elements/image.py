import re
from typing import List

from bs4 import Tag

from ...catalog import make_finding
from ...model import Finding
from ..core import ElementDefinition, attr_text, audit_spec
from ..models import MarkupDocument

LARGE_IMAGE_HINT = re.compile(r"\b(large|big|huge|unoptimized)\b", re.IGNORECASE)


# --- RULES ---

@audit_spec(codes=["img-alt-missing", "img-alt-empty"])
def check_alt_text(node: Tag, doc: MarkupDocument) -> List[Finding]:
    src = attr_text(node, "src") or ""
    alt = attr_text(node, "alt")
    # alt=None means the attribute is missing
    if alt is None:
        return [make_finding("img-alt-missing", src=src)]
    # alt="" is allowed for decorative images but still worth a look
    if not alt.strip():
        return [make_finding("img-alt-empty", src=src)]
    return []


@audit_spec(codes=["broken-img-src", "perf-large-image"])
def check_source(node: Tag, doc: MarkupDocument) -> List[Finding]:
    src = (attr_text(node, "src") or "").strip()
    if not src:
        return [make_finding("broken-img-src")]

    if LARGE_IMAGE_HINT.search(src):
        return [make_finding("perf-large-image", src=src)]
    return []


@audit_spec(codes=["perf-missing-lazy-loading", "perf-missing-image-dimensions"])
def check_loading(node: Tag, doc: MarkupDocument) -> List[Finding]:
    res = []
    if not attr_text(node, "loading"):
        res.append(make_finding("perf-missing-lazy-loading"))
    if not attr_text(node, "width") or not attr_text(node, "height"):
        res.append(make_finding("perf-missing-image-dimensions"))
    return res


# --- DEFINITION ---
DEFINITION = ElementDefinition(
    tag_names="img",
    audit_rules=[check_alt_text, check_source, check_loading]
)
