from typing import List

from bs4 import Tag

from ...catalog import make_finding
from ...model import Finding
from ..core import ElementDefinition, attr_text, attr_tokens, audit_spec
from ..models import MarkupDocument


def _find_meta(node: Tag, **attrs) -> bool:
    """Case-insensitive lookup of a <meta> by attribute values (name, property, http-equiv)."""
    for meta in node.find_all("meta"):
        if all((attr_text(meta, key) or "").strip().lower() == value for key, value in attrs.items()):
            return True
    return False


# --- AUDIT RULES ---

@audit_spec(codes=[
    "seo-missing-title", "seo-missing-description", "seo-missing-jsonld",
    "seo-missing-viewport", "seo-missing-og-title", "seo-missing-canonical"
])
def check_metadata(node: Tag, doc: MarkupDocument) -> List[Finding]:
    """Validates the SEO metadata carried by <head>."""
    res = []
    if not _find_meta(node, name="description"):
        res.append(make_finding("seo-missing-description"))
    if not node.find("title"):
        res.append(make_finding("seo-missing-title"))
    if not node.find("script", attrs={"type": "application/ld+json"}):
        res.append(make_finding("seo-missing-jsonld"))
    if not _find_meta(node, name="viewport"):
        res.append(make_finding("seo-missing-viewport"))
    if not _find_meta(node, property="og:title"):
        res.append(make_finding("seo-missing-og-title"))
    if not any("canonical" in attr_tokens(link, "rel") for link in node.find_all("link")):
        res.append(make_finding("seo-missing-canonical"))
    return res


@audit_spec(codes=["security-missing-csp"])
def check_csp(node: Tag, doc: MarkupDocument) -> List[Finding]:
    if _find_meta(node, **{"http-equiv": "content-security-policy"}):
        return []
    return [make_finding("security-missing-csp")]


@audit_spec(codes=["perf-blocking-script"])
def check_blocking_scripts(node: Tag, doc: MarkupDocument) -> List[Finding]:
    """External scripts in <head> without async/defer block rendering. Modules are deferred by default."""
    for script in node.find_all("script", src=True):
        if script.has_attr("async") or script.has_attr("defer"):
            continue
        if (attr_text(script, "type") or "").strip().lower() == "module":
            continue
        return [make_finding("perf-blocking-script")]
    return []


# --- DEFINITION ---
DEFINITION = ElementDefinition(
    tag_names="head",
    audit_rules=[check_metadata, check_csp, check_blocking_scripts]
)
