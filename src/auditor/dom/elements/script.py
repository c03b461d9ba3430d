from typing import List

from bs4 import Tag

from ...catalog import make_finding
from ...model import Finding
from ..core import ElementDefinition, attr_text, audit_spec
from ..models import MarkupDocument

# Script types the browser executes. Anything else (JSON-LD, templates, import maps) is a data block.
EXECUTABLE_SCRIPT_TYPES = {
    "", "module", "text/javascript", "application/javascript",
    "text/ecmascript", "application/ecmascript",
}


@audit_spec(codes=["security-inline-script"])
def check_inline_script(node: Tag, doc: MarkupDocument) -> List[Finding]:
    if node.name != "script" or node.has_attr("src"):
        return []
    script_type = (attr_text(node, "type") or "").split(";")[0].strip().lower()
    if script_type not in EXECUTABLE_SCRIPT_TYPES:
        return []
    return [make_finding("security-inline-script")]


@audit_spec(codes=["security-http-resource"])
def check_resource(node: Tag, doc: MarkupDocument) -> List[Finding]:
    src = (attr_text(node, "src") or "").strip()
    if src.lower().startswith("http:"):
        return [make_finding("security-http-resource", url=src)]
    return []


DEFINITION = ElementDefinition(
    tag_names=("script", "img", "iframe", "audio", "video", "source", "embed", "track"),
    audit_rules=[check_inline_script, check_resource]
)
