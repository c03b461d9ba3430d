from typing import List

from bs4 import Tag

from ...catalog import make_finding
from ...model import Finding
from ..core import ElementDefinition, audit_spec
from ..models import MarkupDocument

LIST_CONTAINERS = {"ul", "ol", "menu"}

# container tag -> (nested tag, rule id)
INVALID_NESTING = {
    "p": (("div", "structural-invalid-nesting-div-in-p"),),
    "a": (
        ("button", "structural-invalid-nesting-button-in-a"),
        ("a", "structural-invalid-nesting-a-in-a"),
    ),
    "button": (("button", "structural-invalid-nesting-button-in-button"),),
}


@audit_spec(codes=[code for pairs in INVALID_NESTING.values() for _, code in pairs])
def check_nesting(node: Tag, doc: MarkupDocument) -> List[Finding]:
    """Block or interactive content placed where the content model forbids it."""
    res = []
    for nested, code in INVALID_NESTING.get(node.name, ()):
        if node.find(nested) is not None:
            res.append(make_finding(code))
    return res


@audit_spec(codes=["structural-li-outside-list", "structural-cell-outside-row"])
def check_container(node: Tag, doc: MarkupDocument) -> List[Finding]:
    parent = node.parent
    parent_name = parent.name if isinstance(parent, Tag) else None

    if node.name == "li" and parent_name not in LIST_CONTAINERS:
        return [make_finding("structural-li-outside-list")]
    if node.name in ("td", "th") and parent_name != "tr":
        return [make_finding("structural-cell-outside-row")]
    return []


DEFINITION = ElementDefinition(
    tag_names=("p", "a", "button", "li", "td", "th"),
    audit_rules=[check_nesting, check_container]
)
