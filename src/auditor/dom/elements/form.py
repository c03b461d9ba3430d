from typing import List

from bs4 import Tag

from ...catalog import make_finding
from ...model import Finding
from ..core import ElementDefinition, attr_text, audit_spec
from ..models import MarkupDocument

# Input types that carry their own accessible name or are never presented.
UNLABELED_INPUT_TYPES = {"hidden", "submit", "button", "reset"}


def _has_aria_name(node: Tag) -> bool:
    return bool((attr_text(node, "aria-label") or "").strip() or (attr_text(node, "aria-labelledby") or "").strip())


@audit_spec(codes=["form-label-missing"])
def check_input_label(node: Tag, doc: MarkupDocument) -> List[Finding]:
    if node.name != "input":
        return []

    input_type = (attr_text(node, "type") or "text").strip().lower()
    if input_type in UNLABELED_INPUT_TYPES or _has_aria_name(node):
        return []

    input_id = (attr_text(node, "id") or "").strip()
    if input_id and input_id in doc.label_targets:
        return []
    # Implicit label: <label>Name <input></label>
    if node.find_parent("label") is not None:
        return []

    return [make_finding("form-label-missing")]


@audit_spec(codes=["button-label-missing"])
def check_button_label(node: Tag, doc: MarkupDocument) -> List[Finding]:
    if node.name != "button":
        return []
    if node.get_text(strip=True) or _has_aria_name(node):
        return []
    return [make_finding("button-label-missing")]


DEFINITION = ElementDefinition(
    tag_names=("input", "button"),
    audit_rules=[check_input_label, check_button_label]
)
