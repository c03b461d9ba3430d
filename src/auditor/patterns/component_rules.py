# src/auditor/patterns/component_rules.py
import re
from typing import List

from ..catalog import make_finding
from ..dom.core import audit_spec
from ..model import Finding
from .core import PatternContext
from .tag_rules import has_attr

DANGEROUS_HTML = re.compile(r"\bdangerouslySetInnerHTML\b")
DIV_TAG = re.compile(r"<div\b([^>]*)>", re.IGNORECASE)

CONTAINER_TAGS = r"(?:div|span|p|a|button|form|ul|ol|li)"
# Self-closing forms (<div />) are balanced on their own and not counted.
OPENING_TAG = re.compile(r"<" + CONTAINER_TAGS + r"\b[^>]*?(?<!/)>", re.IGNORECASE)
CLOSING_TAG = re.compile(r"</" + CONTAINER_TAGS + r"\s*>", re.IGNORECASE)


@audit_spec(codes=["security-xss-dangerous-html"])
def check_dangerous_html(src: str, ctx: PatternContext) -> List[Finding]:
    return [make_finding("security-xss-dangerous-html")] if DANGEROUS_HTML.search(src) else []


@audit_spec(codes=["role-missing"])
def check_interactive_roles(src: str, ctx: PatternContext) -> List[Finding]:
    """A clickable <div> needs a role so assistive technology can announce it."""
    for match in DIV_TAG.finditer(src):
        attrs = match.group(1)
        if has_attr(attrs, "onClick") and not has_attr(attrs, "role"):
            return [make_finding("role-missing")]
    return []


@audit_spec(codes=["structural-unclosed-tags"])
def check_balanced_tags(src: str, ctx: PatternContext) -> List[Finding]:
    opened = len(OPENING_TAG.findall(src))
    closed = len(CLOSING_TAG.findall(src))
    if opened != closed:
        return [make_finding("structural-unclosed-tags", opened=opened, closed=closed)]
    return []


COMPONENT_RULES = [
    check_dangerous_html,
    check_interactive_roles,
    check_balanced_tags,
]
