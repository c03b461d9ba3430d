# src/auditor/patterns/text_rules.py
"""
Raw-text rules shared by the markup and component batteries.
They never look at the element structure, so they run regardless of
whether the source could be parsed.
"""
import re
from typing import List

from ..catalog import make_finding
from ..dom.core import audit_spec
from ..model import Finding
from ..utils.css_utils import WHITE, contrast_ratio, find_backgrounds, find_colors, font_families
from .core import PatternContext

KEYBOARD_TRAP = re.compile(r"tabindex\s*=\s*\{?\s*[\"']?-1\b", re.IGNORECASE)
EVAL_CALL = re.compile(r"\beval\s*\(")
FUNCTION_CONSTRUCTOR = re.compile(r"\bnew\s+Function\s*\(")
# Lower-case only: JSX handlers (onClick={...}) are not inline attribute strings.
INLINE_HANDLER = re.compile(r"<[^>]+\bon[a-z]+=[\"'][^\"']*[\"']")
DATE_LITERAL = re.compile(r"\b\d{1,2}/\d{1,2}/\d{2,4}\b|\b\d{4}-\d{2}-\d{2}\b")


@audit_spec(codes=["contrast-low"])
def check_contrast(src: str, ctx: PatternContext) -> List[Finding]:
    """Heuristic: every declared text colour against the first declared background (white if none)."""
    colors = find_colors(src)
    if not colors:
        return []
    backgrounds = find_backgrounds(src)
    background = backgrounds[0] if backgrounds else WHITE

    res = []
    minimum = ctx.settings.contrast_min_ratio
    for color in dict.fromkeys(colors):
        ratio = contrast_ratio(color, background)
        if ratio < minimum:
            res.append(make_finding("contrast-low", color=color, background=background, ratio=ratio, minimum=minimum))
    return res


@audit_spec(codes=["keyboard-trap"])
def check_keyboard_trap(src: str, ctx: PatternContext) -> List[Finding]:
    return [make_finding("keyboard-trap")] if KEYBOARD_TRAP.search(src) else []


@audit_spec(codes=["security-xss-eval", "security-xss-function-constructor"])
def check_dynamic_code(src: str, ctx: PatternContext) -> List[Finding]:
    res = []
    if EVAL_CALL.search(src):
        res.append(make_finding("security-xss-eval"))
    if FUNCTION_CONSTRUCTOR.search(src):
        res.append(make_finding("security-xss-function-constructor"))
    return res


@audit_spec(codes=["security-inline-event-handler"])
def check_inline_handlers(src: str, ctx: PatternContext) -> List[Finding]:
    return [make_finding("security-inline-event-handler")] if INLINE_HANDLER.search(src) else []


@audit_spec(codes=["i18n-hardcoded-date"])
def check_hardcoded_dates(src: str, ctx: PatternContext) -> List[Finding]:
    return [make_finding("i18n-hardcoded-date")] if DATE_LITERAL.search(src) else []


@audit_spec(codes=["perf-multiple-fonts"])
def check_font_families(src: str, ctx: PatternContext) -> List[Finding]:
    families = font_families(src)
    if len(families) > ctx.settings.max_font_families:
        return [make_finding("perf-multiple-fonts", count=len(families))]
    return []


TEXT_RULES = [
    check_contrast,
    check_keyboard_trap,
    check_dynamic_code,
    check_inline_handlers,
    check_hardcoded_dates,
    check_font_families,
]
