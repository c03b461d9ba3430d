# src/auditor/classifier/categories.py
from typing import Optional, Tuple

DEFAULT_CATEGORY = "structure"

# Checked in order; the first matching prefix wins.
CATEGORY_PREFIXES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("accessibility", ("img", "alt", "contrast", "lang", "keyboard", "form", "button", "role", "aria", "a11y")),
    ("seo", ("seo", "jsonld", "heading", "meta", "title")),
    ("security", ("security", "csp", "xss")),
    ("performance", ("perf", "dom-depth", "unused")),
    ("i18n", ("i18n", "locale")),
    ("structure", ("structural", "duplicate-id", "broken", "invalid-nesting", "design")),
)

CATEGORIES: Tuple[str, ...] = tuple(name for name, _ in CATEGORY_PREFIXES)


def determine_category(rule: Optional[str]) -> str:
    """Maps a rule identifier to exactly one category. Unknown identifiers fall back to 'structure'."""
    if not rule:
        return DEFAULT_CATEGORY
    for category, prefixes in CATEGORY_PREFIXES:
        if rule.startswith(prefixes):
            return category
    return DEFAULT_CATEGORY
