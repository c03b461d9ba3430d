# src/auditor/utils/css_utils.py
import re
from typing import List, Tuple

HEX = r"#(?:[0-9a-fA-F]{6}|[0-9a-fA-F]{3})\b"
COLOR_DECL = re.compile(r"(?<![-\w])color\s*:\s*(" + HEX + ")")
BACKGROUND_DECL = re.compile(r"(?<![-\w])background(?:-color)?\s*:\s*(" + HEX + ")")

FONT_FAMILY_DECL = re.compile(
    r"font-family\s*:\s*((?:\"[^\"<>;{}]*\"|'[^'<>;{}]*'|[^;{}\"'<>\n])+)",
    re.IGNORECASE,
)
CSS_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
DECLARATION_BLOCK = re.compile(r"\{[^{}]*\}")
CLASS_SELECTOR = re.compile(r"\.(-?[A-Za-z_][\w-]*)")

WHITE = "#ffffff"


def parse_hex(value: str) -> Tuple[int, int, int]:
    """Parses #rgb or #rrggbb into an (r, g, b) tuple."""
    digits = value.lstrip("#")
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    number = int(digits, 16)
    return (number >> 16) & 255, (number >> 8) & 255, number & 255


def relative_luminance(value: str) -> float:
    """WCAG relative luminance of a hex colour."""
    channels = []
    for channel in parse_hex(value):
        c = channel / 255
        channels.append(c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4)
    r, g, b = channels
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(foreground: str, background: str) -> float:
    """WCAG contrast ratio, from 1.0 (identical) to 21.0 (black on white)."""
    lighter, darker = sorted((relative_luminance(foreground), relative_luminance(background)), reverse=True)
    return (lighter + 0.05) / (darker + 0.05)


def find_colors(text: str) -> List[str]:
    return [m.lower() for m in COLOR_DECL.findall(text)]


def find_backgrounds(text: str) -> List[str]:
    return [m.lower() for m in BACKGROUND_DECL.findall(text)]


def font_families(text: str) -> List[str]:
    """Distinct font-family declarations, normalized, in order of first appearance."""
    seen = []
    for value in FONT_FAMILY_DECL.findall(text):
        normalized = re.sub(r"\s*,\s*", ",", value.replace('"', "").replace("'", "")).strip().lower()
        if normalized and normalized not in seen:
            seen.append(normalized)
    return seen


def class_selectors(css: str) -> List[str]:
    """Class names used in the selectors of a stylesheet, deduplicated and sorted."""
    selectors = DECLARATION_BLOCK.sub(" ", CSS_COMMENT.sub(" ", css))
    return sorted(set(CLASS_SELECTOR.findall(selectors)))
