# src/auditor/patterns/stylesheet_rules.py
import re
from typing import List

from ..catalog import make_finding
from ..dom.core import audit_spec
from ..model import Finding
from ..utils.css_utils import CSS_COMMENT, WHITE, contrast_ratio, find_backgrounds, find_colors
from .core import PatternContext
from .text_rules import check_font_families

RULE_BLOCK = re.compile(r"([^{}]*)\{([^{}]*)\}")
DESIGN_TOKEN = re.compile(r"var\(\s*--")
INSECURE_URL = re.compile(r"url\(\s*[\"']?(http://[^\"')\s]*)", re.IGNORECASE)


@audit_spec(codes=["contrast-low", "design-color-literal"])
def check_colors(src: str, ctx: PatternContext) -> List[Finding]:
    """
    Every literal text colour is checked against the background of its own rule
    block, falling back to the first background in the file, then white.
    Colours that pass the contrast check are still reported as literals.
    """
    css = CSS_COMMENT.sub(" ", src)
    file_backgrounds = find_backgrounds(css)
    default_background = file_backgrounds[0] if file_backgrounds else WHITE
    minimum = ctx.settings.contrast_min_ratio

    res = []
    for _, body in RULE_BLOCK.findall(css):
        block_backgrounds = find_backgrounds(body)
        background = block_backgrounds[0] if block_backgrounds else default_background
        for color in find_colors(body):
            ratio = contrast_ratio(color, background)
            if ratio < minimum:
                res.append(make_finding(
                    "contrast-low", color=color, background=background, ratio=ratio, minimum=minimum
                ))
            else:
                res.append(make_finding("design-color-literal", color=color))
    return res


@audit_spec(codes=["design-tokens-missing"])
def check_design_tokens(src: str, ctx: PatternContext) -> List[Finding]:
    return [] if DESIGN_TOKEN.search(src) else [make_finding("design-tokens-missing")]


@audit_spec(codes=["security-http-resource"])
def check_insecure_urls(src: str, ctx: PatternContext) -> List[Finding]:
    return [make_finding("security-http-resource", url=url) for url in INSECURE_URL.findall(src)]


STYLESHEET_RULES = [
    check_colors,
    check_design_tokens,
    check_font_families,
    check_insecure_urls,
]
