# src/auditor/patterns/tag_rules.py
"""
Tag-level rules expressed as regular expressions over raw text.

These mirror the structural element rules for sources that are never parsed
(component files) or whose parse failed (markup safety net). Attribute values
may be quoted strings or, in component sources, `{...}` expressions; only
quoted values are inspected for content.
"""
import re
from collections import Counter
from typing import List, Optional, Set

from ..catalog import make_finding
from ..dom.core import TRANSLATION_CONVENTION, audit_spec
from ..model import Finding
from ..utils.css_utils import class_selectors
from .core import PatternContext

IMG_TAG = re.compile(r"<img\b([^>]*)>", re.IGNORECASE)
A_TAG = re.compile(r"<a\b([^>]*)>", re.IGNORECASE)
INPUT_TAG = re.compile(r"<input\b([^>]*)>", re.IGNORECASE)
BUTTON_ELEMENT = re.compile(r"<button\b([^>]*)>([\s\S]*?)</button\s*>", re.IGNORECASE)
SCRIPT_TAG = re.compile(r"<script\b([^>]*)>", re.IGNORECASE)
STYLE_BLOCK = re.compile(r"<style\b[^>]*>([\s\S]*?)</style\s*>", re.IGNORECASE)
HTML_TAG = re.compile(r"<html\b([^>]*)>", re.IGNORECASE)
HEAD_SECTION = re.compile(r"<head\b[\s\S]*?(?:</head\s*>|$)", re.IGNORECASE)
INSECURE_SRC = re.compile(r"<\w+\b[^>]*?\bsrc\s*=\s*\{?\s*[\"'](http:[^\"']*)[\"']", re.IGNORECASE)
ID_ATTR = re.compile(r"\bid\s*=\s*[\"']([^\"']+)[\"']")
CLASS_ATTR = re.compile(r"\bclass(?:Name)?\s*=\s*\{?\s*[\"'`]([^\"'`]*)[\"'`]")
DIV_TOKEN = re.compile(r"<div\b[^>]*?(?<!/)>|</div\s*>", re.IGNORECASE)
HEADING_TAG = re.compile(r"<h[1-3]\b", re.IGNORECASE)
NON_SEMANTIC_MAIN = re.compile(r"<div\b[^>]*\brole\s*=\s*[\"']main[\"']", re.IGNORECASE)
TEXT_AFTER_TAG = re.compile(r"<([a-zA-Z][\w-]*)([^<>]*)>([^<>{}]+)<")
SCRIPT_OR_STYLE = re.compile(r"<(script|style)\b[\s\S]*?</\1\s*>", re.IGNORECASE)
LANGUAGE_PATH = re.compile(r"/(en|es|fr|de|it|pt|ja|zh|ar|ru)/", re.IGNORECASE)
LARGE_IMAGE_HINT = re.compile(r"\b(large|big|huge|unoptimized)\b", re.IGNORECASE)
LANG_CODE = re.compile(r"^[a-z]{2}(-[A-Z]{2})?$")

# Tempered patterns: the nested tag must appear before the container closes.
INVALID_NESTING = (
    (re.compile(r"<p\b[^>]*>(?:(?!</p>)[\s\S])*?<div\b", re.IGNORECASE), "structural-invalid-nesting-div-in-p"),
    (re.compile(r"<a\b[^>]*>(?:(?!</a>)[\s\S])*?<button\b", re.IGNORECASE), "structural-invalid-nesting-button-in-a"),
    (re.compile(r"<a\b[^>]*>(?:(?!</a>)[\s\S])*?<a\b", re.IGNORECASE), "structural-invalid-nesting-a-in-a"),
    (re.compile(r"<button\b[^>]*>(?:(?!</button>)[\s\S])*?<button\b", re.IGNORECASE),
     "structural-invalid-nesting-button-in-button"),
)

UNLABELED_INPUT_TYPES = {"hidden", "submit", "button", "reset"}
EXECUTABLE_SCRIPT_TYPES = {
    "", "module", "text/javascript", "application/javascript",
    "text/ecmascript", "application/ecmascript",
}
RTL_LANGUAGES = {"ar", "he", "fa", "ur"}


def has_attr(attrs: str, name: str) -> bool:
    return re.search(r"(?<![\w-])" + re.escape(name) + r"\s*=", attrs, re.IGNORECASE) is not None


def attr_value(attrs: str, name: str) -> Optional[str]:
    """Value of a quoted (or `{"..."}` wrapped) attribute, None when absent or not a literal."""
    match = re.search(
        r"(?<![\w-])" + re.escape(name) + r"\s*=\s*\{?\s*(?:\"([^\"]*)\"|'([^']*)')",
        attrs,
        re.IGNORECASE,
    )
    if not match:
        return None
    return match.group(1) if match.group(1) is not None else match.group(2)


# --- Element rules ---

@audit_spec(codes=[
    "img-alt-missing", "img-alt-empty", "broken-img-src", "perf-large-image",
    "perf-missing-lazy-loading", "perf-missing-image-dimensions"
])
def check_images(src: str, ctx: PatternContext) -> List[Finding]:
    res = []
    for match in IMG_TAG.finditer(src):
        attrs = match.group(1)
        image_src = attr_value(attrs, "src")
        label = image_src or ""
        alt = attr_value(attrs, "alt")

        if not has_attr(attrs, "alt"):
            res.append(make_finding("img-alt-missing", src=label))
        elif alt is not None and not alt.strip():
            res.append(make_finding("img-alt-empty", src=label))

        if not has_attr(attrs, "src") or (image_src is not None and not image_src.strip()):
            res.append(make_finding("broken-img-src"))
        elif image_src and LARGE_IMAGE_HINT.search(image_src):
            res.append(make_finding("perf-large-image", src=image_src))

        if not has_attr(attrs, "loading"):
            res.append(make_finding("perf-missing-lazy-loading"))
        if not has_attr(attrs, "width") or not has_attr(attrs, "height"):
            res.append(make_finding("perf-missing-image-dimensions"))
    return res


@audit_spec(codes=[
    "security-target-blank-rel", "security-target-blank-noopener",
    "broken-link", "security-http-link", "i18n-missing-hreflang"
])
def check_anchors(src: str, ctx: PatternContext) -> List[Finding]:
    res = []
    for match in A_TAG.finditer(src):
        attrs = match.group(1)

        if (attr_value(attrs, "target") or "").strip().lower() == "_blank":
            if not has_attr(attrs, "rel"):
                res.append(make_finding("security-target-blank-rel"))
            else:
                rel = attr_value(attrs, "rel")
                if rel is not None and "noopener" not in rel.lower().split():
                    res.append(make_finding("security-target-blank-noopener"))

        href = attr_value(attrs, "href")
        if href is None:
            continue
        href = href.strip()
        if not href or href == "#":
            res.append(make_finding("broken-link"))
            continue
        if href.lower().startswith("http:"):
            res.append(make_finding("security-http-link", url=href))
        if not has_attr(attrs, "hreflang") and LANGUAGE_PATH.search(href):
            res.append(make_finding("i18n-missing-hreflang"))
    return res


@audit_spec(codes=["form-label-missing", "button-label-missing"])
def check_form_controls(src: str, ctx: PatternContext) -> List[Finding]:
    res = []
    for match in INPUT_TAG.finditer(src):
        attrs = match.group(1)
        input_type = (attr_value(attrs, "type") or "text").strip().lower()
        if input_type in UNLABELED_INPUT_TYPES:
            continue
        if has_attr(attrs, "aria-label") or has_attr(attrs, "aria-labelledby"):
            continue
        input_id = attr_value(attrs, "id")
        if input_id:
            label = re.compile(
                r"<label\b[^>]*\b(?:for|htmlFor)\s*=\s*\{?\s*[\"']" + re.escape(input_id) + r"[\"']"
            )
            if label.search(src):
                continue
        res.append(make_finding("form-label-missing"))

    for match in BUTTON_ELEMENT.finditer(src):
        attrs, content = match.group(1), match.group(2)
        if re.sub(r"<[^>]*>", "", content).strip():
            continue
        if has_attr(attrs, "aria-label") or has_attr(attrs, "aria-labelledby"):
            continue
        res.append(make_finding("button-label-missing"))
    return res


@audit_spec(codes=["security-inline-script", "security-http-resource"])
def check_scripts_and_resources(src: str, ctx: PatternContext) -> List[Finding]:
    res = []
    for match in SCRIPT_TAG.finditer(src):
        attrs = match.group(1)
        if has_attr(attrs, "src"):
            continue
        script_type = (attr_value(attrs, "type") or "").split(";")[0].strip().lower()
        if script_type in EXECUTABLE_SCRIPT_TYPES:
            res.append(make_finding("security-inline-script"))

    for match in INSECURE_SRC.finditer(src):
        res.append(make_finding("security-http-resource", url=match.group(1)))
    return res


# --- Structure rules ---

@audit_spec(codes=[code for _, code in INVALID_NESTING])
def check_nesting(src: str, ctx: PatternContext) -> List[Finding]:
    return [make_finding(code) for pattern, code in INVALID_NESTING if pattern.search(src)]


@audit_spec(codes=["structural-li-outside-list", "structural-cell-outside-row"])
def check_containers(src: str, ctx: PatternContext) -> List[Finding]:
    res = []
    if re.search(r"<li\b", src, re.IGNORECASE) and not re.search(r"<(?:ul|ol|menu)\b", src, re.IGNORECASE):
        res.append(make_finding("structural-li-outside-list"))
    if re.search(r"<t[dh]\b", src, re.IGNORECASE) and not re.search(r"<tr\b", src, re.IGNORECASE):
        res.append(make_finding("structural-cell-outside-row"))
    return res


@audit_spec(codes=["structural-duplicate-id"])
def check_duplicate_ids(src: str, ctx: PatternContext) -> List[Finding]:
    counts = Counter(value.strip() for value in ID_ATTR.findall(src) if value.strip())
    return [
        make_finding("structural-duplicate-id", id=element_id, count=count)
        for element_id, count in counts.items()
        if count > 1
    ]


@audit_spec(codes=["structural-excessive-depth"])
def check_depth(src: str, ctx: PatternContext) -> List[Finding]:
    """Approximates tree depth by the deepest run of nested <div> elements."""
    depth = deepest = 0
    for token in DIV_TOKEN.finditer(src):
        if token.group(0).startswith("</"):
            depth = max(depth - 1, 0)
        else:
            depth += 1
            deepest = max(deepest, depth)
    if deepest > ctx.settings.max_dom_depth:
        return [make_finding("structural-excessive-depth", depth=deepest)]
    return []


@audit_spec(codes=["seo-non-semantic"])
def check_non_semantic(src: str, ctx: PatternContext) -> List[Finding]:
    return [make_finding("seo-non-semantic")] if NON_SEMANTIC_MAIN.search(src) else []


@audit_spec(codes=["perf-unused-css"])
def check_unused_css(src: str, ctx: PatternContext) -> List[Finding]:
    blocks = STYLE_BLOCK.findall(src)
    if not blocks:
        return []

    used: Set[str] = set()
    for value in CLASS_ATTR.findall(src):
        used.update(value.lower().split())

    res = []
    for css in blocks:
        for name in class_selectors(css):
            if name.lower() not in used:
                res.append(make_finding("perf-unused-css", name=name))
    return res


@audit_spec(codes=["i18n-untranslated"])
def check_untranslated(src: str, ctx: PatternContext) -> List[Finding]:
    if not TRANSLATION_CONVENTION.search(src):
        return []

    res = []
    visible = SCRIPT_OR_STYLE.sub(" ", src)
    for match in TEXT_AFTER_TAG.finditer(visible):
        if "data-i18n" in match.group(2):
            continue
        text = " ".join(match.group(3).split())
        if re.search(r"[A-Za-z]", text) and 2 < len(text) < 60:
            res.append(make_finding("i18n-untranslated", text=text))
    return res


# --- Document scope rules ---

@audit_spec(codes=["lang-missing", "lang-invalid", "a11y-rtl-dir-missing", "seo-missing-heading"])
def check_document(src: str, ctx: PatternContext) -> List[Finding]:
    if not ctx.is_document:
        return []

    res = []
    html = HTML_TAG.search(src)
    lang = (attr_value(html.group(1), "lang") or "").strip() if html else ""
    if not lang:
        res.append(make_finding("lang-missing"))
    else:
        if not LANG_CODE.match(lang):
            res.append(make_finding("lang-invalid", lang=lang))
        direction = (attr_value(html.group(1), "dir") or "").lower()
        if lang.split("-")[0].lower() in RTL_LANGUAGES and direction != "rtl":
            res.append(make_finding("a11y-rtl-dir-missing", lang=lang))

    if not HEADING_TAG.search(src):
        res.append(make_finding("seo-missing-heading"))
    return res


@audit_spec(codes=[
    "seo-missing-description", "seo-missing-title", "seo-missing-jsonld", "seo-missing-viewport",
    "seo-missing-og-title", "seo-missing-canonical", "security-missing-csp", "perf-blocking-script"
])
def check_head(src: str, ctx: PatternContext) -> List[Finding]:
    if not ctx.has_head:
        return []
    head_match = HEAD_SECTION.search(src)
    head = head_match.group(0) if head_match else src

    res = []
    checks = (
        (r"<meta\b[^>]*\bname\s*=\s*[\"']description[\"']", "seo-missing-description"),
        (r"<title\b", "seo-missing-title"),
        (r"<script\b[^>]*\btype\s*=\s*[\"']application/ld\+json[\"']", "seo-missing-jsonld"),
        (r"<meta\b[^>]*\bname\s*=\s*[\"']viewport[\"']", "seo-missing-viewport"),
        (r"<meta\b[^>]*\bproperty\s*=\s*[\"']og:title[\"']", "seo-missing-og-title"),
        (r"<link\b[^>]*\brel\s*=\s*[\"'][^\"']*\bcanonical\b", "seo-missing-canonical"),
        (r"<meta\b[^>]*\bhttp-equiv\s*=\s*[\"']Content-Security-Policy[\"']", "security-missing-csp"),
    )
    for pattern, code in checks:
        if not re.search(pattern, head, re.IGNORECASE):
            res.append(make_finding(code))

    for match in SCRIPT_TAG.finditer(head):
        attrs = match.group(1)
        if not has_attr(attrs, "src") or re.search(r"\b(async|defer)\b", attrs, re.IGNORECASE):
            continue
        if (attr_value(attrs, "type") or "").strip().lower() == "module":
            continue
        res.append(make_finding("perf-blocking-script"))
        break
    return res


TAG_RULES = [
    check_images,
    check_anchors,
    check_form_controls,
    check_scripts_and_resources,
    check_nesting,
    check_containers,
    check_duplicate_ids,
    check_depth,
    check_non_semantic,
    check_unused_css,
    check_untranslated,
    check_document,
    check_head,
]
