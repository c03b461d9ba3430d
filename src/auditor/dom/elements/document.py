import re
from typing import List

from bs4 import BeautifulSoup, Tag
from bs4.element import NavigableString, PreformattedString

from ...catalog import make_finding
from ...model import Finding
from ...utils.css_utils import class_selectors
from ..core import DOCUMENT, ElementDefinition, attr_text, audit_spec
from ..models import MarkupDocument

LANG_CODE = re.compile(r"^[a-z]{2}(-[A-Z]{2})?$")
RTL_LANGUAGES = {"ar", "he", "fa", "ur"}
NON_TEXT_PARENTS = {"script", "style", "template", "noscript"}


# --- DOCUMENT RULES ---

@audit_spec(codes=["lang-missing", "lang-invalid", "a11y-rtl-dir-missing"])
def check_language(root: BeautifulSoup, doc: MarkupDocument) -> List[Finding]:
    html = doc.html
    lang = (attr_text(html, "lang") or "").strip() if html is not None else ""
    if not lang:
        return [make_finding("lang-missing")]

    res = []
    if not LANG_CODE.match(lang):
        res.append(make_finding("lang-invalid", lang=lang))
    if lang.split("-")[0].lower() in RTL_LANGUAGES and (attr_text(html, "dir") or "").lower() != "rtl":
        res.append(make_finding("a11y-rtl-dir-missing", lang=lang))
    return res


@audit_spec(codes=["seo-missing-heading", "seo-non-semantic"])
def check_outline(root: BeautifulSoup, doc: MarkupDocument) -> List[Finding]:
    res = []
    if root.find(["h1", "h2", "h3"]) is None:
        res.append(make_finding("seo-missing-heading"))
    if root.select_one('div[role="main"]') is not None:
        res.append(make_finding("seo-non-semantic"))
    return res


@audit_spec(codes=["structural-duplicate-id"])
def check_duplicate_ids(root: BeautifulSoup, doc: MarkupDocument) -> List[Finding]:
    return [
        make_finding("structural-duplicate-id", id=element_id, count=count)
        for element_id, count in doc.id_counts.items()
        if count > 1
    ]


@audit_spec(codes=["structural-excessive-depth"])
def check_depth(root: BeautifulSoup, doc: MarkupDocument) -> List[Finding]:
    depth = max((len(list(tag.parents)) for tag in root.find_all(True)), default=0)
    if depth > doc.settings.max_dom_depth:
        return [make_finding("structural-excessive-depth", depth=depth)]
    return []


@audit_spec(codes=["perf-unused-css"])
def check_unused_css(root: BeautifulSoup, doc: MarkupDocument) -> List[Finding]:
    res = []
    for style in root.find_all("style"):
        for name in class_selectors(style.get_text()):
            if name.lower() not in doc.used_classes:
                res.append(make_finding("perf-unused-css", name=name))
    return res


@audit_spec(codes=["i18n-untranslated"])
def check_untranslated(root: BeautifulSoup, doc: MarkupDocument) -> List[Finding]:
    """
    Flags literal body text, but only when the document already uses a
    translation convention. Plain static pages are left alone.
    """
    if not doc.uses_translation:
        return []

    res = []
    scope = doc.body or root
    for node in scope.find_all(string=True):
        if isinstance(node, PreformattedString) or not isinstance(node, NavigableString):
            continue
        parent = node.parent
        if not isinstance(parent, Tag) or parent.name in NON_TEXT_PARENTS or parent.has_attr("data-i18n"):
            continue
        text = " ".join(node.split())
        if re.search(r"[A-Za-z]", text) and 2 < len(text) < 60:
            res.append(make_finding("i18n-untranslated", text=text))
    return res


DEFINITION = ElementDefinition(
    tag_names=DOCUMENT,
    audit_rules=[
        check_language, check_outline, check_duplicate_ids,
        check_depth, check_unused_css, check_untranslated
    ]
)
