# src/patcher/services/structural_transform_service.py
import json
import logging
import re
from pathlib import PurePath
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from patcher.model import TransformResult
from patcher.services.alt_text_service import suggest_alt_text

logger = logging.getLogger(__name__)

JSON_LD_TYPE = "application/ld+json"
HEAD_CLOSE = re.compile(r"</head\s*>", re.IGNORECASE)

# (offset, text) insertion into the original source
Edit = Tuple[int, str]


def build_json_ld(file_name: str, description: str) -> str:
    """Minimal schema.org WebPage block for a document."""
    data = {
        "@context": "https://schema.org",
        "@type": "WebPage",
        "name": PurePath(file_name).name,
        "description": description,
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def json_ld_script(file_name: str, description: str) -> str:
    return f'<script type="{JSON_LD_TYPE}">{build_json_ld(file_name, description)}</script>'


class MarkupStructuralTransform:
    """
    Edits on markup documents: lang on <html>, alt on every <img> lacking one
    and a JSON-LD block in <head>. Each edit is skipped when its condition
    already holds, so running the transform on its own output changes nothing.

    The parse tree decides what to change; the edits are spliced into the
    original text at the elements' source positions, so every line that is
    not edited stays byte for byte as it was.
    """

    def __init__(self, default_lang: str = "en-US"):
        self.default_lang = default_lang

    def apply(self, content: str, file_name: str = "") -> TransformResult:
        try:
            return self._apply(content, file_name)
        except Exception as e:
            logger.debug(f"Structural transform skipped for {file_name or '<memory>'}: {e}")
            return TransformResult(modified=content)

    def _apply(self, content: str, file_name: str) -> TransformResult:
        soup = BeautifulSoup(content, "html.parser")
        line_starts = _line_offsets(content)
        edits: List[Edit] = []
        replacements: List[Tuple[int, int, str]] = []
        parts: List[str] = []
        generated: Optional[str] = None

        # --- Language ---
        html = soup.find("html")
        if html is not None and not str(html.get("lang") or "").strip():
            span = _locate_opening(content, html, line_starts)
            if span is not None:
                start, end = span
                opening = content[start:end + 1]
                blank = re.search(r"(?<![\w:-])lang(\s*=\s*(\"\s*\"|'\s*'))?(?=[\s/>])", opening, re.IGNORECASE)
                if blank:
                    replacements.append((start + blank.start(), start + blank.end(), f'lang="{self.default_lang}"'))
                else:
                    edits.append(attribute_edit(content, end, f'lang="{self.default_lang}"'))
                parts.append("Added missing `lang` attribute to <html> for accessibility and SEO.")

        # --- Alt text ---
        for img in soup.find_all("img"):
            if img.get("alt") is not None:
                continue
            span = _locate_opening(content, img, line_starts)
            if span is None:
                continue
            suggested = suggest_alt_text(str(img.get("src") or ""))
            edits.append(attribute_edit(content, span[1], f'alt="{suggested}"'))
            parts.append(f'Added alt to <img> ("{suggested}").')

        # --- Structured data ---
        head = soup.find("head")
        if head is not None and soup.find("script", attrs={"type": JSON_LD_TYPE}) is None:
            offset = self._head_insert_offset(content, head, line_starts)
            if offset is not None:
                meta = head.find("meta", attrs={"name": "description"})
                description = str(meta.get("content") or "") if meta is not None else ""
                generated = json_ld_script(file_name, description)
                edits.append((offset, generated + "\n"))
                parts.append("Inserted SEO-friendly JSON-LD WebPage snippet.")

        if not parts:
            return TransformResult(modified=content)

        modified = content
        changes = replacements + [(offset, offset, text) for offset, text in edits]
        for start, stop, text in sorted(changes, key=lambda c: (c[0], c[1]), reverse=True):
            modified = modified[:start] + text + modified[stop:]
        return TransformResult(modified=modified, rationale_parts=parts, generated_content=generated)

    @staticmethod
    def _head_insert_offset(content: str, head: Tag, line_starts: List[int]) -> Optional[int]:
        """Offset of `</head>`, or the end of the <head> opening tag when it is never closed."""
        span = _locate_opening(content, head, line_starts)
        if span is None:
            return None
        close = HEAD_CLOSE.search(content, span[1])
        return close.start() if close else span[1] + 1


class ComponentStructuralTransform:
    """
    Attribute edits on component sources (JSX/TSX).

    The parse tree is only used to locate <img> and <html> elements through
    their source positions; the attributes are spliced into the original text
    so the surrounding code is preserved byte for byte. No JSON-LD is added.
    """

    def __init__(self, default_lang: str = "en-US"):
        self.default_lang = default_lang

    def apply(self, content: str, file_name: str = "") -> TransformResult:
        try:
            return self._apply(content)
        except Exception as e:
            logger.debug(f"Structural transform skipped for {file_name or '<memory>'}: {e}")
            return TransformResult(modified=content)

    def _apply(self, content: str) -> TransformResult:
        soup = BeautifulSoup(content, "html.parser")
        line_starts = _line_offsets(content)
        edits: List[Edit] = []
        parts: List[str] = []

        for tag in soup.find_all(["html", "img"]):
            span = _locate_opening(content, tag, line_starts)
            if span is None:
                continue
            start, end = span
            opening = content[start:end + 1]

            if tag.name == "img" and not has_attribute(opening, "alt"):
                suggested = suggest_alt_text(_literal_attribute(opening, "src") or "")
                edits.append(attribute_edit(content, end, f'alt="{suggested}"'))
                parts.append(f'Added alt to <img> JSX ("{suggested}").')
            elif tag.name == "html" and not has_attribute(opening, "lang"):
                edits.append(attribute_edit(content, end, f'lang="{self.default_lang}"'))
                parts.append("Added missing `lang` attribute to <html>.")

        if not edits:
            return TransformResult(modified=content)

        modified = content
        for offset, text in sorted(edits, reverse=True):
            modified = modified[:offset] + text + modified[offset:]
        return TransformResult(modified=modified, rationale_parts=parts)


# --- Helpers ---

def _line_offsets(content: str) -> List[int]:
    offsets = [0]
    for match in re.finditer("\n", content):
        offsets.append(match.end())
    return offsets


def _source_offset(tag: Tag, line_starts: List[int]) -> Optional[int]:
    """Absolute offset of a tag from the parser's (1-based line, 0-based column) position."""
    if tag.sourceline is None or tag.sourcepos is None:
        return None
    line_index = tag.sourceline - 1
    if not 0 <= line_index < len(line_starts):
        return None
    return line_starts[line_index] + tag.sourcepos


def _locate_opening(content: str, tag: Tag, line_starts: List[int]) -> Optional[Tuple[int, int]]:
    """(start, end) of the tag's opening text, `end` being the index of its closing '>'."""
    start = _source_offset(tag, line_starts)
    if start is None or content[start:start + len(tag.name) + 1].lower() != f"<{tag.name}":
        return None
    end = find_tag_end(content, start)
    if end is None:
        return None
    return start, end


def find_tag_end(content: str, start: int) -> Optional[int]:
    """
    Index of the '>' closing the opening tag that starts at `start`.
    Quoted strings and `{...}` expressions are skipped, so arrow functions in
    attributes do not end the tag early.
    """
    quote = None
    depth = 0
    for i in range(start + 1, len(content)):
        ch = content[i]
        if quote:
            if ch == quote:
                quote = None
        elif ch in "\"'`":
            quote = ch
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth = max(depth - 1, 0)
        elif ch == ">" and depth == 0:
            return i
    return None


def has_attribute(opening: str, name: str) -> bool:
    return re.search(r"(?<![\w-])" + name + r"\s*=", opening, re.IGNORECASE) is not None


def _literal_attribute(opening: str, name: str) -> Optional[str]:
    match = re.search(
        r"(?<![\w-])" + name + r"\s*=\s*(?:\"([^\"]*)\"|'([^']*)'|\{\s*[\"'`]([^\"'`]*)[\"'`]\s*\})",
        opening,
    )
    if not match:
        return None
    return next(group for group in match.groups() if group is not None)


def attribute_edit(content: str, end: int, attributes: str) -> Edit:
    """Insertion adding `attributes` (e.g. 'alt="Logo"') to the opening tag closing at `end`."""
    if content[end - 1] == "/":
        offset = end - 1
        lead = "" if content[offset - 1].isspace() else " "
        return offset, f"{lead}{attributes} "
    lead = "" if content[end - 1].isspace() else " "
    return end, f"{lead}{attributes}"
