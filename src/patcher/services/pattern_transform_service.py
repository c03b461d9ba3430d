# src/patcher/services/pattern_transform_service.py
import logging
import re
from typing import List, Optional

from auditor.model import FileFormat
from patcher.model import PatchContext, TransformResult
from patcher.services.alt_text_service import suggest_alt_text
from patcher.services.structural_transform_service import (
    HEAD_CLOSE,
    JSON_LD_TYPE,
    attribute_edit,
    find_tag_end,
    has_attribute,
    json_ld_script,
)

logger = logging.getLogger(__name__)

HTML_OPEN = re.compile(r"<html\b([^>]*)>", re.IGNORECASE)
HEAD_OPEN = re.compile(r"<head\b[^>]*>", re.IGNORECASE)
IMG_OPEN = re.compile(r"<img\b", re.IGNORECASE)
SRC_ATTR = re.compile(r"(?<![\w-])src\s*=\s*[\"']?([^\"'\s>]+)", re.IGNORECASE)
VIEWPORT_META = re.compile(r"<meta\b[^>]*name\s*=\s*[\"']viewport[\"']", re.IGNORECASE)
COLOR_SCHEME_META = re.compile(r"<meta\b[^>]*name\s*=\s*[\"']color-scheme[\"']", re.IGNORECASE)
PREFERS_COLOR_SCHEME = re.compile(r"prefers-color-scheme", re.IGNORECASE)

VIEWPORT_WIDTHS = {"mobile": "420", "tablet": "768", "desktop": "1024"}


def viewport_content(viewport: str) -> str:
    if viewport == "responsive":
        return "width=device-width, initial-scale=1.0"
    return f"width={VIEWPORT_WIDTHS.get(viewport, '1024')}"


class PatternTransform:
    """
    Text-substitution edits, used when no structural edit applies.

    Applies the structural edit set by regular expression (lang, alt, JSON-LD)
    plus the preference-driven edits (locale, viewport, colour scheme) when the
    caller supplied a PatchContext. Stylesheets only receive the colour-scheme edit.
    """

    def __init__(self, default_lang: str = "en-US"):
        self.default_lang = default_lang

    def apply(
            self,
            content: str,
            file_format: FileFormat,
            file_name: str = "",
            context: Optional[PatchContext] = None,
    ) -> TransformResult:
        context = context or PatchContext()
        parts: List[str] = []
        generated: Optional[str] = None
        modified = content

        if file_format is FileFormat.STYLESHEET:
            modified = self._color_scheme_css(modified, context, parts)
            return TransformResult(modified=modified, rationale_parts=parts)

        modified = self._lang(modified, context, parts)
        modified = self._alt(modified, context, parts)
        if file_format is FileFormat.MARKUP:
            modified, generated = self._json_ld(modified, file_name, parts)
        modified = self._viewport(modified, context, parts)
        modified = self._color_scheme_meta(modified, context, parts)

        return TransformResult(modified=modified, rationale_parts=parts, generated_content=generated)

    # --- Edits ---

    def _lang(self, content: str, context: PatchContext, parts: List[str]) -> str:
        match = HTML_OPEN.search(content)
        if not match or has_attribute(match.group(1), "lang"):
            return content
        lang = context.locale or self.default_lang
        insert_at = match.start() + len("<html")
        if context.locale:
            parts.append(f'Set lang="{lang}" on <html> from the preferred locale.')
        else:
            parts.append(f'Added default lang="{lang}" to <html>.')
        return content[:insert_at] + f' lang="{lang}"' + content[insert_at:]

    def _alt(self, content: str, context: PatchContext, parts: List[str]) -> str:
        aaa = context.a11y_level == "AAA"
        edits = []
        scanned_to = 0

        for match in IMG_OPEN.finditer(content):
            if match.start() < scanned_to:
                continue
            end = find_tag_end(content, match.start())
            if end is None:
                continue
            scanned_to = end
            attrs = content[match.end():end]
            if has_attribute(attrs, "alt"):
                continue
            src = SRC_ATTR.search(attrs)
            suggested = suggest_alt_text(src.group(1) if src else "")
            added = f'alt="{suggested}"'
            if aaa and not has_attribute(attrs, "role"):
                added += ' role="img"'
            edits.append(attribute_edit(content, end, added))
            parts.append(f'Added alt to <img> ("{suggested}").')

        for offset, text in reversed(edits):
            content = content[:offset] + text + content[offset:]
        return content

    def _json_ld(self, content: str, file_name: str, parts: List[str]):
        if JSON_LD_TYPE in content.lower():
            return content, None
        match = HEAD_CLOSE.search(content)
        if not match:
            return content, None
        description = ""
        meta = re.search(
            r"<meta\b[^>]*name\s*=\s*[\"']description[\"'][^>]*content\s*=\s*[\"']([^\"']*)[\"']",
            content,
            re.IGNORECASE,
        )
        if meta:
            description = meta.group(1)
        script = json_ld_script(file_name, description)
        parts.append("Inserted SEO-friendly JSON-LD WebPage snippet.")
        return content[:match.start()] + script + "\n" + content[match.start():], script

    def _viewport(self, content: str, context: PatchContext, parts: List[str]) -> str:
        if not context.viewport or VIEWPORT_META.search(content):
            return content
        match = HEAD_OPEN.search(content)
        if not match:
            return content
        value = viewport_content(context.viewport)
        parts.append(f"Added viewport meta tag for a {context.viewport} layout.")
        meta = f'\n  <meta name="viewport" content="{value}">'
        return content[:match.end()] + meta + content[match.end():]

    def _color_scheme_meta(self, content: str, context: PatchContext, parts: List[str]) -> str:
        if context.color_scheme != "both" or PREFERS_COLOR_SCHEME.search(content) or COLOR_SCHEME_META.search(content):
            return content
        match = HEAD_CLOSE.search(content)
        if not match:
            return content
        parts.append("Declared light and dark color scheme support.")
        meta = '  <meta name="color-scheme" content="light dark">\n'
        return content[:match.start()] + meta + content[match.start():]

    def _color_scheme_css(self, content: str, context: PatchContext, parts: List[str]) -> str:
        if context.color_scheme != "both" or PREFERS_COLOR_SCHEME.search(content):
            return content
        if re.search(r"color-scheme\s*:", content, re.IGNORECASE):
            return content
        parts.append("Declared light and dark color scheme support.")
        separator = "" if not content or content.endswith("\n") else "\n"
        return content + separator + "\n:root {\n  color-scheme: light dark;\n}\n"
