# src/patcher/services/context_service.py
import re
from typing import List

from auditor.model import FileFormat, SourceDocument

VIEWPORT_SENSITIVE = re.compile(r"<meta\s+name=[\"']viewport[\"']|media=", re.IGNORECASE)
LOCALIZED = re.compile(r"<html\b|lang=")
COLOR_SENSITIVE = re.compile(r"color|background|theme", re.IGNORECASE)
ACCESSIBILITY_SENSITIVE = re.compile(r"<img|aria-|role=")


def required_preferences(document: SourceDocument) -> List[str]:
    """
    Names the PatchContext fields worth asking the user about for this document.
    Asking is up to the caller.
    """
    if document.format is FileFormat.STYLESHEET:
        return ["viewport", "color_scheme"]

    src = document.content
    needed = []
    if VIEWPORT_SENSITIVE.search(src):
        needed.append("viewport")
    if LOCALIZED.search(src):
        needed.append("locale")
    if COLOR_SENSITIVE.search(src):
        needed.append("color_scheme")
    if ACCESSIBILITY_SENSITIVE.search(src):
        needed.append("a11y_level")
    return needed
