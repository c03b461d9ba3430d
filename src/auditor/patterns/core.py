# src/auditor/patterns/core.py
import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, List

from frontscan.model import ScannerSettings
from ..model import Finding

HEAD_TAG = re.compile(r"<head\b", re.IGNORECASE)
HTML_TAG = re.compile(r"<html\b", re.IGNORECASE)


@dataclass
class PatternContext:
    """
    What a pattern rule may know about the source besides its raw text.

    `is_document` marks full documents (an <html> or <head> is present, or the
    source is a markup file), which enables the document-scope rules.
    """
    settings: ScannerSettings = field(default_factory=ScannerSettings)
    is_document: bool = True
    has_head: bool = False

    @classmethod
    def for_markup(cls, src: str, settings: ScannerSettings) -> "PatternContext":
        return cls(settings=settings, is_document=True, has_head=bool(HEAD_TAG.search(src)))

    @classmethod
    def for_component(cls, src: str, settings: ScannerSettings) -> "PatternContext":
        has_head = bool(HEAD_TAG.search(src))
        return cls(settings=settings, is_document=has_head or bool(HTML_TAG.search(src)), has_head=has_head)


PatternRule = Callable[[str, PatternContext], List[Finding]]


def run_rules(rules: Iterable[PatternRule], src: str, ctx: PatternContext) -> List[Finding]:
    """Applies each rule to the raw text, in declaration order."""
    findings: List[Finding] = []
    for rule in rules:
        findings.extend(rule(src, ctx))
    return findings
