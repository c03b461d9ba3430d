# src/auditor/dom/models.py
from collections import Counter
from typing import Dict, Optional, Set

from bs4 import BeautifulSoup, Tag
from pydantic import BaseModel, ConfigDict, Field

from frontscan.model import ScannerSettings


class MarkupDocument(BaseModel):
    """
    Represents a parsed markup document.

    Wraps the BeautifulSoup tree together with the document-level facts that
    several rules need (id counts, label targets, class usage, translation
    convention), so that they are computed once per document.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    path: str = ""
    raw: str
    soup: BeautifulSoup
    settings: ScannerSettings = Field(default_factory=ScannerSettings)

    has_doctype: bool = False
    id_counts: Dict[str, int] = Field(default_factory=Counter)
    label_targets: Set[str] = Field(default_factory=set)
    used_classes: Set[str] = Field(default_factory=set)
    uses_translation: bool = False

    @property
    def html(self) -> Optional[Tag]:
        return self.soup.find("html")

    @property
    def head(self) -> Optional[Tag]:
        return self.soup.find("head")

    @property
    def body(self) -> Optional[Tag]:
        return self.soup.find("body")
