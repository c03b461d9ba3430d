# src/patcher/model.py
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from frontscan.model import LANGUAGE_TAG_PATTERN

Viewport = Literal["responsive", "mobile", "tablet", "desktop"]
ColorScheme = Literal["light", "dark", "both"]
A11yLevel = Literal["A", "AA", "AAA"]


class PatchContext(BaseModel):
    """
    User preferences consumed by the pattern-based patch path.

    Collected by the caller and passed explicitly into each patch call; the
    caller clears it between documents when the preferences should not carry over.
    """
    model_config = ConfigDict(validate_assignment=True)

    viewport: Optional[Viewport] = None
    locale: Optional[str] = Field(default=None, pattern=LANGUAGE_TAG_PATTERN)
    color_scheme: Optional[ColorScheme] = None
    a11y_level: Optional[A11yLevel] = None

    def clear(self) -> None:
        for name in type(self).model_fields:
            setattr(self, name, None)

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in type(self).model_fields)


class PatchStrategy(str, Enum):
    STRUCTURAL = "structural"
    PATTERN = "pattern"


class TransformResult(BaseModel):
    modified: str
    rationale_parts: List[str] = Field(default_factory=list)
    generated_content: Optional[str] = None

    @property
    def changed(self) -> bool:
        return bool(self.rationale_parts)

    @property
    def rationale(self) -> str:
        return " ".join(self.rationale_parts) if self.rationale_parts else "No changes necessary."


class Patch(BaseModel):
    file_name: str
    diff_text: str
    rationale: str
    strategy: PatchStrategy
    generated_content_added: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.diff_text

    def render(self) -> str:
        """Rationale and generated-content markers as comments, followed by the unified diff."""
        header = f"/* RATIONALE: {self.rationale} */\n"
        if self.generated_content_added:
            header += "/* GENERATED_CONTENT_ADDED: yes */\n"
        return header + self.diff_text
