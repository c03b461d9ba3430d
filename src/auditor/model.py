import hashlib
from enum import Enum
from pathlib import PurePath
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from auditor.classifier.categories import determine_category


class FileFormat(str, Enum):
    """The closed set of document formats the detector understands."""
    MARKUP = "markup"
    COMPONENT = "component"
    STYLESHEET = "stylesheet"

    @classmethod
    def from_path(cls, path: Union[str, PurePath]) -> Optional["FileFormat"]:
        """Infers the format from the file extension. Returns None for unsupported files."""
        return EXTENSION_FORMATS.get(PurePath(path).suffix.lower())


EXTENSION_FORMATS = {
    ".html": FileFormat.MARKUP,
    ".htm": FileFormat.MARKUP,
    ".tsx": FileFormat.COMPONENT,
    ".jsx": FileFormat.COMPONENT,
    ".ts": FileFormat.COMPONENT,
    ".js": FileFormat.COMPONENT,
    ".css": FileFormat.STYLESHEET,
}


def compute_digest(content: Union[str, bytes]) -> str:
    """SHA-256 hex digest of the raw content bytes (UTF-8 for text)."""
    raw = content.encode("utf-8") if isinstance(content, str) else content
    return hashlib.sha256(raw).hexdigest()


class SourceDocument(BaseModel):
    """
    A read-only scan input. The path is informational only; identity comes
    from the content digest.
    """
    model_config = ConfigDict(frozen=True)

    path: str
    format: FileFormat
    content: str

    @property
    def digest(self) -> str:
        return compute_digest(self.content)

    @property
    def name(self) -> str:
        return PurePath(self.path).name or self.path


class Severity(str, Enum):
    """Detector-level severity, ordered info < warning < error through `rank`."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANKS[self]


_SEVERITY_RANKS = {Severity.INFO: 0, Severity.WARNING: 1, Severity.ERROR: 2}


class Finding(BaseModel):
    """A single detector-reported issue, prior to classification."""
    rule: str
    severity: Severity
    message: str
    fix: Optional[str] = None
    rationale: Optional[str] = None

    @property
    def category(self) -> str:
        return determine_category(self.rule)


IssueSeverity = Literal["low", "medium", "high"]


class ConsolidatedIssue(BaseModel):
    category: str
    description: str
    severity: IssueSeverity


class PatchSuggestion(BaseModel):
    diff: str
    rationale: str


class ConsolidatedResult(BaseModel):
    """
    The classified, cacheable scan output for one document.
    Serializes with camelCase keys (fileName, isValid, aiSuggestedPatches, ...).
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    file_name: str
    file_type: str
    is_valid: bool
    issues: List[ConsolidatedIssue] = Field(default_factory=list)
    ai_suggested_patches: List[PatchSuggestion] = Field(default_factory=list)
    rationale: str = ""

    def to_wire(self) -> dict:
        """Returns the camelCase dictionary consumed by report and redaction layers."""
        return self.model_dump(mode="json", by_alias=True)


# --- Before/after verification ---

class ScanMetrics(BaseModel):
    total_files: int = 0
    total_issues: int = 0
    high_severity: int = 0
    medium_severity: int = 0
    low_severity: int = 0
    issues_by_category: Dict[str, int] = Field(default_factory=dict)
    files_with_issues: int = 0


class Reduction(BaseModel):
    """Drop from a before count to an after count. Negative when the count grew."""
    reduced: int = 0
    percent: int = 0


class Improvements(BaseModel):
    total_issues: Reduction = Field(default_factory=Reduction)
    high_severity: Reduction = Field(default_factory=Reduction)
    medium_severity: Reduction = Field(default_factory=Reduction)
    low_severity: Reduction = Field(default_factory=Reduction)
    files_fixed: Reduction = Field(default_factory=Reduction)
    by_category: Dict[str, Reduction] = Field(default_factory=dict)


class ComparisonMetrics(BaseModel):
    before: ScanMetrics
    after: ScanMetrics
    improvements: Improvements
