# src/auditor/classifier/issue_mapper.py
from collections import Counter
from typing import Dict, Iterable, List, Optional

from ..model import (
    ConsolidatedIssue,
    ConsolidatedResult,
    Finding,
    IssueSeverity,
    PatchSuggestion,
    Severity,
    SourceDocument,
)
from .categories import determine_category

SEVERITY_MAP: Dict[Severity, IssueSeverity] = {
    Severity.ERROR: "high",
    Severity.WARNING: "medium",
    Severity.INFO: "low",
}

GENERIC_RATIONALE = "Auto-suggested improvement."


def to_severity(severity: Severity) -> IssueSeverity:
    return SEVERITY_MAP[Severity(severity)]


def map_issues(findings: Iterable[Finding]) -> List[ConsolidatedIssue]:
    return [
        ConsolidatedIssue(
            category=determine_category(f.rule),
            description=f.message,
            severity=to_severity(f.severity),
        )
        for f in findings
    ]


def create_patches(findings: Iterable[Finding]) -> List[PatchSuggestion]:
    """One suggestion stub per finding; generic text stands in for a missing fix or rationale."""
    return [
        PatchSuggestion(
            diff=f.fix or f"Suggested fix: {f.rule}",
            rationale=f.rationale or GENERIC_RATIONALE,
        )
        for f in findings
    ]


def summarize(issues: List[ConsolidatedIssue]) -> str:
    if not issues:
        return "No issues detected."
    counts = Counter(issue.category for issue in issues)
    high = sum(1 for issue in issues if issue.severity == "high")
    parts = ", ".join(f"{category}: {count}" for category, count in sorted(counts.items()))
    return f"{len(issues)} issue(s) found ({parts}); {high} high severity."


def classify(
        findings: List[Finding],
        document: Optional[SourceDocument] = None,
        file_name: str = "",
        file_type: str = "",
) -> ConsolidatedResult:
    """
    Normalizes detector findings into a ConsolidatedResult.

    The result is valid iff no finding maps to "high" severity.
    """
    issues = map_issues(findings)
    if document is not None:
        file_name = file_name or document.path
        file_type = file_type or document.format.value

    return ConsolidatedResult(
        file_name=file_name,
        file_type=file_type,
        is_valid=all(issue.severity != "high" for issue in issues),
        issues=issues,
        ai_suggested_patches=create_patches(findings),
        rationale=summarize(issues),
    )
