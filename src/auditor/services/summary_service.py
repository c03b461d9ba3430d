# src/auditor/services/summary_service.py
import logging
import math
from typing import Any, Dict, Iterable

import pandas as pd

from auditor.model import ComparisonMetrics, ConsolidatedResult, Improvements, Reduction, ScanMetrics

logger = logging.getLogger(__name__)

ISSUE_COLUMNS = ["file", "category", "severity", "description"]


def issues_dataframe(results: Iterable[ConsolidatedResult]) -> pd.DataFrame:
    """Flattens scan results into one row per issue."""
    rows = [
        {
            "file": result.file_name,
            "category": issue.category,
            "severity": issue.severity,
            "description": issue.description,
        }
        for result in results
        for issue in result.issues
    ]
    return pd.DataFrame(rows, columns=ISSUE_COLUMNS)


def summarize_results(results: Iterable[ConsolidatedResult]) -> Dict[str, Any]:
    """
    Aggregates a scan into counts.

    Returns:
        Dict[str, Any]: files_scanned, files_with_issues, invalid_files,
        total_issues, breakdown (category -> count, most frequent first)
        and severity (severity -> count).
    """
    results = list(results)
    df = issues_dataframe(results)

    breakdown: Dict[str, int] = {}
    severity: Dict[str, int] = {}
    if not df.empty:
        counts = df["category"].value_counts()
        breakdown = {str(k): int(v) for k, v in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))}
        severity = {str(k): int(v) for k, v in df["severity"].value_counts().sort_index().items()}

    return {
        "files_scanned": len(results),
        "files_with_issues": int(df["file"].nunique()) if not df.empty else 0,
        "invalid_files": sum(1 for r in results if not r.is_valid),
        "total_issues": int(len(df)),
        "breakdown": breakdown,
        "severity": severity,
    }


def format_summary(summary: Dict[str, Any]) -> str:
    lines = [
        f"Files scanned: {summary['files_scanned']} "
        f"({summary['files_with_issues']} with issues, {summary['invalid_files']} invalid)",
        f"Total issues: {summary['total_issues']}",
    ]
    for category, count in summary["breakdown"].items():
        lines.append(f"  {category:<14} {count}")
    return "\n".join(lines)


# --- Before/after verification ---

def calculate_metrics(results: Iterable[ConsolidatedResult]) -> ScanMetrics:
    """Severity and category counts over one scan, the input to `compare_metrics`."""
    results = list(results)
    df = issues_dataframe(results)
    severity = df["severity"].value_counts()

    return ScanMetrics(
        total_files=len(results),
        total_issues=int(len(df)),
        high_severity=int(severity.get("high", 0)),
        medium_severity=int(severity.get("medium", 0)),
        low_severity=int(severity.get("low", 0)),
        issues_by_category={str(k): int(v) for k, v in df["category"].value_counts().sort_index().items()},
        files_with_issues=sum(1 for r in results if r.issues),
    )


def _reduction(before: int, after: int) -> Reduction:
    reduced = before - after
    # Halves round up, also for negative values
    percent = math.floor(reduced / before * 100 + 0.5) if before > 0 else 0
    return Reduction(reduced=reduced, percent=percent)


def compare_metrics(before: ScanMetrics, after: ScanMetrics) -> ComparisonMetrics:
    """
    Measures what a round of patches changed, by comparing the metrics of the
    scan before applying them with the metrics of a rescan afterwards.
    """
    categories = sorted(set(before.issues_by_category) | set(after.issues_by_category))
    improvements = Improvements(
        total_issues=_reduction(before.total_issues, after.total_issues),
        high_severity=_reduction(before.high_severity, after.high_severity),
        medium_severity=_reduction(before.medium_severity, after.medium_severity),
        low_severity=_reduction(before.low_severity, after.low_severity),
        files_fixed=_reduction(before.files_with_issues, after.files_with_issues),
        by_category={
            category: _reduction(before.issues_by_category.get(category, 0), after.issues_by_category.get(category, 0))
            for category in categories
        },
    )
    return ComparisonMetrics(before=before, after=after, improvements=improvements)


def format_comparison_summary(comparison: ComparisonMetrics) -> str:
    before, after, imp = comparison.before, comparison.after, comparison.improvements

    def change(reduction: Reduction) -> str:
        return f"{reduction.percent}% reduced" if reduction.reduced > 0 else "no change"

    lines = [
        "Before/after verification",
        f"Total issues:       {before.total_issues} -> {after.total_issues} ({imp.total_issues.percent}% reduction)",
        f"Files with issues:  {before.files_with_issues} -> {after.files_with_issues} "
        f"({imp.files_fixed.reduced} files fixed)",
        f"  high    {before.high_severity} -> {after.high_severity} ({change(imp.high_severity)})",
        f"  medium  {before.medium_severity} -> {after.medium_severity} ({change(imp.medium_severity)})",
        f"  low     {before.low_severity} -> {after.low_severity} ({change(imp.low_severity)})",
    ]

    improved = sorted(
        ((c, r) for c, r in imp.by_category.items() if r.reduced > 0),
        key=lambda item: (-item[1].reduced, item[0]),
    )
    if improved:
        lines.append("Improvements by category:")
        lines.extend(f"  {c:<14} {r.reduced} issues fixed ({r.percent}%)" for c, r in improved)

    if imp.total_issues.percent > 0:
        lines.append(f"Issues reduced by {imp.total_issues.percent}%.")
    elif after.total_issues == 0:
        lines.append("No issues found.")
    else:
        lines.append("No improvement detected; review the patches.")
    return "\n".join(lines)
