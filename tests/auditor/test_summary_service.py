# tests/auditor/test_summary_service.py
from auditor.catalog import make_finding
from auditor.classifier.issue_mapper import classify
from auditor.model import ScanMetrics
from auditor.services.summary_service import (
    calculate_metrics,
    compare_metrics,
    format_comparison_summary,
    format_summary,
    issues_dataframe,
    summarize_results,
)


def sample_results():
    return [
        classify([
            make_finding("img-alt-missing", src="a.png"),
            make_finding("lang-missing"),
            make_finding("broken-link"),
        ], file_name="index.html", file_type="markup"),
        classify([make_finding("design-tokens-missing")], file_name="main.css", file_type="stylesheet"),
        classify([], file_name="clean.tsx", file_type="component"),
    ]


def test_issues_dataframe_has_one_row_per_issue():
    df = issues_dataframe(sample_results())
    assert list(df.columns) == ["file", "category", "severity", "description"]
    assert len(df) == 4
    assert set(df["file"]) == {"index.html", "main.css"}


def test_issues_dataframe_empty():
    df = issues_dataframe([])
    assert df.empty
    assert list(df.columns) == ["file", "category", "severity", "description"]


def test_summarize_results():
    summary = summarize_results(sample_results())

    assert summary["files_scanned"] == 3
    assert summary["files_with_issues"] == 2
    assert summary["invalid_files"] == 1
    assert summary["total_issues"] == 4
    # Most frequent first, ties by name
    assert list(summary["breakdown"].items()) == [("accessibility", 2), ("structure", 2)]
    assert summary["severity"] == {"high": 2, "medium": 2}


def test_summarize_no_results():
    summary = summarize_results([])
    assert summary["total_issues"] == 0
    assert summary["breakdown"] == {}
    assert summary["files_with_issues"] == 0


def test_format_summary():
    text = format_summary(summarize_results(sample_results()))
    assert text.splitlines()[0] == "Files scanned: 3 (2 with issues, 1 invalid)"
    assert "Total issues: 4" in text
    assert "accessibility" in text


# --- Before/after verification ---

def patched_results():
    """The sample scan after the accessibility fixes were applied."""
    return [
        classify([make_finding("broken-link")], file_name="index.html", file_type="markup"),
        classify([make_finding("design-tokens-missing")], file_name="main.css", file_type="stylesheet"),
        classify([], file_name="clean.tsx", file_type="component"),
    ]


def test_calculate_metrics():
    metrics = calculate_metrics(sample_results())

    assert metrics.total_files == 3
    assert metrics.total_issues == 4
    assert (metrics.high_severity, metrics.medium_severity, metrics.low_severity) == (2, 2, 0)
    assert metrics.issues_by_category == {"accessibility": 2, "structure": 2}
    assert metrics.files_with_issues == 2


def test_calculate_metrics_empty():
    assert calculate_metrics([]) == ScanMetrics()


def test_compare_metrics_after_patching():
    comparison = compare_metrics(calculate_metrics(sample_results()), calculate_metrics(patched_results()))
    imp = comparison.improvements

    assert (imp.total_issues.reduced, imp.total_issues.percent) == (2, 50)
    assert (imp.high_severity.reduced, imp.high_severity.percent) == (2, 100)
    assert (imp.medium_severity.reduced, imp.medium_severity.percent) == (0, 0)
    assert imp.files_fixed.reduced == 0
    assert imp.by_category["accessibility"].percent == 100
    assert imp.by_category["structure"].reduced == 0
    assert comparison.after.issues_by_category == {"structure": 2}


def test_compare_metrics_rounding_and_regressions():
    before = ScanMetrics(total_issues=3, high_severity=2, low_severity=0, issues_by_category={"seo": 3})
    after = ScanMetrics(total_issues=2, high_severity=3, low_severity=1, issues_by_category={"seo": 1, "i18n": 1})
    imp = compare_metrics(before, after).improvements

    assert imp.total_issues.percent == 33
    assert imp.by_category["seo"].percent == 67
    assert (imp.high_severity.reduced, imp.high_severity.percent) == (-1, -50)
    # Nothing to reduce from
    assert (imp.low_severity.reduced, imp.low_severity.percent) == (-1, 0)
    assert list(imp.by_category) == ["i18n", "seo"]


def test_format_comparison_summary():
    comparison = compare_metrics(calculate_metrics(sample_results()), calculate_metrics(patched_results()))
    lines = format_comparison_summary(comparison).splitlines()

    assert "Total issues:       4 -> 2 (50% reduction)" in lines
    assert "  high    2 -> 0 (100% reduced)" in lines
    assert "  medium  2 -> 2 (no change)" in lines
    assert any(line.startswith("  accessibility") for line in lines)
    assert lines[-1] == "Issues reduced by 50%."


def test_format_comparison_without_improvement():
    metrics = calculate_metrics(patched_results())
    text = format_comparison_summary(compare_metrics(metrics, metrics))
    assert "Improvements by category" not in text
    assert text.splitlines()[-1] == "No improvement detected; review the patches."
