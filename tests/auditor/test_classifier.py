# tests/auditor/test_classifier.py
import pytest

from auditor.catalog import RULES, make_finding
from auditor.classifier.categories import CATEGORIES, DEFAULT_CATEGORY, determine_category
from auditor.classifier.issue_mapper import GENERIC_RATIONALE, classify
from auditor.model import Finding, Severity


@pytest.mark.parametrize("rule, category", [
    ("img-alt-missing", "accessibility"),
    ("contrast-low", "accessibility"),
    ("a11y-rtl-dir-missing", "accessibility"),
    ("seo-missing-title", "seo"),
    ("security-missing-csp", "security"),
    ("perf-unused-css", "performance"),
    ("i18n-untranslated", "i18n"),
    ("structural-duplicate-id", "structure"),
    ("broken-link", "structure"),
    ("design-tokens-missing", "structure"),
    ("something-unknown", DEFAULT_CATEGORY),
    ("", DEFAULT_CATEGORY),
])
def test_determine_category(rule, category):
    assert determine_category(rule) == category


def test_every_catalog_rule_has_a_known_category():
    for rule in RULES:
        assert determine_category(rule) in CATEGORIES


def test_make_finding_formats_templates():
    finding = make_finding("security-http-link", url="http://example.com")
    assert finding.severity is Severity.WARNING
    assert "http://example.com" in finding.message
    assert finding.fix == "Use HTTPS instead of HTTP"
    assert finding.category == "security"


def test_classify_maps_severity_and_validity():
    findings = [
        make_finding("img-alt-missing", src="a.png"),
        make_finding("perf-missing-lazy-loading"),
        make_finding("seo-missing-title"),
    ]
    result = classify(findings, file_name="index.html", file_type="markup")

    assert [i.severity for i in result.issues] == ["high", "low", "medium"]
    assert result.is_valid is False
    assert result.rationale == "3 issue(s) found (accessibility: 1, performance: 1, seo: 1); 1 high severity."


def test_classify_valid_without_high_severity():
    result = classify([make_finding("perf-missing-lazy-loading")], file_name="a.html", file_type="markup")
    assert result.is_valid is True


def test_classify_empty():
    result = classify([], file_name="a.css", file_type="stylesheet")
    assert result.is_valid is True
    assert result.issues == []
    assert result.ai_suggested_patches == []
    assert result.rationale == "No issues detected."


def test_classify_patch_stubs():
    findings = [
        Finding(rule="custom-rule", severity=Severity.INFO, message="Custom"),
        make_finding("broken-link"),
    ]
    result = classify(findings)

    assert result.ai_suggested_patches[0].diff == "Suggested fix: custom-rule"
    assert result.ai_suggested_patches[0].rationale == GENERIC_RATIONALE
    assert result.ai_suggested_patches[1].diff == RULES["broken-link"].fix
    assert result.issues[0].category == DEFAULT_CATEGORY


def test_classify_takes_name_and_type_from_document(make_doc):
    document = make_doc("<p>x</p>", "pages/about.html")
    result = classify([], document)
    assert result.file_name == "pages/about.html"
    assert result.file_type == "markup"


def test_wire_format_is_camel_case():
    result = classify([make_finding("broken-link")], file_name="a.html", file_type="markup")
    wire = result.to_wire()

    assert set(wire) == {"fileName", "fileType", "isValid", "issues", "aiSuggestedPatches", "rationale"}
    assert wire["issues"][0] == {
        "category": "structure",
        "description": RULES["broken-link"].message,
        "severity": "medium",
    }


def test_severity_ordering():
    assert Severity.INFO.rank < Severity.WARNING.rank < Severity.ERROR.rank
    assert max([Severity.WARNING, Severity.ERROR, Severity.INFO], key=lambda s: s.rank) is Severity.ERROR
