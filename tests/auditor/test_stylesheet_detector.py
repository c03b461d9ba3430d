# tests/auditor/test_stylesheet_detector.py
import pytest

from auditor.detectors.stylesheet_detector import StylesheetDetector
from auditor.model import Severity
from auditor.utils.css_utils import class_selectors, contrast_ratio, font_families
from frontscan.model import ScannerSettings


@pytest.fixture
def stylesheet(scanner_settings):
    return StylesheetDetector(scanner_settings)


def detect(detector, make_doc, css):
    return detector.detect(make_doc(css, "styles.css"))


# --- css_utils ---

def test_contrast_ratio_bounds():
    assert contrast_ratio("#000", "#fff") == pytest.approx(21.0)
    assert contrast_ratio("#777777", "#777777") == pytest.approx(1.0)
    assert contrast_ratio("#777777", "#ffffff") < 4.5


def test_font_families_are_normalized():
    css = 'a { font-family: "Inter", sans-serif; } b { font-family: Inter , sans-serif; } c { font-family: Georgia; }'
    assert font_families(css) == ["inter,sans-serif", "georgia"]


def test_class_selectors_ignore_declarations():
    css = "/* .commented */ .btn:hover, .card > .title { background: url(x.png); width: 1.5rem; }"
    assert class_selectors(css) == ["btn", "card", "title"]


# --- Battery ---

def test_tokenized_stylesheet_is_clean(stylesheet, make_doc):
    css = ":root { --fg: #111111; }\nbody { color: var(--fg); font-family: system-ui; }\n"
    assert detect(stylesheet, make_doc, css) == []


def test_low_contrast_against_backgrounds(stylesheet, make_doc):
    """A block without its own background is checked against the first one in the file."""
    css = (
        ".hint { color: #777777; }\n"
        ".banner { background: #111111; color: #ffffff; }\n"
        "a { color: var(--link); }\n"
    )
    findings = detect(stylesheet, make_doc, css)
    assert [f.rule for f in findings] == ["contrast-low", "design-color-literal"]

    low = findings[0]
    assert low.severity is Severity.ERROR
    assert "#777777 on #111111" in low.message
    assert "4.5:1" in low.fix


def test_white_is_the_default_background(stylesheet, make_doc):
    css = ":root { --a: 1; } a { width: var(--a); }\n.hint { color: #777777; }\n"
    findings = detect(stylesheet, make_doc, css)
    assert [f.rule for f in findings] == ["contrast-low"]
    assert "#777777 on #ffffff" in findings[0].message


def test_file_background_is_the_fallback(stylesheet, make_doc):
    css = "body { background-color: #000000; }\n.muted { color: #222222; }\n:root { --x: 1; } a { color: var(--x); }"
    findings = detect(stylesheet, make_doc, css)
    assert [f.rule for f in findings] == ["contrast-low"]
    assert "#222222 on #000000" in findings[0].message


def test_missing_design_tokens(stylesheet, make_doc):
    findings = detect(stylesheet, make_doc, "body { margin: 0; }")
    assert [f.rule for f in findings] == ["design-tokens-missing"]
    assert findings[0].category == "structure"


def test_too_many_fonts(make_doc):
    detector = StylesheetDetector(ScannerSettings(max_font_families=2))
    css = (
        ":root { --a: 1; } a { width: var(--a); }\n"
        "h1 { font-family: Georgia; }\np { font-family: Inter; }\ncode { font-family: monospace; }\n"
    )
    findings = detect(detector, make_doc, css)
    assert [f.rule for f in findings] == ["perf-multiple-fonts"]
    assert "3" in findings[0].message


def test_insecure_urls(stylesheet, make_doc):
    css = ':root { --a: 1; } a { width: var(--a); } .hero { background-image: url("http://cdn.example.com/hero.png"); }'
    findings = detect(stylesheet, make_doc, css)
    assert [f.rule for f in findings] == ["security-http-resource"]
    assert "http://cdn.example.com/hero.png" in findings[0].message


def test_commented_colors_are_ignored(stylesheet, make_doc):
    css = ":root { --a: 1; } a { width: var(--a); }\n/* .old { color: #eeeeee; } */\n"
    assert detect(stylesheet, make_doc, css) == []
