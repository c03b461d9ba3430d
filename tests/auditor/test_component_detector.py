# tests/auditor/test_component_detector.py
import pytest

from auditor.detectors.component_detector import ComponentDetector
from auditor.model import FileFormat


@pytest.fixture
def component(scanner_settings):
    return ComponentDetector(scanner_settings)


def rules(detector, make_doc, content, path="Widget.tsx"):
    return [f.rule for f in detector.detect(make_doc(content, path))]


def test_component_has_no_structural_pass(component, make_doc):
    assert component.format is FileFormat.COMPONENT
    assert component.structural_pass(make_doc("<div />", "A.jsx")) is None


def test_clean_component(component, make_doc):
    src = (
        "export function Card({ title }) {\n"
        "  return (\n"
        '    <div className="card">\n'
        "      <h2>{title}</h2>\n"
        '      <img src={"/logo.svg"} alt="Logo" loading="lazy" width="10" height="10" />\n'
        "    </div>\n"
        "  );\n"
        "}\n"
    )
    assert rules(component, make_doc, src) == []


def test_dangerous_html_and_eval(component, make_doc):
    src = (
        "const run = (code) => eval(code);\n"
        "const make = new Function('a', 'return a');\n"
        "export const Raw = ({ html }) => <div dangerouslySetInnerHTML={{ __html: html }} />;\n"
    )
    found = rules(component, make_doc, src)
    assert "security-xss-eval" in found
    assert "security-xss-function-constructor" in found
    assert "security-xss-dangerous-html" in found


def test_clickable_div_without_role(component, make_doc):
    src = "export const A = () => <div onClick={() => go()}>Go</div>;"
    found = rules(component, make_doc, src)
    assert found.count("role-missing") == 1

    with_role = 'export const A = () => <div role="button" onClick={go}>Go</div>;'
    assert "role-missing" not in rules(component, make_doc, with_role)


def test_jsx_handlers_are_not_inline_handlers(component, make_doc):
    src = "export const A = () => <button onClick={save}>Save</button>;"
    assert "security-inline-event-handler" not in rules(component, make_doc, src)


def test_unbalanced_tags(component, make_doc):
    findings = component.detect(make_doc("export const A = () => <div><span>x</span>;", "A.jsx"))
    unclosed = [f for f in findings if f.rule == "structural-unclosed-tags"]
    assert len(unclosed) == 1

    balanced = "export const A = () => <div><span>x</span><div /></div>;"
    assert "structural-unclosed-tags" not in rules(component, make_doc, balanced)


def test_tag_rules_apply_to_jsx(component, make_doc):
    src = (
        "export const Page = () => (\n"
        "  <section>\n"
        '    <img src="/big-hero.png" />\n'
        '    <a href="https://x.dev" target="_blank">x</a>\n'
        '    <input id="q" />\n'
        "  </section>\n"
        ");\n"
    )
    found = rules(component, make_doc, src)
    assert "img-alt-missing" in found
    assert "perf-large-image" in found
    assert "security-target-blank-rel" in found
    assert "form-label-missing" in found


def test_html_for_label_is_accepted(component, make_doc):
    src = 'export const F = () => <><label htmlFor="q">Query</label><input id="q" /></>;'
    assert "form-label-missing" not in rules(component, make_doc, src)


def test_document_rules_only_for_documents(component, make_doc):
    fragment = "export const A = () => <p>Hello</p>;"
    found = rules(component, make_doc, fragment)
    assert "lang-missing" not in found
    assert "seo-missing-heading" not in found

    document = "export const Doc = () => <html><head><title>x</title></head><body><p>x</p></body></html>;"
    found = rules(component, make_doc, document)
    assert "lang-missing" in found
    assert "seo-missing-heading" in found
    assert "security-missing-csp" in found


def test_class_name_counts_as_usage(component, make_doc):
    src = (
        'export const A = () => <><style>{`.card {} .orphan {}`}</style><div className="card">x</div></>;'
    )
    findings = component.detect(make_doc(src))
    unused = [f.message for f in findings if f.rule == "perf-unused-css"]
    assert len(unused) == 1
    assert "orphan" in unused[0]
