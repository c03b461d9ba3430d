# tests/auditor/test_dom_registry.py
from auditor.catalog import RULES, make_finding
from auditor.dom.builder import DOMBuilder
from auditor.dom.core import DOCUMENT, ElementDefinition, audit_spec
from auditor.dom.qngine import QNGINE
from auditor.dom.registry import DOMRegistry


@audit_spec(codes=["seo-non-semantic"])
def flag_every_section(node, doc):
    return [make_finding("seo-non-semantic")]


def test_discovery_registers_element_rules():
    registry = DOMRegistry().discover()

    assert registry.get_rules("img")
    assert registry.get_rules("head")
    assert registry.get_rules(DOCUMENT)
    assert registry.get_rules("marquee") == []


def test_discovery_is_idempotent():
    registry = DOMRegistry().discover()
    before = len(registry.get_rules("img"))
    registry.discover()
    assert len(registry.get_rules("img")) == before


def test_all_codes_exist_in_catalog():
    codes = DOMRegistry().discover().get_all_possible_codes()
    assert "img-alt-missing" in codes
    assert "security-target-blank-rel" in codes
    assert set(codes) <= set(RULES)


def test_element_definition_collects_codes():
    defn = ElementDefinition(tag_names="section", audit_rules=[flag_every_section], possible_codes=["broken-link"])
    assert defn.tag_names == ("section",)
    assert defn.codes == ["broken-link", "seo-non-semantic"]


def test_custom_registry_drives_the_engine():
    registry = DOMRegistry()
    registry.register(ElementDefinition(tag_names="section", audit_rules=[flag_every_section]))

    doc = DOMBuilder().parse_doc("<section></section><div><section></section></div>")
    findings = QNGINE(registry).run_audit(doc)
    assert [f.rule for f in findings] == ["seo-non-semantic", "seo-non-semantic"]


def test_builder_collects_document_facts():
    doc = DOMBuilder().parse_doc(
        '\ufeff<!DOCTYPE html><html><body class="Page">'
        '<label for="a">A</label><input id="a"><span id="a"></span>'
        '<p data-i18n="x">x</p></body></html>'
    )
    assert doc.has_doctype
    assert doc.id_counts["a"] == 2
    assert doc.label_targets == {"a"}
    assert doc.used_classes == {"page"}
    assert doc.uses_translation
    assert doc.body is not None
