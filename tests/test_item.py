from __future__ import annotations

from qti_core.item import extract_item_identifier
from tests.conftest import build_item_xml


def test_identifier_from_item_root():
    assert extract_item_identifier(build_item_xml("item-1")) == "item-1"
    assert extract_item_identifier(build_item_xml("item-1", namespace=None)) == "item-1"


def test_identifier_from_nested_item():
    xml = '<root><qti-assessment-item identifier="item-2"/><qti-assessment-item identifier="item-3"/></root>'
    assert extract_item_identifier(xml) == "item-2"


def test_missing_identifier_is_none():
    assert extract_item_identifier("<root></root>") is None
    assert extract_item_identifier('<qti-assessment-item identifier=""/>') is None
    assert extract_item_identifier("<qti-assessment-item/>") is None
    assert extract_item_identifier("<qti-assessment-item") is None
    assert extract_item_identifier("") is None


def test_unencodable_text_is_none():
    assert extract_item_identifier('<qti-assessment-item identifier="a\ud800"/>') is None
