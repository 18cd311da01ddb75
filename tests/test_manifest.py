from __future__ import annotations

import pytest

from qti_core.errors import QtiParseError
from qti_core.manifest import parse_assessment_item_refs_from_xml, parse_assessment_test_xml
from qti_core.types import (
    MISSING_ITEMREF_IDENTIFIER_OR_HREF,
    NO_ITEMREF,
    AssessmentItemRef,
)
from tests.conftest import build_test_xml


@pytest.mark.parametrize("namespace", ["http://www.imsglobal.org/xsd/imsqtiasi_v3p0", None])
def test_strict_returns_refs_in_document_order(namespace):
    xml = build_test_xml(
        [
            {"identifier": "item-1", "href": "item-1.xml"},
            {"identifier": "item-2", "href": "item-2.xml"},
            {"identifier": "item-3", "href": "sub/item-3.xml"},
        ],
        namespace=namespace,
    )
    assert parse_assessment_test_xml(xml) == [
        AssessmentItemRef("item-1", "item-1.xml"),
        AssessmentItemRef("item-2", "item-2.xml"),
        AssessmentItemRef("item-3", "sub/item-3.xml"),
    ]


@pytest.mark.parametrize(
    "xml, message",
    [
        ('<qti-assessment-test identifier="t"></qti-assessment-test>', "has no itemRef"),
        ("<qti-assessment-test>", "parse failed"),
        ("", "parse failed"),
        ('<root><qti-assessment-item-ref identifier="a" href="a.xml"/></root>', "root element is invalid"),
        (build_test_xml([{"identifier": "a", "href": "a.xml"}, {"identifier": "b"}]), "missing identifier or href"),
        (build_test_xml([{"identifier": "", "href": "a.xml"}]), "missing identifier or href"),
    ],
)
def test_strict_failures(xml, message):
    with pytest.raises(QtiParseError, match=message):
        parse_assessment_test_xml(xml)


def test_tolerant_keeps_valid_refs_and_reports_invalid():
    xml = """
      <root>
        <qti-assessment-item-ref identifier="item-1" href="item-1.xml" />
        <qti-assessment-item-ref identifier="item-2" />
        <qti-assessment-item-ref href="item-3.xml" />
      </root>
    """
    result = parse_assessment_item_refs_from_xml(xml)
    assert result.item_refs == [AssessmentItemRef("item-1", "item-1.xml")]
    assert [e.code for e in result.errors] == [MISSING_ITEMREF_IDENTIFIER_OR_HREF] * 2
    assert result.errors[0].identifier == "item-2"
    assert result.errors[1].identifier is None


def test_tolerant_all_invalid_appends_no_itemref():
    result = parse_assessment_item_refs_from_xml(build_test_xml([{"identifier": "a"}, {"href": "b.xml"}]))
    assert result.item_refs == []
    assert [e.code for e in result.errors] == [
        MISSING_ITEMREF_IDENTIFIER_OR_HREF,
        MISSING_ITEMREF_IDENTIFIER_OR_HREF,
        NO_ITEMREF,
    ]


@pytest.mark.parametrize("xml", ["<root/>", "<broken", "", "<root>\ud800</root>"])
def test_tolerant_empty_or_malformed(xml):
    result = parse_assessment_item_refs_from_xml(xml)
    assert result.item_refs == []
    assert [e.code for e in result.errors] == [NO_ITEMREF]


def test_strict_unencodable_text_raises_parse_error():
    with pytest.raises(QtiParseError, match="parse failed"):
        parse_assessment_test_xml("<qti-assessment-test>\ud800</qti-assessment-test>")
