from __future__ import annotations

import pytest

QTI_NS = "http://www.imsglobal.org/xsd/imsqtiasi_v3p0"
RESULTS_NS = "http://www.imsglobal.org/xsd/imsqti_result_v3p0"


def build_test_xml(refs: list[dict[str, str]], *, namespace: str | None = QTI_NS) -> str:
    """Assessment test with one itemRef per entry; missing keys drop the attribute."""

    xmlns = f' xmlns="{namespace}"' if namespace else ""
    lines = [f'<qti-assessment-test identifier="test-1"{xmlns}>',
             '  <qti-test-part identifier="part-1"><qti-assessment-section identifier="s-1">']
    for ref in refs:
        attrs = "".join(f' {k}="{v}"' for k, v in ref.items())
        lines.append(f"    <qti-assessment-item-ref{attrs}/>")
    lines.append("  </qti-assessment-section></qti-test-part>")
    lines.append("</qti-assessment-test>")
    return "\n".join(lines)


def build_item_xml(identifier: str, *, namespace: str | None = QTI_NS) -> str:
    xmlns = f' xmlns="{namespace}"' if namespace else ""
    return (
        f'<qti-assessment-item identifier="{identifier}" title="t"{xmlns}>'
        "<qti-item-body><p>Question</p></qti-item-body>"
        "</qti-assessment-item>"
    )


RESULTS_XML = f"""<?xml version="1.0" encoding="UTF-8"?>
<assessmentResult xmlns="{RESULTS_NS}">
  <context sourcedId="student-1">
    <sessionIdentifier sourceID="session-1" identifier="id-1"/>
    <sessionIdentifier sourceID="lms" identifier="attempt-9"/>
    <sessionIdentifier sourceID="" identifier="dropped"/>
  </context>
  <testResult identifier="test-1" datestamp="2024-01-01T00:00:00Z"/>
  <itemResult identifier="item-1" sequenceIndex="1" datestamp="2024-01-01T00:00:00Z" sessionStatus="final">
    <responseVariable identifier="RESPONSE" cardinality="multiple" baseType="identifier">
      <candidateResponse>
        <value>choice-1</value>
        <value>choice-3</value>
      </candidateResponse>
    </responseVariable>
    <responseVariable identifier="NO_CANDIDATE" cardinality="single"/>
    <outcomeVariable identifier="SCORE" cardinality="single" baseType="float">
      <value>1.0</value>
    </outcomeVariable>
    <outcomeVariable identifier="EMPTY" cardinality="single"/>
  </itemResult>
  <itemResult identifier="item-2" sequenceIndex="0" datestamp="2024-01-01T00:00:00Z" sessionStatus="final">
    <outcomeVariable cardinality="single"><value>ignored</value></outcomeVariable>
  </itemResult>
</assessmentResult>
"""


@pytest.fixture
def results_xml() -> str:
    return RESULTS_XML


@pytest.fixture
def package_files() -> dict[str, str]:
    return {
        "qti/assessment-test.qti.xml": build_test_xml([
            {"identifier": "item-1", "href": "items/item-1.qti.xml"},
            {"identifier": "item-2", "href": "items/item-2.qti.xml"},
        ]),
        "qti/items/item-1.qti.xml": build_item_xml("item-1"),
        "qti/items/item-2.qti.xml": build_item_xml("item-2"),
    }
