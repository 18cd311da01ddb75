from __future__ import annotations

import logging
from typing import List

from . import config
from .errors import QtiParseError
from .types import (
    MISSING_ITEMREF_IDENTIFIER_OR_HREF,
    NO_ITEMREF,
    AssessmentItemRef,
    ItemRefParseResult,
    ParseIssue,
)
from .xml_utils import attr, elements_by_local_name, local_name, parse_xml

log = logging.getLogger(__name__)


def parse_assessment_test_xml(xml: str | bytes) -> List[AssessmentItemRef]:
    """Return every itemRef of an assessment test, or raise.

    All-or-nothing: a malformed document, a wrong root element, an empty
    manifest or any itemRef lacking ``identifier``/``href`` raises
    :class:`QtiParseError` and no records are returned.
    """

    try:
        root = parse_xml(xml)
    except QtiParseError as exc:
        raise QtiParseError("assessmentTest XML parse failed") from exc
    if local_name(root.tag) != config.ASSESSMENT_TEST_TAG:
        raise QtiParseError("assessmentTest root element is invalid")

    refs = [
        AssessmentItemRef(identifier=attr(node, "identifier"), href=attr(node, "href"))
        for node in elements_by_local_name(root, config.ASSESSMENT_ITEM_REF_TAG)
    ]
    if not refs:
        raise QtiParseError("assessmentTest has no itemRef")
    if any(not ref.identifier or not ref.href for ref in refs):
        raise QtiParseError("assessmentTest itemRef missing identifier or href")
    log.debug("assessmentTest parsed: %d itemRefs", len(refs))
    return refs


def parse_assessment_item_refs_from_xml(xml: str | bytes) -> ItemRefParseResult:
    """Collect itemRefs from anywhere in the document, keeping the valid ones.

    Each itemRef missing ``identifier`` or ``href`` yields one
    ``missing-itemref-identifier-or-href`` issue; ``no-itemref`` is appended
    when no valid itemRef remains. An unparsable document counts as "no
    itemRef".
    """

    try:
        root = parse_xml(xml)
    except QtiParseError as exc:
        log.warning("itemRef scan skipped, document not parsable: %s", exc)
        return ItemRefParseResult(item_refs=[], errors=[ParseIssue(NO_ITEMREF)])

    refs: List[AssessmentItemRef] = []
    errors: List[ParseIssue] = []
    for node in elements_by_local_name(root, config.ASSESSMENT_ITEM_REF_TAG):
        identifier = attr(node, "identifier")
        href = attr(node, "href")
        if not identifier or not href:
            errors.append(ParseIssue(MISSING_ITEMREF_IDENTIFIER_OR_HREF, identifier or None))
            continue
        refs.append(AssessmentItemRef(identifier=identifier, href=href))
    if not refs:
        errors.append(ParseIssue(NO_ITEMREF))
    log.debug("itemRef scan: %d valid, %d issues", len(refs), len(errors))
    return ItemRefParseResult(item_refs=refs, errors=errors)


__all__ = ["parse_assessment_test_xml", "parse_assessment_item_refs_from_xml"]
