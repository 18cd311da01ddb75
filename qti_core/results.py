"""Parsers for QTI ``assessmentResult`` reports.

Values are extracted verbatim; nothing here interprets scores or cardinality.
"""
from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional

from lxml import etree

from . import config
from .errors import QtiParseError
from .types import (
    INVALID_SEQUENCE_INDEX,
    MISSING_ITEMRESULT_IDENTIFIER,
    NO_ITEMRESULT,
    ParseIssue,
    QtiRawItemResult,
    QtiRawResults,
    ResultItemRef,
    ResultItemRefParseResult,
)
from .xml_utils import attr, elements_by_local_name, first_element, parse_xml, text_content

log = logging.getLogger(__name__)


def parse_positive_int(value: Optional[str]) -> Optional[int]:
    """``int`` for values such as ``"3"`` or ``"3.0"``; ``None`` for anything else or < 1."""

    if not value:
        return None
    text = value.strip()
    if "_" in text:
        return None
    try:
        parsed = int(text)
    except ValueError:
        try:
            number = float(text)
        except ValueError:
            return None
        if not math.isfinite(number) or not number.is_integer():
            return None
        parsed = int(number)
    return parsed if parsed >= 1 else None


def _values(container: etree._Element) -> List[str]:
    return [text_content(v) for v in elements_by_local_name(container, config.VALUE_TAG)]


def _response_variables(item_result: etree._Element) -> Dict[str, List[str]]:
    out: Dict[str, List[str]] = {}
    for rv in elements_by_local_name(item_result, config.RESPONSE_VARIABLE_TAG):
        rv_id = attr(rv, "identifier")
        candidate = first_element(rv, config.CANDIDATE_RESPONSE_TAG)
        if not rv_id or candidate is None:
            continue
        out[rv_id] = _values(candidate)
    return out


def _outcome_variables(item_result: etree._Element) -> Dict[str, List[str]]:
    out: Dict[str, List[str]] = {}
    for ov in elements_by_local_name(item_result, config.OUTCOME_VARIABLE_TAG):
        ov_id = attr(ov, "identifier")
        if not ov_id:
            continue
        out[ov_id] = _values(ov)
    return out


def parse_results_xml_raw(xml: str | bytes) -> QtiRawResults:
    """Extract context, session ids and per-item variable values.

    Raises :class:`QtiParseError` only when the document cannot be parsed;
    missing pieces degrade to empty strings / empty mappings.
    """

    try:
        root = parse_xml(xml)
    except QtiParseError as exc:
        raise QtiParseError("results XML parse failed") from exc

    context = first_element(root, config.CONTEXT_TAG)
    sourced_id = attr(context, "sourcedId") if context is not None else ""
    sessions: Dict[str, str] = {}
    if context is not None:
        for node in elements_by_local_name(context, config.SESSION_IDENTIFIER_TAG):
            source_id = attr(node, "sourceID")
            identifier = attr(node, "identifier")
            if source_id and identifier:
                sessions[source_id] = identifier

    item_results: List[QtiRawItemResult] = []
    for node in elements_by_local_name(root, config.ITEM_RESULT_TAG):
        item_results.append(
            QtiRawItemResult(
                identifier=attr(node, "identifier"),
                sequence_index=parse_positive_int(node.get("sequenceIndex")),
                response_variables=_response_variables(node),
                outcome_variables=_outcome_variables(node),
            )
        )
    log.debug("results parsed: %d itemResults, %d sessions", len(item_results), len(sessions))
    return QtiRawResults(
        sourced_id=sourced_id,
        session_identifiers=sessions,
        item_results=item_results,
    )


def parse_result_item_refs_from_xml(xml: str | bytes) -> ResultItemRefParseResult:
    """Identifier and ordering metadata of each ``itemResult``, with issues.

    An empty ``sequenceIndex`` attribute counts as absent. A present but
    invalid one is reported and the record is kept with ``sequence_index=None``.
    """

    try:
        root = parse_xml(xml)
    except QtiParseError as exc:
        log.warning("itemResult scan skipped, document not parsable: %s", exc)
        return ResultItemRefParseResult(item_refs=[], errors=[ParseIssue(NO_ITEMRESULT)])

    refs: List[ResultItemRef] = []
    errors: List[ParseIssue] = []
    nodes = elements_by_local_name(root, config.ITEM_RESULT_TAG)
    for node in nodes:
        identifier = attr(node, "identifier")
        if not identifier:
            errors.append(ParseIssue(MISSING_ITEMRESULT_IDENTIFIER))
            continue
        raw_index = attr(node, "sequenceIndex")
        sequence_index = parse_positive_int(raw_index)
        if raw_index and sequence_index is None:
            errors.append(ParseIssue(INVALID_SEQUENCE_INDEX, identifier))
        refs.append(
            ResultItemRef(
                identifier=identifier,
                sequence_index=sequence_index,
                has_sequence_index=bool(raw_index),
            )
        )
    if not nodes:
        errors.append(ParseIssue(NO_ITEMRESULT))
    log.debug("itemResult scan: %d refs, %d issues", len(refs), len(errors))
    return ResultItemRefParseResult(item_refs=refs, errors=errors)


__all__ = ["parse_positive_int", "parse_results_xml_raw", "parse_result_item_refs_from_xml"]
