from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional

IssueCode = Literal[
    "no-itemref",
    "missing-itemref-identifier-or-href",
    "no-itemresult",
    "missing-itemresult-identifier",
    "invalid-sequence-index",
]

NO_ITEMREF: IssueCode = "no-itemref"
MISSING_ITEMREF_IDENTIFIER_OR_HREF: IssueCode = "missing-itemref-identifier-or-href"
NO_ITEMRESULT: IssueCode = "no-itemresult"
MISSING_ITEMRESULT_IDENTIFIER: IssueCode = "missing-itemresult-identifier"
INVALID_SEQUENCE_INDEX: IssueCode = "invalid-sequence-index"


@dataclass(frozen=True)
class AssessmentItemRef:
    identifier: str
    href: str


@dataclass(frozen=True)
class ResultItemRef:
    identifier: str
    sequence_index: Optional[int] = None
    has_sequence_index: bool = False


@dataclass(frozen=True)
class QtiRawItemResult:
    identifier: str
    sequence_index: Optional[int] = None
    response_variables: Dict[str, List[str]] = field(default_factory=dict)
    outcome_variables: Dict[str, List[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class QtiRawResults:
    sourced_id: str
    session_identifiers: Dict[str, str] = field(default_factory=dict)
    item_results: List[QtiRawItemResult] = field(default_factory=list)


@dataclass(frozen=True)
class ParseIssue:
    code: IssueCode
    identifier: Optional[str] = None


@dataclass(frozen=True)
class ItemRefParseResult:
    item_refs: List[AssessmentItemRef]
    errors: List[ParseIssue]


@dataclass(frozen=True)
class ResultItemRefParseResult:
    item_refs: List[ResultItemRef]
    errors: List[ParseIssue]
