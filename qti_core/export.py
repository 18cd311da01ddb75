"""Helpers to render parsed QTI records as JSON-safe payloads."""
from __future__ import annotations

from dataclasses import fields, is_dataclass
from typing import Any, Dict

# Python field name -> wire key. Fields not listed keep their name.
_KEYS: Dict[str, str] = {
    "sequence_index": "sequenceIndex",
    "has_sequence_index": "hasSequenceIndex",
    "response_variables": "responseVariables",
    "outcome_variables": "outcomeVariables",
    "sourced_id": "sourcedId",
    "session_identifiers": "sessionIdentifiers",
    "item_results": "itemResults",
    "item_refs": "itemRefs",
}

# Optional fields dropped from the payload when unset.
_OMIT_WHEN_NONE: Dict[str, tuple[str, ...]] = {
    "QtiRawItemResult": ("sequence_index",),
    "ParseIssue": ("identifier",),
}


def to_json(obj: Any) -> Any:
    """Return a JSON-safe structure for a record, list of records or mapping."""

    if is_dataclass(obj) and not isinstance(obj, type):
        omit = _OMIT_WHEN_NONE.get(type(obj).__name__, ())
        out: Dict[str, Any] = {}
        for f in fields(obj):
            val = getattr(obj, f.name)
            if val is None and f.name in omit:
                continue
            out[_KEYS.get(f.name, f.name)] = to_json(val)
        return out
    if isinstance(obj, dict):
        return {str(k): to_json(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_json(v) for v in obj]
    return obj


__all__ = ["to_json"]
