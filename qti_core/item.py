from __future__ import annotations
import logging
from typing import Optional

from . import config
from .errors import QtiParseError
from .xml_utils import elements_by_local_name, local_name, parse_xml

log = logging.getLogger(__name__)


def extract_item_identifier(xml: str | bytes) -> Optional[str]:
    """Identifier of the assessment item in *xml*, or ``None`` if there is none.

    The root element wins when it is the item itself; otherwise the first
    nested item element is used. Parse failures also yield ``None``.
    """

    try:
        root = parse_xml(xml)
    except QtiParseError as exc:
        log.debug("item identifier unavailable: %s", exc)
        return None

    if local_name(root.tag) == config.ASSESSMENT_ITEM_TAG:
        node = root
    else:
        nested = elements_by_local_name(root, config.ASSESSMENT_ITEM_TAG)
        node = nested[0] if nested else None
    if node is None:
        return None
    return node.get("identifier") or None
