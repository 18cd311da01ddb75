"""Thin layer over :mod:`lxml.etree` shared by every QTI parser.

Documents may or may not declare the QTI namespace, and the same lookup has
to work either way, so element lookup is done by local name in two passes:
first across any namespace, then (only when that finds nothing) by comparing
bare tag names with any ``{uri}`` or ``prefix:`` part stripped.
"""
from __future__ import annotations

import threading
from typing import List, Optional, Union

from lxml import etree

from .errors import QtiParseError

_PARSER_OPTIONS = dict(
    resolve_entities=False,
    no_network=True,
    load_dtd=False,
    remove_comments=False,
    huge_tree=False,
)

# lxml parser instances must not be shared between threads.
_local = threading.local()


def _parser(for_text: bool) -> etree.XMLParser:
    key = "text" if for_text else "bytes"
    parser = getattr(_local, key, None)
    if parser is None:
        if for_text:
            # Text input was already decoded by the caller, so its XML
            # declaration (if any) must not drive decoding again.
            parser = etree.XMLParser(encoding="utf-8", **_PARSER_OPTIONS)
        else:
            parser = etree.XMLParser(**_PARSER_OPTIONS)
        setattr(_local, key, parser)
    return parser


def parse_xml(source: Union[str, bytes]) -> etree._Element:
    """Parse *source* and return the document root.

    Raises :class:`QtiParseError` when the text is malformed or not valid
    Unicode, and when it has no root element.
    """

    try:
        if isinstance(source, str):
            root = etree.fromstring(source.encode("utf-8"), _parser(True))
        else:
            root = etree.fromstring(source, _parser(False))
    except (etree.XMLSyntaxError, ValueError) as exc:
        raise QtiParseError(f"XML parse failed: {exc}") from exc
    if root is None:
        raise QtiParseError("XML document has no root element")
    return root


def local_name(tag: object) -> Optional[str]:
    """Return the tag without ``{uri}`` or ``prefix:``; ``None`` for non-elements."""

    if not isinstance(tag, str):
        return None
    if tag.startswith("{"):
        tag = tag.split("}", 1)[1]
    if ":" in tag:
        tag = tag.rsplit(":", 1)[1]
    return tag


def _by_any_namespace(container: etree._Element, name: str) -> List[etree._Element]:
    return list(container.iterdescendants("{*}" + name))


def _by_bare_name(container: etree._Element, name: str) -> List[etree._Element]:
    return [el for el in container.iterdescendants() if local_name(el.tag) == name]


def elements_by_local_name(container: etree._Element, name: str) -> List[etree._Element]:
    """All descendants of *container* whose local name is *name*, in document order."""

    found = _by_any_namespace(container, name)
    if found:
        return found
    return _by_bare_name(container, name)


def first_element(container: etree._Element, name: str) -> Optional[etree._Element]:
    found = elements_by_local_name(container, name)
    return found[0] if found else None


def attr(el: etree._Element, name: str) -> str:
    """Attribute value, or ``""`` when the attribute is missing."""

    return el.get(name) or ""


def text_content(el: etree._Element) -> str:
    return str(el.xpath("string()"))


__all__ = [
    "parse_xml",
    "local_name",
    "elements_by_local_name",
    "first_element",
    "attr",
    "text_content",
]
