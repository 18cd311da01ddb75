"""Package-relative path resolution.

Two escape policies exist and they are deliberately separate functions:

* ``normalize_strict`` rejects any ``..`` segment. Item hrefs in a test
  manifest must stay inside the manifest's own directory tree.
* ``normalize_permissive`` lets ``..`` pop one segment, but returns ``None``
  when it would climb above the resolution root. Assets referenced from an
  item may point upward inside the package, never outside it.
"""
from __future__ import annotations

from typing import List, Optional

from .errors import InvalidPathError


def _segments(value: str) -> List[str]:
    return [part for part in value.replace("\\", "/").split("/") if part and part != "."]


def _parent_dir(path: str) -> str:
    parts = path.replace("\\", "/").split("/")
    parts.pop()
    return "/".join(parts)


def _join(base_dir: str, relative: str) -> str:
    return f"{base_dir}/{relative}" if base_dir else relative


def normalize_strict(value: str) -> str:
    stack: List[str] = []
    for part in _segments(value):
        if part == "..":
            raise InvalidPathError(value)
        stack.append(part)
    return "/".join(stack)


def normalize_permissive(value: str) -> Optional[str]:
    stack: List[str] = []
    for part in _segments(value):
        if part == "..":
            if not stack:
                return None
            stack.pop()
            continue
        stack.append(part)
    return "/".join(stack)


def resolve_assessment_href(assessment_test_path: str, href: str) -> str:
    """Resolve an itemRef *href* against the path of its test manifest.

    >>> resolve_assessment_href("qti/assessment-test.qti.xml", "items/item-1.qti.xml")
    'qti/items/item-1.qti.xml'

    Raises :class:`InvalidPathError` if either path contains ``..``.
    """

    base_dir = _parent_dir(normalize_strict(assessment_test_path))
    return normalize_strict(_join(base_dir, href))


def resolve_relative_path(base_file_path: str, relative_path: str) -> Optional[str]:
    """Resolve *relative_path* against the directory of *base_file_path*.

    Returns ``None`` when the result would escape the package root.
    """

    return normalize_permissive(_join(_parent_dir(base_file_path), relative_path))


__all__ = [
    "normalize_strict",
    "normalize_permissive",
    "resolve_assessment_href",
    "resolve_relative_path",
]
