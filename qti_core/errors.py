"""Exceptions raised by the strict parsing and path APIs."""
from __future__ import annotations


class QtiError(ValueError):
    """Base class for every failure raised by ``qti_core``."""


class QtiParseError(QtiError):
    """The document could not be parsed or is structurally unusable."""


class InvalidPathError(QtiError):
    """A package-relative path attempted upward traversal."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid relative path: {value}")
        self.value = value


__all__ = ["QtiError", "QtiParseError", "InvalidPathError"]
