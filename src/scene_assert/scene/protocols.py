"""Capabilities the comparators read from domain values."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ClassTagged(Protocol):
    """Value exposing a dispatch tag."""

    class_tag: str


@runtime_checkable
class SupportsCanonicalText(Protocol):
    """Value with a reference-independent textual form."""

    def canonical_text(self) -> str:
        """Return the canonical serialization of the value."""


@runtime_checkable
class SupportsValueEquals(Protocol):
    """Value that can compare itself to another value."""

    def value_equals(self, other: Any) -> bool:
        """Return whether ``other`` holds the same value."""
