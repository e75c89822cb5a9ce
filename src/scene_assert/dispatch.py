"""Type dispatch for structural assertions.

``equals`` classifies a value into a type tag and routes it to a registered
comparator. Values without a registered comparator fall back to their own
``value_equals`` capability and finally to strict equality.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from scene_assert.config import CompareOptions, OptionsLike, coerce_options
from scene_assert.lazy import resolve
from scene_assert.report import record
from scene_assert.scene.protocols import ClassTagged, SupportsValueEquals
from scene_assert.tolerance import compare_numbers, is_number

Comparator = Callable[[Any, Any, str | None, CompareOptions], None]


def is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def class_tag(value: Any) -> str | None:
    """Return the dispatch tag of ``value``: ``Number``, ``Array`` or its own class tag."""

    if is_number(value):
        return "Number"
    if is_sequence(value):
        return "Array"
    if isinstance(value, ClassTagged) and isinstance(value.class_tag, str):
        return value.class_tag
    return None


def strictly_equal(actual: Any, expected: Any) -> bool:
    return actual is expected or (type(actual) is type(expected) and bool(actual == expected))


def deep_equal(value: Any, value2: Any) -> bool:
    """Return whether two nested mappings/sequences hold equal values."""

    if isinstance(value, Mapping) and isinstance(value2, Mapping):
        return value.keys() == value2.keys() and all(
            deep_equal(value[key], value2[key]) for key in value
        )
    if is_sequence(value) and is_sequence(value2):
        return len(value) == len(value2) and all(
            deep_equal(item, item2) for item, item2 in zip(value, value2)
        )
    if isinstance(value, SupportsValueEquals):
        return bool(value.value_equals(value2))
    return strictly_equal(value, value2)


def suffixed(message: str | None, suffix: str) -> str:
    return f"{message} {suffix}" if message else suffix


def compare_sequences(
    actual: Sequence[Any],
    expected: Any,
    message: str | None = None,
    options: OptionsLike = None,
) -> None:
    """Compare two ordered sequences by length, then element by element."""

    resolved = coerce_options(options)
    if not (is_sequence(actual) and is_sequence(expected)):
        record(False, actual, expected, suffixed(message, "length"))
        return
    equals(len(actual), len(expected), suffixed(message, "length"), resolved)
    for index in range(min(len(actual), len(expected))):
        equals(actual[index], expected[index], suffixed(message, f"[{index}]"), resolved)


COMPARATORS: Mapping[str, Comparator] = MappingProxyType(
    {
        "Number": compare_numbers,
        "Array": compare_sequences,
    }
)


def _dispatch(
    subject: Any,
    other: Any,
    actual: Any,
    expected: Any,
    message: str | None,
    options: CompareOptions,
) -> bool:
    comparator = COMPARATORS.get(class_tag(subject) or "")
    if comparator is not None:
        comparator(actual, expected, message, options)
        return True
    if isinstance(subject, SupportsValueEquals):
        record(bool(subject.value_equals(other)), actual, expected, message)
        return True
    return False


def equals(
    actual: Any,
    expected: Any,
    message: str | None = None,
    options: OptionsLike = None,
) -> None:
    """Record whether ``actual`` structurally equals ``expected``.

    ``actual`` may be a deferred computation, in which case it is evaluated
    first and, without an explicit ``message``, described by its source.
    """

    actual, message = resolve(actual, message)
    resolved = coerce_options(options)
    if actual is not None and _dispatch(actual, expected, actual, expected, message, resolved):
        return
    if expected is not None and _dispatch(expected, actual, actual, expected, message, resolved):
        return
    record(strictly_equal(actual, expected), actual, expected, message)
