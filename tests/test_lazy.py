"""Unit tests for deferred assertion inputs."""

from __future__ import annotations

import pytest

from scene_assert.dispatch import equals
from scene_assert.lazy import (
    LazyAssertion,
    LazyAssertionError,
    describe_callable,
    is_deferred,
    resolve,
)
from scene_assert.report import collect


def test_lazy_assertion_requires_description() -> None:
    with pytest.raises(LazyAssertionError, match="non-blank description"):
        LazyAssertion("   ", lambda: True)


def test_lazy_assertion_requires_callable_evaluator() -> None:
    with pytest.raises(LazyAssertionError, match="must be callable"):
        LazyAssertion("value", True)  # type: ignore[arg-type]


def test_resolve_lazy_assertion_uses_description_unless_message_given() -> None:
    lazy = LazyAssertion("one plus two", lambda: 1 + 2)

    assert resolve(lazy) == (3, "one plus two")
    assert resolve(lazy, "explicit") == (3, "explicit")


def test_resolve_passes_plain_values_through() -> None:
    assert resolve(42, "answer") == (42, "answer")
    assert resolve(None) == (None, None)


def test_resolve_invokes_deferred_computation_once() -> None:
    calls: list[int] = []

    def counted() -> bool:
        calls.append(1)
        return True

    value, message = resolve(counted, "counted")

    assert value is True
    assert message == "counted"
    assert calls == [1]


def test_describe_callable_uses_lambda_body() -> None:
    left, right = object(), object()
    check = lambda: left is not right  # noqa: E731

    assert describe_callable(check) == "left is not right"


def test_describe_callable_stops_lambda_body_at_enclosing_call() -> None:
    value, message = resolve(lambda: 1 + 2 == 3)

    assert value is True
    assert message == "1 + 2 == 3"


def test_describe_callable_collapses_single_return() -> None:
    left, right = object(), object()

    def distinct() -> bool:
        return left is not right

    assert describe_callable(distinct) == "left is not right"


def test_describe_callable_keeps_multi_statement_body() -> None:
    def computed() -> bool:
        total = 1 + 2
        return total == 3

    assert describe_callable(computed) == "total = 1 + 2\nreturn total == 3"


def test_describe_callable_rejects_ambiguous_lambdas() -> None:
    pair = (lambda: 1, lambda: 2)

    with pytest.raises(LazyAssertionError, match="exactly one zero-argument lambda"):
        describe_callable(pair[0])


def test_describe_callable_rejects_unavailable_source() -> None:
    generated = eval("lambda: 1")  # noqa: S307

    with pytest.raises(LazyAssertionError, match="unavailable"):
        describe_callable(generated)


def test_is_deferred_only_accepts_zero_argument_functions() -> None:
    def needs_argument(value: int) -> int:
        return value

    assert is_deferred(lambda: True)
    assert is_deferred(lambda value=1: value)
    assert is_deferred(LazyAssertion("x", lambda: True))
    assert not is_deferred(needs_argument)
    assert not is_deferred(int)
    assert not is_deferred(True)


def test_equals_derives_message_from_deferred_actual() -> None:
    with collect() as report:
        equals(lambda: 1 < 2, True)

    assert report.ok
    assert report.records[0].message == "1 < 2"
    assert report.records[0].actual is True
