"""Collection of pass/fail assertion records produced by the comparators."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

LOGGER = logging.getLogger(__name__)

_ACTIVE_REPORT: ContextVar[AssertionReport | None] = ContextVar(
    "scene_assert_active_report", default=None
)


class NoActiveReportError(RuntimeError):
    """Raised when an assertion is recorded outside of a ``collect()`` block."""


@dataclass(frozen=True)
class AssertionRecord:
    """A single terminal comparison outcome."""

    passed: bool
    actual: Any
    expected: Any
    message: str | None = None

    def describe(self) -> str:
        label = self.message or "<no message>"
        status = "ok" if self.passed else "FAILED"
        return f"{status} {label} expected={self.expected!r} actual={self.actual!r}"


@dataclass
class AssertionReport:
    """Ordered list of assertion records for one check."""

    records: list[AssertionRecord] = field(default_factory=list)

    def push(self, passed: bool, actual: Any, expected: Any, message: str | None = None) -> None:
        record = AssertionRecord(
            passed=bool(passed), actual=actual, expected=expected, message=message
        )
        self.records.append(record)
        if not record.passed:
            LOGGER.debug(
                "assertion_failed message=%s expected=%r actual=%r",
                message,
                expected,
                actual,
            )

    @property
    def failures(self) -> list[AssertionRecord]:
        return [record for record in self.records if not record.passed]

    @property
    def passes(self) -> list[AssertionRecord]:
        return [record for record in self.records if record.passed]

    @property
    def ok(self) -> bool:
        return not self.failures

    def messages(self, *, passed: bool | None = None) -> list[str | None]:
        """Return record messages, optionally filtered by outcome."""

        return [
            record.message
            for record in self.records
            if passed is None or record.passed is passed
        ]

    def raise_for_failures(self) -> None:
        """Raise a single ``AssertionError`` listing every failing record."""

        failures = self.failures
        if not failures:
            return
        lines = [f"{len(failures)} of {len(self.records)} structural assertions failed:"]
        lines.extend(f"- {record.describe()}" for record in failures)
        raise AssertionError("\n".join(lines))


def active_report() -> AssertionReport:
    """Return the report collecting records in the current context."""

    report = _ACTIVE_REPORT.get()
    if report is None:
        raise NoActiveReportError(
            "No assertion report is active; wrap comparisons in scene_assert.collect()."
        )
    return report


def record(passed: bool, actual: Any, expected: Any, message: str | None = None) -> None:
    """Append one record to the active report."""

    active_report().push(passed, actual, expected, message)


@contextmanager
def collect(report: AssertionReport | None = None) -> Iterator[AssertionReport]:
    """Make ``report`` (or a fresh one) the active sink for the enclosed block."""

    target = report if report is not None else AssertionReport()
    token = _ACTIVE_REPORT.set(target)
    try:
        yield target
    finally:
        _ACTIVE_REPORT.reset(token)
