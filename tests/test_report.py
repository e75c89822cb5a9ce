"""Unit tests for the assertion report sink."""

from __future__ import annotations

import logging

import pytest

from scene_assert.report import (
    AssertionRecord,
    AssertionReport,
    NoActiveReportError,
    active_report,
    collect,
    record,
)


def test_record_requires_an_active_report() -> None:
    with pytest.raises(NoActiveReportError, match="collect"):
        record(True, 1, 1, "orphan")


def test_collect_appends_records_in_order() -> None:
    with collect() as report:
        record(True, 1, 1, "first")
        record(False, 2, 3, "second")

    assert report.messages() == ["first", "second"]
    assert report.messages(passed=True) == ["first"]
    assert report.messages(passed=False) == ["second"]
    assert [item.passed for item in report.passes] == [True]
    assert report.failures == [AssertionRecord(False, 2, 3, "second")]
    assert not report.ok


def test_collect_reuses_supplied_report_and_restores_previous() -> None:
    outer = AssertionReport()
    with collect(outer):
        record(True, 1, 1, "outer")
        with collect() as inner:
            record(True, 2, 2, "inner")
            assert active_report() is inner
        assert active_report() is outer
        record(True, 3, 3, "outer again")

    assert outer.messages() == ["outer", "outer again"]
    assert inner.messages() == ["inner"]
    with pytest.raises(NoActiveReportError):
        active_report()


def test_collect_restores_context_after_exception() -> None:
    with pytest.raises(RuntimeError, match="boom"):
        with collect():
            raise RuntimeError("boom")

    with pytest.raises(NoActiveReportError):
        active_report()


def test_raise_for_failures_lists_every_failure() -> None:
    report = AssertionReport()
    report.push(True, 1, 1, "kept")
    report.push(False, "a", "b", "Compare Item#name")
    report.push(False, 4, 5, None)

    with pytest.raises(AssertionError) as excinfo:
        report.raise_for_failures()

    text = str(excinfo.value)
    assert text.startswith("2 of 3 structural assertions failed:")
    assert "- FAILED Compare Item#name expected='b' actual='a'" in text
    assert "- FAILED <no message> expected=5 actual=4" in text
    assert "kept" not in text


def test_raise_for_failures_is_silent_when_everything_passed() -> None:
    report = AssertionReport()
    report.push(True, 1, 1, "fine")

    report.raise_for_failures()


def test_failures_are_logged_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    report = AssertionReport()
    with caplog.at_level(logging.DEBUG, logger="scene_assert.report"):
        report.push(False, 1, 2, "width")
        report.push(True, 2, 2, "height")

    messages = [entry.getMessage() for entry in caplog.records]
    assert messages == ["assertion_failed message=width expected=2 actual=1"]


def test_record_describe_marks_outcome() -> None:
    assert AssertionRecord(True, 1, 1, "x").describe() == "ok x expected=1 actual=1"
