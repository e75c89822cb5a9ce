"""End-to-end tests comparing whole documents."""

from __future__ import annotations

import logging

import pytest

from scene_assert.comparators import compare_documents
from scene_assert.report import AssertionReport, collect
from scene_assert.scene import Layer, dumps, loads
from tests.helpers.scene_builders import (
    build_document,
    build_gradient_document,
    build_rich_document,
)


def test_compare_documents_round_trip_passes_identity_checks() -> None:
    document = build_document()
    copy = loads(dumps(document))

    with collect() as report:
        compare_documents(document, copy, {"check_identity": True})

    assert report.failures == []
    passed = report.messages(passed=True)
    assert passed.count("item is not item2") == 2
    assert passed.count("item.bounds is not item2.bounds") == 2
    assert passed.count("item.position is not item2.position") == 2
    assert "segment_list is not segment_list2" in passed
    assert "item.document is not item2.document" in passed
    assert "Compare Document#symbols length" in passed
    assert "Compare Document#layers length" in passed


def test_compare_documents_compares_canonical_bounds() -> None:
    document = build_document()
    path = document.layers[0].children[0]

    with collect() as report:
        compare_documents(document, loads(dumps(document)), {"check_identity": True})

    bounds_records = [
        record for record in report.records if record.message == "Compare Item#bounds"
    ]
    assert len(bounds_records) == 2
    for record in bounds_records:
        assert record.actual == record.expected == path.bounds.canonical_text()
    assert path.bounds.canonical_text() == "{ x: 0, y: 0, width: 50, height: 50 }"


def test_compare_documents_round_trip_of_every_node_kind() -> None:
    document = build_rich_document()

    with collect() as report:
        compare_documents(document, loads(dumps(document)), {"check_identity": True})

    assert report.failures == []
    messages = report.messages()
    assert "Compare Raster#to_data_url()" in messages
    assert "item.point is not item2.point" in messages
    assert "Compare Shape#radius" in messages


def test_compare_documents_round_trip_compares_gradients_by_value() -> None:
    document = build_gradient_document()

    with collect() as report:
        compare_documents(document, loads(dumps(document)), {"check_identity": True})

    assert report.failures == []
    messages = report.messages()
    assert "The fill_color should not point to the same color object" in messages
    assert "The fill_color.gradient should point to the same object" not in messages
    assert "Compare Style#fill_color components [0]" in messages


def test_compare_documents_round_trip_reports_changed_gradient_stop() -> None:
    document = build_gradient_document()
    other = loads(dumps(document))
    other.layers[0].children[0].style.fill_color.gradient.stops[1].offset = 0.5

    with collect() as report:
        compare_documents(document, other, {"check_identity": True})

    assert report.messages(passed=False) == ["Compare Style#fill_color components [0]"]


def test_compare_documents_reports_layer_count_mismatch() -> None:
    document = build_document()
    other = loads(dumps(document))
    other.add_layer(Layer(name="extra"))

    with collect() as report:
        compare_documents(document, other)

    assert report.messages(passed=False) == ["Compare Document#layers length"]


def test_compare_documents_reports_style_change() -> None:
    document = build_document()
    other = loads(dumps(document))
    other.layers[0].children[0].style.stroke_width = 3

    with collect() as report:
        compare_documents(document, other)

    assert report.messages(passed=False) == ["Compare Style#stroke_width"]


def test_compare_documents_logs_summary(caplog: pytest.LogCaptureFixture) -> None:
    document = build_document()

    with caplog.at_level(logging.INFO, logger="scene_assert.comparators.nodes"):
        with collect() as report:
            compare_documents(document, loads(dumps(document)))

    messages = [entry.getMessage() for entry in caplog.records]
    assert messages[0] == "compare_documents_start symbols=0 layers=1"
    assert messages[-1] == f"compare_documents_complete records={len(report.records)} failures=0"
    assert caplog.records[-1].records == len(report.records)
    assert caplog.records[-1].failures == 0
    assert caplog.records[0].check_identity is False


def test_scene_report_fixture_collects_assertions(scene_report: AssertionReport) -> None:
    document = build_document()

    compare_documents(document, loads(dumps(document)), {"check_identity": True})

    assert scene_report.records
    assert scene_report.ok
