"""Unit tests for point, size, rectangle and color comparators."""

from __future__ import annotations

from scene_assert.comparators import (
    compare_colors,
    compare_points,
    compare_rectangles,
    compare_size,
)
from scene_assert.report import collect
from scene_assert.scene import Color, Gradient, GradientStop, Point, Rectangle, Size


def test_compare_points_suffixes_axis_messages() -> None:
    with collect() as report:
        compare_points(Point(1, 2), Point(1, 2.000001), "Compare Item#position")

    assert report.ok
    assert report.messages() == ["Compare Item#position x", "Compare Item#position y"]


def test_compare_points_without_message_uses_axis_names() -> None:
    with collect() as report:
        compare_points(Point(0, 0), Point(0, 1))

    assert report.messages(passed=False) == ["y"]


def test_compare_size_reports_mismatching_dimension() -> None:
    with collect() as report:
        compare_size(Size(10, 20), Size(10, 25), "size")

    assert report.messages(passed=True) == ["size width"]
    assert report.messages(passed=False) == ["size height"]


def test_compare_rectangles_checks_origin_then_extent() -> None:
    with collect() as report:
        compare_rectangles(Rectangle(0, 0, 10, 10), Rectangle(0, 0, 10, 10), "bounds")

    assert report.ok
    assert report.messages() == ["bounds x", "bounds y", "bounds width", "bounds height"]


def test_compare_rectangles_honors_tolerance_override() -> None:
    with collect() as report:
        compare_rectangles(
            Rectangle(0, 0, 10, 10), Rectangle(0.01, 0, 10, 10), "bounds", {"tolerance": 0.1}
        )

    assert report.ok


def test_compare_colors_normalizes_before_comparing() -> None:
    with collect() as report:
        compare_colors("#ff0000", Color("rgb", (1, 0, 0)), "fill")

    assert report.ok
    assert report.messages() == [
        "fill type",
        "fill components length",
        "fill components [0]",
        "fill components [1]",
        "fill components [2]",
    ]


def test_compare_colors_tolerates_component_jitter() -> None:
    with collect() as report:
        compare_colors((1, 0, 0), (0.999999, 0, 0), "stroke")

    assert report.ok


def test_compare_colors_flags_model_mismatch() -> None:
    with collect() as report:
        compare_colors(Color("gray", (0.5,)), Color("rgb", (0.5, 0.5, 0.5)), "fill")

    assert "fill type" in report.messages(passed=False)


def test_compare_colors_handles_absent_colors() -> None:
    with collect() as report:
        compare_colors(None, None, "both absent")
        compare_colors(None, "#000000", "one absent")

    assert report.messages(passed=True) == ["both absent"]
    assert report.messages(passed=False) == ["one absent"]


def test_compare_colors_compares_gradient_definitions_by_value() -> None:
    stops = [GradientStop(Color("rgb", (1, 0, 0)), 0), GradientStop(Color("gray", (1,)), 1)]
    copied = [GradientStop(Color("rgb", (1, 0, 0)), 0), GradientStop(Color("gray", (1,)), 1)]

    with collect() as report:
        compare_colors(
            Color.for_gradient(Gradient(stops), Point(0, 0), Point(10, 0)),
            Color.for_gradient(Gradient(copied), Point(0, 0), Point(10, 0)),
            "fill",
        )

    assert report.ok
