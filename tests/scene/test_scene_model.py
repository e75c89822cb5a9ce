"""Unit tests for the reference scene model."""

from __future__ import annotations

import math

import pytest

from scene_assert.scene import (
    ClassTagged,
    Color,
    Document,
    Gradient,
    GradientStop,
    Layer,
    Matrix,
    Path,
    Point,
    Rectangle,
    Segment,
    SegmentList,
    Shape,
    Size,
    Style,
    SupportsCanonicalText,
    SupportsValueEquals,
    format_number,
    to_color,
)


def _square(*, reverse: bool = False) -> Path:
    corners = [(0, 0), (10, 0), (10, 10), (0, 10)]
    if reverse:
        corners.reverse()
    return Path(segments=corners, closed=True)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (1.0, "1"),
        (0.1 + 0.2, "0.3"),
        (-0.0, "0"),
        (1.234567, "1.23457"),
        (1e-7, "0"),
        (-2.5, "-2.5"),
        (math.inf, "inf"),
    ],
)
def test_format_number(value: float, expected: str) -> None:
    assert format_number(value) == expected


def test_canonical_text_of_geometry() -> None:
    assert Point(1, 2.5).canonical_text() == "{ x: 1, y: 2.5 }"
    assert Size(3, 4).canonical_text() == "{ width: 3, height: 4 }"
    assert str(Rectangle(0, 1, 2, 3)) == "{ x: 0, y: 1, width: 2, height: 3 }"
    assert Matrix().canonical_text() == "[[1, 0, 0], [0, 1, 0]]"
    assert Matrix(2, 0, 0, 2, 5, 6).canonical_text() == "[[2, 0, 5], [0, 2, 6]]"


def test_segment_canonical_text_omits_zero_handles() -> None:
    segment = Segment(point=(1, 2), handle_out=(3, 0))
    segments = SegmentList([segment, (4, 5)])

    assert segment.canonical_text() == "{ point: { x: 1, y: 2 }, handleOut: { x: 3, y: 0 } }"
    assert segments.canonical_text() == (
        "{ point: { x: 1, y: 2 }, handleOut: { x: 3, y: 0 } },{ point: { x: 4, y: 5 } }"
    )


def test_values_implement_comparison_capabilities() -> None:
    point = Point(1, 2)

    assert isinstance(point, ClassTagged)
    assert isinstance(point, SupportsCanonicalText)
    assert isinstance(point, SupportsValueEquals)
    assert isinstance(SegmentList(), SupportsCanonicalText)
    assert not isinstance(Style(), SupportsValueEquals)


def test_to_color_conversions() -> None:
    assert to_color(None) is None
    assert to_color("#f00").value_equals(Color("rgb", (1, 0, 0)))
    assert to_color([0.5]).type == "gray"
    transparent = to_color((1, 0, 0, 0.5))
    assert transparent.components == (1.0, 0.0, 0.0)
    assert transparent.alpha == 0.5
    assert to_color({"hue": 120, "saturation": 1, "brightness": 1}).type == "hsb"


@pytest.mark.parametrize("value", ["#12", "#gggggg", (1, 2), {"cyan": 1}])
def test_to_color_rejects_invalid_values(value: object) -> None:
    with pytest.raises(ValueError):
        to_color(value)


def test_to_color_rejects_unsupported_types() -> None:
    with pytest.raises(TypeError, match="Cannot convert object to Color"):
        to_color(object())


def test_color_validates_model_and_components() -> None:
    with pytest.raises(ValueError, match="Unsupported color type"):
        Color("cmyk", (0, 0, 0, 1))
    with pytest.raises(ValueError, match="expects 3 components"):
        Color("rgb", (1, 2))
    with pytest.raises(ValueError, match="require a Gradient"):
        Color("gradient", (None, Point(), Point()))


def test_color_value_equals_normalizes_other_side() -> None:
    red = Color("rgb", (1, 0, 0))

    assert red.value_equals("#ff0000")
    assert not red.value_equals("#00ff00")
    assert not red.value_equals("not a color")
    assert not red.value_equals(object())
    assert not red.value_equals(Color("rgb", (1, 0, 0), alpha=0.5))


def test_style_coerces_colors() -> None:
    style = Style(fill_color="#000", stroke_color=[1])

    assert style.fill_color.type == "rgb"
    assert style.stroke_color.type == "gray"


def test_path_measurements() -> None:
    line = Path(segments=[(0, 0), (3, 4)])

    assert line.length == pytest.approx(5.0)
    assert _square().length == pytest.approx(40.0)
    assert _square().area == pytest.approx(100.0)
    assert _square().clockwise
    assert not _square(reverse=True).clockwise


def test_path_length_follows_curves() -> None:
    curve = Path(segments=[Segment(point=(0, 0), handle_out=(0, 10)), Segment(point=(10, 0))])

    assert curve.length > 10.0


def test_bounds_are_recomputed_on_each_access() -> None:
    path = Path(segments=[(0, 0), (4, 2)])

    assert path.bounds is not path.bounds
    assert path.bounds.value_equals(Rectangle(0, 0, 4, 2))
    assert path.position.value_equals(Point(2, 1))


def test_group_bounds_unite_children() -> None:
    layer = Layer()
    layer.add_child(Path(segments=[(0, 0), (4, 2)]))
    layer.add_child(Shape(center=Point(10, 10), size=Size(2, 2)))

    assert layer.bounds.value_equals(Rectangle(0, 0, 11, 11))


def test_segment_selection_mirrors_anchor_point() -> None:
    path = Path(segments=[(0, 0), (1, 1)])
    path.segments[0].selected = True

    assert path.segments[0].point.selected is True
    assert not path.fully_selected

    path.segments[1].selected = True
    assert path.fully_selected


def test_clone_assigns_fresh_ids_and_keeps_shared_references() -> None:
    document = Document()
    gradient = Gradient([GradientStop(Color("gray", (0,)), 0)])
    layer = document.add_layer(Layer(name="layer"))
    path = layer.add_child(
        Path(segments=[(0, 0), (1, 1)], style=Style(fill_color=Color.for_gradient(gradient)))
    )

    copy = layer.clone()
    path_copy = copy.children[0]

    assert copy.id != layer.id
    assert path_copy.id != path.id
    assert copy.document is document
    assert path_copy.style is not path.style
    assert path_copy.style.fill_color is not path.style.fill_color
    assert path_copy.style.fill_color.gradient is gradient
    assert path_copy.segments is not path.segments


def test_document_iter_items_visits_symbols_then_layers() -> None:
    document = Document()
    marker = Shape(name="marker")
    document.add_symbol(marker)
    layer = document.add_layer()
    child = layer.add_child(Path(name="child"))

    assert list(document.iter_items()) == [marker, layer, child]
    assert document.symbols[0].document is document
    assert layer.document is document
