"""Reference scene-graph model.

The comparators only read values through the capabilities declared in
``scene_assert.scene.protocols``. This module provides a small concrete model
implementing them: geometric primitives, colors, paint styles, curve segments,
drawable nodes and documents. It performs no rendering and applies no
transforms; bounds are computed in local coordinates.
"""

from __future__ import annotations

import base64
import copy
import itertools
import math
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

_ids = itertools.count(1)

_BEZIER_STEPS = 16


def _next_id() -> int:
    return next(_ids)


def format_number(value: float) -> str:
    """Render a number with at most five decimals and no trailing zeros."""

    number = float(value)
    if not math.isfinite(number):
        return str(number)
    rounded = round(number, 5)
    if rounded == 0:
        return "0"
    return f"{rounded:.5f}".rstrip("0").rstrip(".")


@dataclass
class Point:
    class_tag: ClassVar[str] = "Point"

    x: float = 0.0
    y: float = 0.0

    def value_equals(self, other: Any) -> bool:
        return isinstance(other, Point) and self.x == other.x and self.y == other.y

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0

    def canonical_text(self) -> str:
        return f"{{ x: {format_number(self.x)}, y: {format_number(self.y)} }}"

    def __str__(self) -> str:
        return self.canonical_text()


@dataclass
class Size:
    class_tag: ClassVar[str] = "Size"

    width: float = 0.0
    height: float = 0.0

    def value_equals(self, other: Any) -> bool:
        return (
            isinstance(other, Size)
            and self.width == other.width
            and self.height == other.height
        )

    def canonical_text(self) -> str:
        return (
            f"{{ width: {format_number(self.width)}, height: {format_number(self.height)} }}"
        )

    def __str__(self) -> str:
        return self.canonical_text()


@dataclass
class Rectangle:
    """Axis-aligned rectangle; origin and extent share one field set."""

    class_tag: ClassVar[str] = "Rectangle"

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> Rectangle:
        xs: list[float] = []
        ys: list[float] = []
        for point in points:
            xs.append(point.x)
            ys.append(point.y)
        if not xs:
            return cls()
        return cls(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    def unite(self, other: Rectangle) -> Rectangle:
        left = min(self.x, other.x)
        top = min(self.y, other.y)
        right = max(self.x + self.width, other.x + other.width)
        bottom = max(self.y + self.height, other.y + other.height)
        return Rectangle(left, top, right - left, bottom - top)

    def value_equals(self, other: Any) -> bool:
        return (
            isinstance(other, Rectangle)
            and self.x == other.x
            and self.y == other.y
            and self.width == other.width
            and self.height == other.height
        )

    def canonical_text(self) -> str:
        return (
            f"{{ x: {format_number(self.x)}, y: {format_number(self.y)}, "
            f"width: {format_number(self.width)}, height: {format_number(self.height)} }}"
        )

    def __str__(self) -> str:
        return self.canonical_text()


@dataclass
class Matrix:
    """Affine transform ``[[a, c, tx], [b, d, ty]]``."""

    class_tag: ClassVar[str] = "Matrix"

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    @property
    def values(self) -> tuple[float, float, float, float, float, float]:
        return (self.a, self.b, self.c, self.d, self.tx, self.ty)

    def value_equals(self, other: Any) -> bool:
        return isinstance(other, Matrix) and self.values == other.values

    def canonical_text(self) -> str:
        a, b, c, d, tx, ty = (format_number(value) for value in self.values)
        return f"[[{a}, {c}, {tx}], [{b}, {d}, {ty}]]"

    def __str__(self) -> str:
        return self.canonical_text()


@dataclass(eq=False)
class GradientStop:
    color: Color
    offset: float = 0.0

    def value_equals(self, other: Any) -> bool:
        return (
            isinstance(other, GradientStop)
            and self.offset == other.offset
            and self.color.value_equals(other.color)
        )


@dataclass(eq=False)
class Gradient:
    """Gradient definition; shared by reference between the colors using it."""

    class_tag: ClassVar[str] = "Gradient"

    stops: list[GradientStop] = field(default_factory=list)
    radial: bool = False

    def value_equals(self, other: Any) -> bool:
        if not isinstance(other, Gradient) or self.radial != other.radial:
            return False
        if len(self.stops) != len(other.stops):
            return False
        return all(
            stop.value_equals(other_stop) for stop, other_stop in zip(self.stops, other.stops)
        )


_COMPONENT_NAMES: dict[str, tuple[str, ...]] = {
    "gray": ("gray",),
    "rgb": ("red", "green", "blue"),
    "hsb": ("hue", "saturation", "brightness"),
    "gradient": ("gradient", "origin", "destination"),
}


def _component_equal(left: Any, right: Any) -> bool:
    value_equals = getattr(left, "value_equals", None)
    if callable(value_equals):
        return bool(value_equals(right))
    return bool(left == right)


@dataclass(eq=False)
class Color:
    """Color in one of the ``gray``, ``rgb``, ``hsb`` or ``gradient`` models.

    Gradient colors hold ``(gradient, origin, destination)`` as components.
    """

    class_tag: ClassVar[str] = "Color"

    type: str = "rgb"
    components: tuple[Any, ...] = (0.0, 0.0, 0.0)
    alpha: float = 1.0

    def __post_init__(self) -> None:
        names = _COMPONENT_NAMES.get(self.type)
        if names is None:
            raise ValueError(f"Unsupported color type: {self.type!r}")
        self.components = tuple(self.components)
        if len(self.components) != len(names):
            raise ValueError(
                f"Color type {self.type!r} expects {len(names)} components, "
                f"got {len(self.components)}"
            )
        if self.type == "gradient" and not isinstance(self.components[0], Gradient):
            raise ValueError("Gradient colors require a Gradient as first component")

    @classmethod
    def for_gradient(
        cls,
        gradient: Gradient,
        origin: Point | None = None,
        destination: Point | None = None,
    ) -> Color:
        return cls(
            "gradient",
            (gradient, origin or Point(), destination or Point()),
        )

    @property
    def gradient(self) -> Gradient | None:
        return self.components[0] if self.type == "gradient" else None

    def value_equals(self, other: Any) -> bool:
        try:
            other = to_color(other)
        except (TypeError, ValueError):
            return False
        if not isinstance(other, Color):
            return False
        if self.type != other.type or self.alpha != other.alpha:
            return False
        return all(
            _component_equal(left, right)
            for left, right in zip(self.components, other.components)
        )

    def canonical_text(self) -> str:
        parts = []
        for name, value in zip(_COMPONENT_NAMES[self.type], self.components):
            if isinstance(value, Gradient):
                text = f"<gradient stops={len(value.stops)} radial={str(value.radial).lower()}>"
            elif isinstance(value, Point):
                text = value.canonical_text()
            else:
                text = format_number(value)
            parts.append(f"{name}: {text}")
        if self.alpha != 1:
            parts.append(f"alpha: {format_number(self.alpha)}")
        return "{ " + ", ".join(parts) + " }"

    def __str__(self) -> str:
        return self.canonical_text()


def _parse_hex_color(text: str) -> Color:
    digits = text.strip().lstrip("#")
    if len(digits) == 3:
        digits = "".join(character * 2 for character in digits)
    if len(digits) != 6:
        raise ValueError(f"Invalid hex color: {text!r}")
    try:
        channels = tuple(int(digits[index : index + 2], 16) / 255 for index in (0, 2, 4))
    except ValueError as exc:
        raise ValueError(f"Invalid hex color: {text!r}") from exc
    return Color("rgb", channels)


def to_color(value: Any) -> Color | None:
    """Normalize ``value`` into a ``Color``; colors pass through, ``None`` stays ``None``."""

    if value is None or isinstance(value, Color):
        return value
    if isinstance(value, Gradient):
        return Color.for_gradient(value)
    if isinstance(value, str):
        return _parse_hex_color(value)
    if isinstance(value, Mapping):
        alpha = float(value.get("alpha", 1.0))
        for color_type, names in _COMPONENT_NAMES.items():
            if color_type != "gradient" and all(name in value for name in names):
                return Color(color_type, tuple(float(value[name]) for name in names), alpha)
        raise ValueError(f"Cannot derive a color from keys {sorted(value)}")
    if isinstance(value, Sequence):
        numbers = tuple(float(component) for component in value)
        if len(numbers) == 1:
            return Color("gray", numbers)
        if len(numbers) == 3:
            return Color("rgb", numbers)
        if len(numbers) == 4:
            return Color("rgb", numbers[:3], numbers[3])
        raise ValueError(f"Cannot derive a color from {len(numbers)} components")
    raise TypeError(f"Cannot convert {type(value).__name__} to Color")


@dataclass(eq=False)
class Style:
    """Paint and text attributes of a node."""

    class_tag: ClassVar[str] = "Style"

    fill_color: Color | None = None
    stroke_color: Color | None = None
    stroke_width: float = 1.0
    stroke_cap: str = "butt"
    stroke_join: str = "miter"
    dash_array: list[float] = field(default_factory=list)
    dash_offset: float = 0.0
    miter_limit: float = 10.0
    stroke_overprint: bool = False
    fill_overprint: bool = False
    font_size: float = 12.0
    font: str = "sans-serif"
    leading: float = 14.4
    justification: str = "left"

    def __post_init__(self) -> None:
        self.fill_color = to_color(self.fill_color)
        self.stroke_color = to_color(self.stroke_color)


@dataclass
class SegmentPoint(Point):
    class_tag: ClassVar[str] = "SegmentPoint"

    selected: bool = False


def _segment_point(value: Any) -> SegmentPoint:
    if isinstance(value, SegmentPoint):
        return value
    if isinstance(value, Point):
        return SegmentPoint(value.x, value.y)
    if value is None:
        return SegmentPoint()
    x, y = value
    return SegmentPoint(float(x), float(y))


@dataclass(eq=False)
class Segment:
    """Anchor point with incoming and outgoing handles relative to it."""

    class_tag: ClassVar[str] = "Segment"

    point: SegmentPoint = field(default_factory=SegmentPoint)
    handle_in: SegmentPoint = field(default_factory=SegmentPoint)
    handle_out: SegmentPoint = field(default_factory=SegmentPoint)

    def __post_init__(self) -> None:
        self.point = _segment_point(self.point)
        self.handle_in = _segment_point(self.handle_in)
        self.handle_out = _segment_point(self.handle_out)

    @property
    def selected(self) -> bool:
        return self.point.selected

    @selected.setter
    def selected(self, value: bool) -> None:
        self.point.selected = bool(value)

    def canonical_text(self) -> str:
        parts = [f"point: {self.point.canonical_text()}"]
        if not self.handle_in.is_zero():
            parts.append(f"handleIn: {self.handle_in.canonical_text()}")
        if not self.handle_out.is_zero():
            parts.append(f"handleOut: {self.handle_out.canonical_text()}")
        return "{ " + ", ".join(parts) + " }"

    def __str__(self) -> str:
        return self.canonical_text()


def _segment(value: Any) -> Segment:
    if isinstance(value, Segment):
        return value
    return Segment(point=_segment_point(value))


class SegmentList:
    """Ordered segments of a path."""

    class_tag = "SegmentList"

    def __init__(self, segments: Iterable[Any] = ()) -> None:
        self._segments = [_segment(segment) for segment in segments]

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    def __getitem__(self, index: int) -> Segment:
        return self._segments[index]

    def append(self, segment: Any) -> Segment:
        created = _segment(segment)
        self._segments.append(created)
        return created

    def canonical_text(self) -> str:
        return ",".join(segment.canonical_text() for segment in self._segments)

    def __str__(self) -> str:
        return self.canonical_text()

    def __repr__(self) -> str:
        return f"SegmentList({self._segments!r})"


class NodeKind(str, Enum):
    ITEM = "item"
    GROUP = "group"
    LAYER = "layer"
    PATH = "path"
    SHAPE = "shape"
    RASTER = "raster"
    TEXT_ITEM = "text-item"
    POINT_TEXT = "point-text"
    PLACED_SYMBOL = "placed-symbol"


@dataclass(eq=False)
class Item:
    """Generic drawable node carrying the attributes common to every kind."""

    class_tag: ClassVar[str] = "Item"
    kind: ClassVar[NodeKind] = NodeKind.ITEM

    name: str | None = None
    opacity: float = 1.0
    locked: bool = False
    visible: bool = True
    blend_mode: str = "normal"
    selected: bool = False
    clip_mask: bool = False
    guide: bool = False
    data: dict[str, Any] = field(default_factory=dict)
    matrix: Matrix | None = field(default_factory=Matrix)
    style: Style | None = field(default_factory=Style)
    children: list[Item] | None = None
    id: int = field(default_factory=_next_id, init=False)

    @property
    def bounds(self) -> Rectangle:
        """Local bounds, recomputed on every access."""

        return self._compute_bounds()

    @property
    def position(self) -> Point:
        return self.bounds.center

    def _compute_bounds(self) -> Rectangle:
        bounds: Rectangle | None = None
        for child in self.children or ():
            child_bounds = child.bounds
            bounds = child_bounds if bounds is None else bounds.unite(child_bounds)
        return bounds if bounds is not None else Rectangle()

    def add_child(self, child: Item) -> Item:
        if self.children is None:
            self.children = []
        self.children.append(child)
        return child

    def iter_tree(self) -> Iterator[Item]:
        """Yield this node and its descendants depth first."""

        yield self
        for child in self.children or ():
            yield from child.iter_tree()

    def _shared_references(self) -> Iterator[Any]:
        if self.style is None:
            return
        for color in (self.style.fill_color, self.style.stroke_color):
            if color is not None and color.gradient is not None:
                yield color.gradient

    def clone(self) -> Item:
        """Deep copy this subtree with fresh ids.

        Documents, symbols and gradient definitions stay shared with the
        original; everything else is copied.
        """

        memo: dict[int, Any] = {}
        for node in self.iter_tree():
            for reference in node._shared_references():
                memo[id(reference)] = reference
        duplicate = copy.deepcopy(self, memo)
        for node in duplicate.iter_tree():
            node.id = _next_id()
        return duplicate


def _cubic_point(
    p0: tuple[float, float],
    p1: tuple[float, float],
    p2: tuple[float, float],
    p3: tuple[float, float],
    t: float,
) -> tuple[float, float]:
    u = 1 - t
    x = u**3 * p0[0] + 3 * u**2 * t * p1[0] + 3 * u * t**2 * p2[0] + t**3 * p3[0]
    y = u**3 * p0[1] + 3 * u**2 * t * p1[1] + 3 * u * t**2 * p2[1] + t**3 * p3[1]
    return (x, y)


@dataclass(eq=False)
class Path(Item):
    class_tag: ClassVar[str] = "Path"
    kind: ClassVar[NodeKind] = NodeKind.PATH

    segments: SegmentList = field(default_factory=SegmentList)
    closed: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.segments, SegmentList):
            self.segments = SegmentList(self.segments)

    @property
    def fully_selected(self) -> bool:
        return len(self.segments) > 0 and all(segment.selected for segment in self.segments)

    def _curves(self) -> Iterator[tuple[Segment, Segment]]:
        segments = list(self.segments)
        for first, second in zip(segments, segments[1:]):
            yield first, second
        if self.closed and len(segments) > 1:
            yield segments[-1], segments[0]

    def _flatten(self) -> list[list[tuple[float, float]]]:
        polylines = []
        for first, second in self._curves():
            p0 = (first.point.x, first.point.y)
            p3 = (second.point.x, second.point.y)
            if first.handle_out.is_zero() and second.handle_in.is_zero():
                polylines.append([p0, p3])
                continue
            p1 = (p0[0] + first.handle_out.x, p0[1] + first.handle_out.y)
            p2 = (p3[0] + second.handle_in.x, p3[1] + second.handle_in.y)
            polylines.append(
                [
                    _cubic_point(p0, p1, p2, p3, step / _BEZIER_STEPS)
                    for step in range(_BEZIER_STEPS + 1)
                ]
            )
        return polylines

    @property
    def length(self) -> float:
        """Arc length, with curved sections approximated by a polyline."""

        total = 0.0
        for polyline in self._flatten():
            for (x0, y0), (x1, y1) in zip(polyline, polyline[1:]):
                total += math.hypot(x1 - x0, y1 - y0)
        return total

    @property
    def area(self) -> float:
        polylines = self._flatten()
        points = [point for polyline in polylines for point in polyline[:-1]]
        if polylines and not self.closed:
            points.append(polylines[-1][-1])
        doubled = 0.0
        for (x0, y0), (x1, y1) in zip(points, points[1:] + points[:1]):
            doubled += x0 * y1 - x1 * y0
        return doubled / 2

    @property
    def clockwise(self) -> bool:
        # y axis points down, so a positive signed area runs clockwise on screen.
        return self.area >= 0

    def _compute_bounds(self) -> Rectangle:
        return Rectangle.from_points(segment.point for segment in self.segments)


@dataclass(eq=False)
class Shape(Item):
    class_tag: ClassVar[str] = "Shape"
    kind: ClassVar[NodeKind] = NodeKind.SHAPE

    shape: str = "rectangle"
    center: Point = field(default_factory=Point)
    size: Size = field(default_factory=Size)
    radius: float = 0.0

    def _compute_bounds(self) -> Rectangle:
        return Rectangle(
            self.center.x - self.size.width / 2,
            self.center.y - self.size.height / 2,
            self.size.width,
            self.size.height,
        )


@dataclass(eq=False)
class Group(Item):
    class_tag: ClassVar[str] = "Group"
    kind: ClassVar[NodeKind] = NodeKind.GROUP

    children: list[Item] | None = field(default_factory=list)
    clipped: bool = False


@dataclass(eq=False)
class Layer(Group):
    class_tag: ClassVar[str] = "Layer"
    kind: ClassVar[NodeKind] = NodeKind.LAYER

    document: Document | None = field(default=None, repr=False)

    def _shared_references(self) -> Iterator[Any]:
        yield from super()._shared_references()
        if self.document is not None:
            yield self.document


@dataclass(eq=False)
class Raster(Item):
    class_tag: ClassVar[str] = "Raster"
    kind: ClassVar[NodeKind] = NodeKind.RASTER

    center: Point = field(default_factory=Point)
    size: Size = field(default_factory=Size)
    ppi: Size = field(default_factory=lambda: Size(72.0, 72.0))
    source: str | None = None
    image: Any = None
    pixels: bytes = b""

    @property
    def width(self) -> int:
        return int(round(self.size.width))

    @property
    def height(self) -> int:
        return int(round(self.size.height))

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.pixels).decode("ascii")
        return f"data:image/x-raw;base64,{encoded}"

    def _compute_bounds(self) -> Rectangle:
        return Rectangle(
            self.center.x - self.size.width / 2,
            self.center.y - self.size.height / 2,
            self.size.width,
            self.size.height,
        )


@dataclass(eq=False)
class TextItem(Item):
    class_tag: ClassVar[str] = "TextItem"
    kind: ClassVar[NodeKind] = NodeKind.TEXT_ITEM

    content: str = ""


@dataclass(eq=False)
class PointText(TextItem):
    class_tag: ClassVar[str] = "PointText"
    kind: ClassVar[NodeKind] = NodeKind.POINT_TEXT

    point: Point = field(default_factory=Point)

    def _compute_bounds(self) -> Rectangle:
        return Rectangle(self.point.x, self.point.y, 0.0, 0.0)


@dataclass(eq=False)
class PlacedSymbol(Item):
    class_tag: ClassVar[str] = "PlacedSymbol"
    kind: ClassVar[NodeKind] = NodeKind.PLACED_SYMBOL

    symbol: Symbol | None = None

    def _shared_references(self) -> Iterator[Any]:
        yield from super()._shared_references()
        if self.symbol is not None:
            yield self.symbol

    def _compute_bounds(self) -> Rectangle:
        if self.symbol is None:
            return Rectangle()
        return self.symbol.definition.bounds


@dataclass(eq=False)
class Symbol:
    """Reusable node definition referenced by placed symbols."""

    class_tag: ClassVar[str] = "Symbol"

    definition: Item
    document: Document | None = field(default=None, repr=False)


@dataclass(eq=False)
class Document:
    class_tag: ClassVar[str] = "Document"

    symbols: list[Symbol] = field(default_factory=list)
    layers: list[Layer] = field(default_factory=list)

    def add_layer(self, layer: Layer | None = None) -> Layer:
        created = layer if layer is not None else Layer()
        created.document = self
        self.layers.append(created)
        return created

    def add_symbol(self, definition: Item) -> Symbol:
        symbol = Symbol(definition=definition, document=self)
        self.symbols.append(symbol)
        return symbol

    def iter_items(self) -> Iterator[Item]:
        """Yield every node of every symbol definition, then of every layer."""

        for symbol in self.symbols:
            yield from symbol.definition.iter_tree()
        for layer in self.layers:
            yield from layer.iter_tree()
