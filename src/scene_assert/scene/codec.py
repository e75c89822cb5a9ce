"""JSON serialization of scene documents.

Symbols are written once in the document's ``symbols`` table and placed
symbols refer to them by index. Node ids are not serialized; loading assigns
fresh ones, so a round trip yields a structurally identical document made of
distinct objects.
"""

from __future__ import annotations

import base64
import binascii
import json
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from scene_assert.scene.model import (
    Color,
    Document,
    Gradient,
    GradientStop,
    Group,
    Item,
    Layer,
    Matrix,
    NodeKind,
    Path as PathItem,
    PlacedSymbol,
    Point,
    PointText,
    Raster,
    Segment,
    SegmentPoint,
    Shape,
    Size,
    Style,
    Symbol,
    TextItem,
)

FORMAT_VERSION = 1

_COMMON_FIELDS = (
    "name",
    "opacity",
    "locked",
    "visible",
    "blend_mode",
    "selected",
    "clip_mask",
    "guide",
)

_STYLE_SCALARS = (
    "stroke_width",
    "stroke_cap",
    "stroke_join",
    "dash_offset",
    "miter_limit",
    "stroke_overprint",
    "fill_overprint",
    "font_size",
    "font",
    "leading",
    "justification",
)

_NODE_TYPES: dict[NodeKind, type[Item]] = {
    NodeKind.ITEM: Item,
    NodeKind.GROUP: Group,
    NodeKind.LAYER: Layer,
    NodeKind.PATH: PathItem,
    NodeKind.SHAPE: Shape,
    NodeKind.RASTER: Raster,
    NodeKind.TEXT_ITEM: TextItem,
    NodeKind.POINT_TEXT: PointText,
    NodeKind.PLACED_SYMBOL: PlacedSymbol,
}


class DocumentFormatError(ValueError):
    """Raised when serialized document data has an invalid shape."""


def _point(point: Point) -> list[float]:
    return [point.x, point.y]


def _size(size: Size) -> list[float]:
    return [size.width, size.height]


def _color_to_data(color: Color | None) -> dict[str, Any] | None:
    if color is None:
        return None
    data: dict[str, Any] = {"type": color.type, "alpha": color.alpha}
    if color.type == "gradient":
        gradient, origin, destination = color.components
        data["gradient"] = {
            "radial": gradient.radial,
            "stops": [
                {"color": _color_to_data(stop.color), "offset": stop.offset}
                for stop in gradient.stops
            ],
        }
        data["origin"] = _point(origin)
        data["destination"] = _point(destination)
    else:
        data["components"] = list(color.components)
    return data


def _style_to_data(style: Style | None) -> dict[str, Any] | None:
    if style is None:
        return None
    data: dict[str, Any] = {key: getattr(style, key) for key in _STYLE_SCALARS}
    data["dash_array"] = list(style.dash_array)
    data["fill_color"] = _color_to_data(style.fill_color)
    data["stroke_color"] = _color_to_data(style.stroke_color)
    return data


def _segment_point_to_data(point: SegmentPoint) -> list[Any]:
    return [point.x, point.y, point.selected]


def _node_to_data(item: Item, symbol_index: Mapping[int, int]) -> dict[str, Any]:
    data: dict[str, Any] = {"kind": item.kind.value}
    for key in _COMMON_FIELDS:
        data[key] = getattr(item, key)
    data["data"] = item.data
    data["matrix"] = list(item.matrix.values) if item.matrix is not None else None
    data["style"] = _style_to_data(item.style)

    if isinstance(item, PathItem):
        data["closed"] = item.closed
        data["segments"] = [
            {
                "point": _segment_point_to_data(segment.point),
                "handle_in": _segment_point_to_data(segment.handle_in),
                "handle_out": _segment_point_to_data(segment.handle_out),
            }
            for segment in item.segments
        ]
    elif isinstance(item, Shape):
        data["shape"] = item.shape
        data["center"] = _point(item.center)
        data["size"] = _size(item.size)
        data["radius"] = item.radius
    elif isinstance(item, Raster):
        data["center"] = _point(item.center)
        data["size"] = _size(item.size)
        data["ppi"] = _size(item.ppi)
        data["source"] = item.source
        data["pixels"] = base64.b64encode(item.pixels).decode("ascii")
    elif isinstance(item, PlacedSymbol):
        data["symbol"] = symbol_index[id(item.symbol)] if item.symbol is not None else None

    if isinstance(item, Group):
        data["clipped"] = item.clipped
    if isinstance(item, TextItem):
        data["content"] = item.content
    if isinstance(item, PointText):
        data["point"] = _point(item.point)

    if item.children is not None:
        data["children"] = [_node_to_data(child, symbol_index) for child in item.children]
    return data


def document_to_data(document: Document) -> dict[str, Any]:
    """Convert a document into JSON-compatible data."""

    symbol_index = {id(symbol): index for index, symbol in enumerate(document.symbols)}
    return {
        "version": FORMAT_VERSION,
        "symbols": [
            {"definition": _node_to_data(symbol.definition, symbol_index)}
            for symbol in document.symbols
        ],
        "layers": [_node_to_data(layer, symbol_index) for layer in document.layers],
    }


def _require(data: Mapping[str, Any], key: str, where: str) -> Any:
    if key not in data:
        raise DocumentFormatError(f"{where}: missing required key {key!r}")
    return data[key]


def _pair(value: Any, where: str) -> tuple[float, float]:
    if not isinstance(value, list) or len(value) != 2:
        raise DocumentFormatError(f"{where}: expected a [x, y] pair, got {value!r}")
    return float(value[0]), float(value[1])


def _list(value: Any, where: str) -> list[Any]:
    if not isinstance(value, list):
        raise DocumentFormatError(f"{where}: expected a list, got {value!r}")
    return value


def _matrix(value: Any, where: str) -> Matrix | None:
    if not value:
        return None
    if not isinstance(value, list) or len(value) != 6:
        raise DocumentFormatError(f"{where}: expected six matrix values, got {value!r}")
    return Matrix(*(float(number) for number in value))


def _color_from_data(data: Any, where: str) -> Color | None:
    if data is None:
        return None
    if not isinstance(data, Mapping):
        raise DocumentFormatError(f"{where}: color must be an object")
    color_type = _require(data, "type", where)
    alpha = float(data.get("alpha", 1.0))
    try:
        if color_type == "gradient":
            raw_gradient = _require(data, "gradient", where)
            gradient = Gradient(
                stops=[
                    GradientStop(
                        color=_color_from_data(stop.get("color"), f"{where}.stops[{index}]"),
                        offset=float(stop.get("offset", 0.0)),
                    )
                    for index, stop in enumerate(
                        _list(raw_gradient.get("stops", []), f"{where}.stops")
                    )
                ],
                radial=bool(raw_gradient.get("radial", False)),
            )
            color = Color.for_gradient(
                gradient,
                Point(*_pair(_require(data, "origin", where), f"{where}.origin")),
                Point(*_pair(_require(data, "destination", where), f"{where}.destination")),
            )
            color.alpha = alpha
            return color
        components = tuple(float(value) for value in _require(data, "components", where))
        return Color(color_type, components, alpha)
    except DocumentFormatError:
        raise
    except (TypeError, ValueError, AttributeError) as exc:
        raise DocumentFormatError(f"{where}: invalid color: {exc}") from exc


def _style_from_data(data: Any, where: str) -> Style | None:
    if data is None:
        return None
    if not isinstance(data, Mapping):
        raise DocumentFormatError(f"{where}: style must be an object")
    scalars = {key: data[key] for key in _STYLE_SCALARS if key in data}
    return Style(
        fill_color=_color_from_data(data.get("fill_color"), f"{where}.fill_color"),
        stroke_color=_color_from_data(data.get("stroke_color"), f"{where}.stroke_color"),
        dash_array=[
            float(value) for value in _list(data.get("dash_array", []), f"{where}.dash_array")
        ],
        **scalars,
    )


def _segment_point_from_data(value: Any, where: str) -> SegmentPoint:
    if not isinstance(value, list) or len(value) != 3:
        raise DocumentFormatError(f"{where}: expected [x, y, selected], got {value!r}")
    return SegmentPoint(float(value[0]), float(value[1]), bool(value[2]))


def _node_from_data(
    data: Any,
    where: str,
    resolve_symbol: Callable[[Any, str], Symbol | None],
) -> Item:
    try:
        return _build_node(data, where, resolve_symbol)
    except DocumentFormatError:
        raise
    except (TypeError, ValueError, AttributeError) as exc:
        raise DocumentFormatError(f"{where}: invalid node: {exc}") from exc


def _build_node(
    data: Any,
    where: str,
    resolve_symbol: Callable[[Any, str], Symbol | None],
) -> Item:
    if not isinstance(data, Mapping):
        raise DocumentFormatError(f"{where}: node must be an object")
    raw_kind = _require(data, "kind", where)
    try:
        kind = NodeKind(raw_kind)
    except ValueError as exc:
        raise DocumentFormatError(f"{where}: unknown node kind {raw_kind!r}") from exc

    node_type = _NODE_TYPES[kind]
    item = node_type()
    for key in _COMMON_FIELDS:
        if key in data:
            setattr(item, key, data[key])
    raw_data = data.get("data") or {}
    if not isinstance(raw_data, Mapping):
        raise DocumentFormatError(f"{where}.data: expected an object, got {raw_data!r}")
    item.data = dict(raw_data)
    item.matrix = _matrix(data.get("matrix"), f"{where}.matrix")
    item.style = _style_from_data(data.get("style"), f"{where}.style")

    if isinstance(item, PathItem):
        item.closed = bool(data.get("closed", False))
        for index, raw_segment in enumerate(
            _list(data.get("segments", []), f"{where}.segments")
        ):
            segment_where = f"{where}.segments[{index}]"
            if not isinstance(raw_segment, Mapping):
                raise DocumentFormatError(f"{segment_where}: segment must be an object")
            item.segments.append(
                Segment(
                    point=_segment_point_from_data(
                        _require(raw_segment, "point", segment_where), segment_where
                    ),
                    handle_in=_segment_point_from_data(
                        raw_segment.get("handle_in", [0, 0, False]), segment_where
                    ),
                    handle_out=_segment_point_from_data(
                        raw_segment.get("handle_out", [0, 0, False]), segment_where
                    ),
                )
            )
    elif isinstance(item, Shape):
        item.shape = str(data.get("shape", "rectangle"))
        item.center = Point(*_pair(data.get("center", [0, 0]), f"{where}.center"))
        item.size = Size(*_pair(data.get("size", [0, 0]), f"{where}.size"))
        item.radius = float(data.get("radius", 0.0))
    elif isinstance(item, Raster):
        item.center = Point(*_pair(data.get("center", [0, 0]), f"{where}.center"))
        item.size = Size(*_pair(data.get("size", [0, 0]), f"{where}.size"))
        item.ppi = Size(*_pair(data.get("ppi", [72, 72]), f"{where}.ppi"))
        item.source = data.get("source")
        try:
            item.pixels = base64.b64decode(data.get("pixels", ""), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise DocumentFormatError(f"{where}.pixels: invalid base64 data") from exc
    elif isinstance(item, PlacedSymbol):
        item.symbol = resolve_symbol(data.get("symbol"), f"{where}.symbol")

    if isinstance(item, Group):
        item.clipped = bool(data.get("clipped", False))
    if isinstance(item, TextItem):
        item.content = str(data.get("content", ""))
    if isinstance(item, PointText):
        item.point = Point(*_pair(data.get("point", [0, 0]), f"{where}.point"))

    raw_children = data.get("children")
    if raw_children is not None:
        item.children = [
            _node_from_data(child, f"{where}.children[{index}]", resolve_symbol)
            for index, child in enumerate(_list(raw_children, f"{where}.children"))
        ]
    return item


def document_from_data(data: Any) -> Document:
    """Build a document from data produced by ``document_to_data``."""

    if not isinstance(data, Mapping):
        raise DocumentFormatError("document: top-level value must be an object")
    version = data.get("version", FORMAT_VERSION)
    if version != FORMAT_VERSION:
        raise DocumentFormatError(f"document: unsupported format version {version!r}")

    document = Document()
    raw_symbols = _list(data.get("symbols", []), "document.symbols")
    # Symbols exist before any definition is read so placed symbols may refer
    # to any index.
    symbols = [Symbol(definition=Item(), document=document) for _ in raw_symbols]

    def resolve_symbol(index: Any, where: str) -> Symbol | None:
        if index is None:
            return None
        if not isinstance(index, int) or not 0 <= index < len(symbols):
            raise DocumentFormatError(f"{where}: unknown symbol index {index!r}")
        return symbols[index]

    for index, (symbol, raw_symbol) in enumerate(zip(symbols, raw_symbols)):
        where = f"symbols[{index}]"
        if not isinstance(raw_symbol, Mapping):
            raise DocumentFormatError(f"{where}: symbol must be an object")
        symbol.definition = _node_from_data(
            _require(raw_symbol, "definition", where), f"{where}.definition", resolve_symbol
        )
        document.symbols.append(symbol)

    for index, raw_layer in enumerate(_list(data.get("layers", []), "document.layers")):
        layer = _node_from_data(raw_layer, f"layers[{index}]", resolve_symbol)
        if not isinstance(layer, Layer):
            raise DocumentFormatError(f"layers[{index}]: expected a layer node")
        document.add_layer(layer)
    return document


def dumps(document: Document, *, indent: int | None = None) -> str:
    return json.dumps(document_to_data(document), indent=indent, sort_keys=True)


def loads(text: str) -> Document:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DocumentFormatError(f"Invalid JSON document: {exc}") from exc
    return document_from_data(data)


def save_document(document: Document, path: str | Path) -> Path:
    """Write ``document`` as indented JSON and return the written path."""

    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dumps(document, indent=2) + "\n", encoding="utf-8")
    return output_path


def load_document(path: str | Path) -> Document:
    """Read a JSON document from disk."""

    document_path = Path(path)
    try:
        text = document_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentFormatError(
            f"Unable to read document file '{document_path}': {exc}"
        ) from exc
    return loads(text)
