"""Scene-graph values read by the structural comparators."""

from scene_assert.scene.codec import (
    DocumentFormatError,
    document_from_data,
    document_to_data,
    dumps,
    load_document,
    loads,
    save_document,
)
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
    Path,
    PlacedSymbol,
    Point,
    PointText,
    Raster,
    Rectangle,
    Segment,
    SegmentList,
    SegmentPoint,
    Shape,
    Size,
    Style,
    Symbol,
    TextItem,
    format_number,
    to_color,
)
from scene_assert.scene.protocols import ClassTagged, SupportsCanonicalText, SupportsValueEquals

__all__ = [
    "ClassTagged",
    "Color",
    "Document",
    "DocumentFormatError",
    "Gradient",
    "GradientStop",
    "Group",
    "Item",
    "Layer",
    "Matrix",
    "NodeKind",
    "Path",
    "PlacedSymbol",
    "Point",
    "PointText",
    "Raster",
    "Rectangle",
    "Segment",
    "SegmentList",
    "SegmentPoint",
    "Shape",
    "Size",
    "Style",
    "SupportsCanonicalText",
    "SupportsValueEquals",
    "Symbol",
    "TextItem",
    "document_from_data",
    "document_to_data",
    "dumps",
    "format_number",
    "load_document",
    "loads",
    "save_document",
    "to_color",
]
