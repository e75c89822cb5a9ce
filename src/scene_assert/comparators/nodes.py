"""Comparators for drawable nodes and whole documents."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from scene_assert.comparators.segments import compare_segment_lists
from scene_assert.comparators.styles import compare_styles
from scene_assert.config import CompareOptions, OptionsLike, coerce_options
from scene_assert.dispatch import deep_equal, equals
from scene_assert.lazy import LazyAssertion
from scene_assert.report import active_report
from scene_assert.scene.model import NodeKind
from scene_assert.scene.protocols import SupportsCanonicalText

LOGGER = logging.getLogger(__name__)

ITEM_KEYS = (
    "opacity",
    "locked",
    "visible",
    "blend_mode",
    "name",
    "selected",
    "clip_mask",
    "guide",
)
PATH_KEYS = ("closed", "fully_selected", "clockwise")
SHAPE_KEYS = ("shape", "size", "radius")

GROUP_KINDS = frozenset({NodeKind.GROUP, NodeKind.LAYER})
TEXT_KINDS = frozenset({NodeKind.TEXT_ITEM, NodeKind.POINT_TEXT})


def _check(description: str, predicate: Callable[[], bool]) -> None:
    equals(LazyAssertion(description, predicate), True)


def _canonical(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, SupportsCanonicalText):
        return value.canonical_text()
    return str(value)


def compare_items(item: Any, item2: Any, options: OptionsLike = None) -> None:
    """Compare two nodes and, recursively, their children.

    Kind-specific attributes are only compared once both nodes are known to be
    of the same kind; a kind mismatch is recorded as its own failure.
    """

    resolved = coerce_options(options)
    check_identity = resolved.check_identity
    if check_identity:
        _check("item is not item2", lambda: item is not item2)
        _check("item.id != item2.id", lambda: item.id != item2.id)

    _check("item.kind == item2.kind", lambda: item.kind == item2.kind)

    for key in ITEM_KEYS:
        value = getattr(item, key)
        # Clones of named nodes carry an auto-incremented suffix.
        if key == "name" and resolved.cloned and value:
            value = f"{value} 1"
        equals(value, getattr(item2, key, None), f"Compare Item#{key}", resolved)

    bounds, bounds2 = item.bounds, item2.bounds
    if check_identity:
        _check("item.bounds is not item2.bounds", lambda: bounds is not bounds2)
    equals(_canonical(bounds), _canonical(bounds2), "Compare Item#bounds")

    position, position2 = item.position, item2.position
    if check_identity:
        _check("item.position is not item2.position", lambda: position is not position2)
    equals(_canonical(position), _canonical(position2), "Compare Item#position")

    _check("item.data == item2.data", lambda: deep_equal(item.data, item2.data))

    if item.matrix is not None:
        if check_identity:
            _check("item.matrix is not item2.matrix", lambda: item.matrix is not item2.matrix)
        equals(_canonical(item.matrix), _canonical(item2.matrix), "Compare Item#matrix")

    if item.kind == item2.kind:
        _compare_kind_attributes(item, item2, resolved)

    if item.style is not None:
        compare_styles(item.style, item2.style, resolved)

    if item.children is not None:
        children = item.children
        children2 = item2.children or []
        equals(len(children), len(children2), "Compare Item#children length")
        for child, child2 in zip(children, children2):
            compare_items(child, child2, resolved)


def _compare_kind_attributes(item: Any, item2: Any, options: CompareOptions) -> None:
    kind = item.kind
    check_identity = options.check_identity

    if kind is NodeKind.PATH:
        for key in PATH_KEYS:
            equals(getattr(item, key), getattr(item2, key), f"Compare Path#{key}", options)
        equals(item.length, item2.length, "Compare Path#length", options)
        compare_segment_lists(item.segments, item2.segments, options)

    elif kind is NodeKind.SHAPE:
        for key in SHAPE_KEYS:
            equals(getattr(item, key), getattr(item2, key), f"Compare Shape#{key}", options)

    elif kind is NodeKind.PLACED_SYMBOL:
        symbol, symbol2 = item.symbol, item2.symbol
        if options.dont_share_document and symbol is not None and symbol2 is not None:
            compare_items(symbol.definition, symbol2.definition, options)
        elif options.dont_share_document:
            equals(symbol is None, symbol2 is None, "Compare PlacedSymbol#symbol")
        else:
            _check("item.symbol is item2.symbol", lambda: item.symbol is item2.symbol)

    elif kind is NodeKind.RASTER:
        equals(_canonical(item.size), _canonical(item2.size), "Compare Raster#size")
        equals(item.width, item2.width, "Compare Raster#width", options)
        equals(item.height, item2.height, "Compare Raster#height", options)
        equals(_canonical(item.ppi), _canonical(item2.ppi), "Compare Raster#ppi")
        equals(item.source, item2.source, "Compare Raster#source")
        if check_identity:
            equals(item.image, item2.image, "Compare Raster#image")
        equals(
            item.to_data_url() == item2.to_data_url(),
            True,
            "Compare Raster#to_data_url()",
        )

    if kind in GROUP_KINDS:
        _check(
            "item.clipped == item2.clipped",
            lambda: bool(item.clipped) == bool(item2.clipped),
        )

    if kind is NodeKind.LAYER:
        if options.dont_share_document:
            _check(
                "item.document is not item2.document",
                lambda: item.document is not item2.document,
            )
        else:
            _check("item.document is item2.document", lambda: item.document is item2.document)

    if kind in TEXT_KINDS:
        equals(item.content, item2.content, "Compare Item#content")

    if kind is NodeKind.POINT_TEXT:
        if check_identity:
            _check("item.point is not item2.point", lambda: item.point is not item2.point)
        equals(_canonical(item.point), _canonical(item2.point), "Compare Item#point")


def compare_documents(document: Any, document2: Any, options: OptionsLike = None) -> None:
    """Compare symbol definitions, then layers, of two separate documents."""

    resolved = coerce_options(options).model_copy(update={"dont_share_document": True})
    report = active_report()
    first_record = len(report.records)
    LOGGER.info(
        "compare_documents_start symbols=%d layers=%d",
        len(document.symbols),
        len(document.layers),
        extra={"check_identity": resolved.check_identity, "tolerance": resolved.tolerance},
    )

    equals(len(document.symbols), len(document2.symbols), "Compare Document#symbols length")
    for symbol, symbol2 in zip(document.symbols, document2.symbols):
        compare_items(symbol.definition, symbol2.definition, resolved)

    equals(len(document.layers), len(document2.layers), "Compare Document#layers length")
    for layer, layer2 in zip(document.layers, document2.layers):
        compare_items(layer, layer2, resolved)

    records = report.records[first_record:]
    failures = sum(1 for record in records if not record.passed)
    LOGGER.info(
        "compare_documents_complete records=%d failures=%d",
        len(records),
        failures,
        extra={"records": len(records), "failures": failures},
    )
