"""Structural-equality assertions for scene-graph documents."""

from scene_assert.comparators import (
    compare_colors,
    compare_documents,
    compare_items,
    compare_objects,
    compare_points,
    compare_rectangles,
    compare_segment_lists,
    compare_segment_points,
    compare_segments,
    compare_size,
    compare_styles,
)
from scene_assert.config import CompareOptions, load_options
from scene_assert.dispatch import COMPARATORS, class_tag, compare_sequences, equals
from scene_assert.lazy import LazyAssertion, LazyAssertionError
from scene_assert.report import (
    AssertionRecord,
    AssertionReport,
    NoActiveReportError,
    collect,
)
from scene_assert.tolerance import TOLERANCE, compare_numbers

__all__ = [
    "AssertionRecord",
    "AssertionReport",
    "COMPARATORS",
    "CompareOptions",
    "LazyAssertion",
    "LazyAssertionError",
    "NoActiveReportError",
    "TOLERANCE",
    "class_tag",
    "collect",
    "compare_colors",
    "compare_documents",
    "compare_items",
    "compare_numbers",
    "compare_objects",
    "compare_points",
    "compare_rectangles",
    "compare_segment_lists",
    "compare_segment_points",
    "compare_segments",
    "compare_sequences",
    "compare_size",
    "compare_styles",
    "equals",
    "load_options",
]
