"""Structural comparators for scene-graph values."""

from scene_assert.comparators.geometry import (
    compare_colors,
    compare_points,
    compare_rectangles,
    compare_size,
)
from scene_assert.comparators.nodes import compare_documents, compare_items
from scene_assert.comparators.segments import (
    compare_segment_lists,
    compare_segment_points,
    compare_segments,
)
from scene_assert.comparators.styles import compare_objects, compare_styles

__all__ = [
    "compare_points",
    "compare_size",
    "compare_rectangles",
    "compare_colors",
    "compare_objects",
    "compare_styles",
    "compare_segment_points",
    "compare_segments",
    "compare_segment_lists",
    "compare_items",
    "compare_documents",
]
