"""Comparators for curve segments and segment lists."""

from __future__ import annotations

from typing import Any

from scene_assert.comparators.styles import compare_objects
from scene_assert.config import OptionsLike, coerce_options
from scene_assert.dispatch import equals
from scene_assert.lazy import LazyAssertion

SEGMENT_POINT_KEYS = ("x", "y", "selected")
SEGMENT_PARTS = ("handle_in", "handle_out", "point")


def compare_segment_points(
    segment_point: Any, segment_point2: Any, options: OptionsLike = None
) -> None:
    """Compare coordinates and selection; segment points are never identity checked."""

    resolved = coerce_options(options).model_copy(update={"check_identity": False})
    compare_objects(
        SEGMENT_POINT_KEYS, segment_point, segment_point2, "Compare SegmentPoint", resolved
    )


def compare_segments(segment: Any, segment2: Any, options: OptionsLike = None) -> None:
    resolved = coerce_options(options)
    if resolved.check_identity:
        equals(LazyAssertion("segment is not segment2", lambda: segment is not segment2), True)
    # Selection state is compared loosely, as truthiness.
    equals(
        LazyAssertion(
            "segment.selected == segment2.selected",
            lambda: bool(segment.selected) == bool(segment2.selected),
        ),
        True,
    )
    for key in SEGMENT_PARTS:
        compare_segment_points(getattr(segment, key), getattr(segment2, key), resolved)


def compare_segment_lists(
    segment_list: Any, segment_list2: Any, options: OptionsLike = None
) -> None:
    """Compare two segment lists through their canonical text.

    Identity mode also walks every segment pair; structural mode stops at the
    canonical text.
    """

    resolved = coerce_options(options)
    check_identity = resolved.check_identity
    if check_identity:
        equals(
            LazyAssertion(
                "segment_list is not segment_list2", lambda: segment_list is not segment_list2
            ),
            True,
        )
    equals(
        segment_list.canonical_text(),
        segment_list2.canonical_text(),
        "Compare Item#segments",
    )
    if check_identity:
        equals(len(segment_list), len(segment_list2), "Compare Item#segments length")
        for index in range(min(len(segment_list), len(segment_list2))):
            compare_segments(segment_list[index], segment_list2[index], resolved)
