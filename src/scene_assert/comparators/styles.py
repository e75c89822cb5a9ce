"""Comparators for paint styles and keyed attribute sets."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from scene_assert.comparators.geometry import compare_colors
from scene_assert.config import OptionsLike, coerce_options
from scene_assert.dispatch import equals
from scene_assert.lazy import LazyAssertion

COLOR_KEYS = ("fill_color", "stroke_color")

STYLE_KEYS = (
    "stroke_width",
    "stroke_cap",
    "stroke_join",
    "dash_array",
    "dash_offset",
    "miter_limit",
    "stroke_overprint",
    "fill_overprint",
    "font_size",
    "font",
    "leading",
    "justification",
)


def compare_objects(
    keys: Iterable[str],
    obj: Any,
    obj2: Any,
    message: str,
    options: OptionsLike = None,
) -> None:
    """Compare the named attributes of two objects by value."""

    resolved = coerce_options(options)
    if resolved.check_identity:
        equals(LazyAssertion(f"{message}: objects are distinct", lambda: obj is not obj2), True)
    for key in keys:
        equals(getattr(obj, key, None), getattr(obj2, key, None), f"{message}#{key}", resolved)


def compare_styles(style: Any, style2: Any, options: OptionsLike = None) -> None:
    """Compare paint colors, then the scalar stroke and text attributes.

    In identity mode color wrappers must be distinct objects while a gradient
    definition behind them must be shared, unless the two styles live in
    separate documents; gradients are then compared by value only.
    """

    resolved = coerce_options(options)
    check_identity = resolved.check_identity
    if check_identity:
        equals(LazyAssertion("style is not style2", lambda: style is not style2), True)

    for key in COLOR_KEYS:
        color = getattr(style, key, None)
        color2 = getattr(style2, key, None)
        if color is None:
            continue
        if check_identity:
            equals(
                lambda: color is not color2,
                True,
                f"The {key} should not point to the same color object",
            )
            if getattr(color, "type", None) == "gradient" and not resolved.dont_share_document:
                equals(
                    lambda: color.gradient is getattr(color2, "gradient", None),
                    True,
                    f"The {key}.gradient should point to the same object",
                )
        compare_colors(color, color2, f"Compare Style#{key}", resolved)

    compare_objects(STYLE_KEYS, style, style2, "Compare Style", resolved)
