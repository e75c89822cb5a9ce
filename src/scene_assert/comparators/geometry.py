"""Comparators for points, sizes, rectangles and colors."""

from __future__ import annotations

from typing import Any

from scene_assert.config import OptionsLike, coerce_options
from scene_assert.dispatch import equals, suffixed
from scene_assert.scene.model import to_color


def compare_points(
    point: Any, point2: Any, message: str | None = None, options: OptionsLike = None
) -> None:
    resolved = coerce_options(options)
    equals(point.x, point2.x, suffixed(message, "x"), resolved)
    equals(point.y, point2.y, suffixed(message, "y"), resolved)


def compare_size(
    size: Any, size2: Any, message: str | None = None, options: OptionsLike = None
) -> None:
    resolved = coerce_options(options)
    equals(size.width, size2.width, suffixed(message, "width"), resolved)
    equals(size.height, size2.height, suffixed(message, "height"), resolved)


def compare_rectangles(
    rect: Any, rect2: Any, message: str | None = None, options: OptionsLike = None
) -> None:
    """Compare origin and extent, which a rectangle keeps on the same object."""

    compare_points(rect, rect2, message, options)
    compare_size(rect, rect2, message, options)


def compare_colors(
    color: Any, color2: Any, message: str | None = None, options: OptionsLike = None
) -> None:
    """Compare two colors after normalizing both into ``Color`` values.

    When either side is absent the pair is compared directly, so two absent
    colors match and one absent color does not.
    """

    resolved = coerce_options(options)
    normalized = to_color(color)
    normalized2 = to_color(color2)
    if normalized is not None and normalized2 is not None:
        equals(normalized.type, normalized2.type, suffixed(message, "type"), resolved)
        equals(
            normalized.components,
            normalized2.components,
            suffixed(message, "components"),
            resolved,
        )
    else:
        equals(normalized, normalized2, message, resolved)
