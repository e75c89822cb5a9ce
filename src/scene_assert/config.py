"""Comparison option models and loaders."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError


class CompareOptions(BaseModel):
    """Flags that tune a structural comparison.

    ``tolerance`` overrides the numeric epsilon for this comparison only.
    ``check_identity`` additionally asserts that composite values on both sides
    are distinct objects. ``cloned`` marks the right-hand node as a clone of the
    left-hand one, whose name then carries a ``" 1"`` suffix.
    ``dont_share_document`` states that the two sides live in different
    documents, so layers must not share one and placed symbols are compared
    through their definitions instead of by reference.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    tolerance: float | None = Field(default=None, ge=0)
    check_identity: bool = False
    cloned: bool = False
    dont_share_document: bool = False


OptionsLike = CompareOptions | Mapping[str, Any] | None


def _format_validation_error(error: ValidationError) -> str:
    lines = ["Compare options validation failed:"]
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        lines.append(f"- {location}: {message}")
    return "\n".join(lines)


def coerce_options(options: OptionsLike) -> CompareOptions:
    """Normalize ``None``, a mapping or a ``CompareOptions`` into ``CompareOptions``."""

    if options is None:
        return CompareOptions()
    if isinstance(options, CompareOptions):
        return options
    if isinstance(options, Mapping):
        try:
            return CompareOptions.model_validate(dict(options))
        except ValidationError as exc:
            raise ValueError(_format_validation_error(exc)) from exc
    raise TypeError(f"Unsupported compare options type: {type(options).__name__}")


def load_options(path: str | Path) -> CompareOptions:
    """Load comparison options from a YAML file on disk."""

    options_path = Path(path)
    try:
        raw = yaml.safe_load(options_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ValueError(f"Unable to read options file '{options_path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in options file '{options_path}': {exc}") from exc

    data: Any = raw if raw is not None else {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Options file '{options_path}' must contain a top-level mapping/object."
        )
    return coerce_options(data)
