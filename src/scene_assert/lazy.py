"""Deferred assertion inputs.

An assertion input may be a value or a deferred computation evaluated at
assertion time. Deferred computations carry a human readable description used
as the assertion message, so a check like ``node is not copy`` reads like the
expression it evaluates.
"""

from __future__ import annotations

import ast
import inspect
import io
import textwrap
import tokenize
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

_OPENING = frozenset("([{")
_CLOSING = frozenset(")]}")
_SKIPPED_TOKENS = frozenset({tokenize.NL, tokenize.COMMENT, tokenize.INDENT, tokenize.DEDENT})


class LazyAssertionError(ValueError):
    """Raised when a deferred computation cannot be turned into a readable message."""


@dataclass(frozen=True)
class LazyAssertion:
    """A description paired with a zero-argument evaluator."""

    description: str
    evaluate: Callable[[], Any]

    def __post_init__(self) -> None:
        if not isinstance(self.description, str) or not self.description.strip():
            raise LazyAssertionError("LazyAssertion requires a non-blank description.")
        if not callable(self.evaluate):
            raise LazyAssertionError(
                f"LazyAssertion evaluator must be callable, got {type(self.evaluate).__name__}."
            )

    def __call__(self) -> Any:
        return self.evaluate()


def is_deferred(value: Any) -> bool:
    """Return whether ``value`` is a zero-argument function or a ``LazyAssertion``."""

    if isinstance(value, LazyAssertion):
        return True
    if not (inspect.isfunction(value) or inspect.ismethod(value)):
        return False
    for parameter in inspect.signature(value).parameters.values():
        if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
            continue
        if parameter.default is parameter.empty:
            return False
    return True


def resolve(actual: Any, message: str | None = None) -> tuple[Any, str | None]:
    """Evaluate a deferred assertion input, deriving a message when none was given."""

    if isinstance(actual, LazyAssertion):
        return actual.evaluate(), message or actual.description
    if is_deferred(actual):
        if not message:
            message = describe_callable(actual)
        return actual(), message
    return actual, message


def describe_callable(func: Callable[[], Any]) -> str:
    """Derive a message from the source text of ``func``.

    A lambda yields its body expression. A function whose body is a single
    ``return <expr>`` yields ``<expr>``; any other function yields its body.
    """

    try:
        source = inspect.getsource(func)
    except (OSError, TypeError) as exc:
        raise LazyAssertionError(
            f"Source of {func!r} is unavailable; pass an explicit message or LazyAssertion."
        ) from exc

    if getattr(func, "__name__", "") == "<lambda>":
        return _lambda_body(source)
    return _function_body(textwrap.dedent(source))


def _function_body(source: str) -> str:
    try:
        tree = ast.parse(source)
    except SyntaxError as exc:
        raise LazyAssertionError(f"Unable to parse function source: {exc}") from exc

    definition = next(
        (
            node
            for node in ast.walk(tree)
            if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef))
        ),
        None,
    )
    if definition is None:
        raise LazyAssertionError("No function definition found in source.")

    body = definition.body
    if len(body) == 1 and isinstance(body[0], ast.Return) and body[0].value is not None:
        segment = ast.get_source_segment(source, body[0].value)
        if segment:
            return " ".join(segment.split())

    lines = source.splitlines()[body[0].lineno - 1 : body[-1].end_lineno]
    text = textwrap.dedent("\n".join(lines)).strip()
    if not text:
        raise LazyAssertionError("Function body is empty.")
    return text


def _tokens(source: str) -> list[tokenize.TokenInfo]:
    tokens: list[tokenize.TokenInfo] = []
    readline = io.StringIO(textwrap.dedent(source)).readline
    try:
        for token in tokenize.generate_tokens(readline):
            tokens.append(token)
    except (tokenize.TokenError, SyntaxError):
        # getsource() can cut a lambda out of an unfinished call; keep what was read.
        pass
    return tokens


def _lambda_body(source: str) -> str:
    tokens = _tokens(source)
    starts = [
        index
        for index, token in enumerate(tokens[:-1])
        if token.type == tokenize.NAME
        and token.string == "lambda"
        and tokens[index + 1].type == tokenize.OP
        and tokens[index + 1].string == ":"
    ]
    if len(starts) != 1:
        raise LazyAssertionError(
            f"Expected exactly one zero-argument lambda in source, found {len(starts)}; "
            "pass an explicit message or LazyAssertion."
        )

    depth = 0
    body: list[tokenize.TokenInfo] = []
    for token in tokens[starts[0] + 2 :]:
        if token.type in (tokenize.NEWLINE, tokenize.ENDMARKER) and depth == 0:
            break
        if token.type == tokenize.OP:
            if token.string in _CLOSING and depth == 0:
                break
            if token.string == "," and depth == 0:
                break
            if token.string in _OPENING:
                depth += 1
            elif token.string in _CLOSING:
                depth -= 1
        if token.type in _SKIPPED_TOKENS:
            continue
        body.append(token)

    if not body:
        raise LazyAssertionError("Lambda body is empty.")

    lines = textwrap.dedent(source).splitlines(keepends=True)
    offsets = [0]
    for line in lines:
        offsets.append(offsets[-1] + len(line))
    text = "".join(lines)
    start_row, start_col = body[0].start
    end_row, end_col = body[-1].end
    segment = text[offsets[start_row - 1] + start_col : offsets[end_row - 1] + end_col]
    return " ".join(segment.split())
