"""Serialisation of directives into the artifact loaded by the host runtime."""

from __future__ import annotations

import ast
import typing
from pathlib import Path
from typing import Any, Iterable, List, Tuple

from .config import Config
from .conversion import strip_bare_alias
from .logging import get_logger
from .models import Directive

_HOOK_NAME = "precompile"

logger = get_logger("writer")


def format_type(type_: Any) -> str:
    """Return the ``module:qualname`` reference of a type or parameterised alias."""
    type_ = strip_bare_alias(type_)
    origin = typing.get_origin(type_)
    if origin is None:
        return f"{type_.__module__}:{type_.__qualname__}"
    args = typing.get_args(type_)
    if not args:
        # the empty tuple type, tuple[()]
        return f"{format_type(origin)}[()]"
    rendered = ", ".join("..." if arg is Ellipsis else format_type(arg) for arg in args)
    return f"{format_type(origin)}[{rendered}]"


def serialize(directive: Directive) -> str:
    """Return a single ``precompile(target, argtypes)`` line for ``directive``."""
    argtypes = tuple(format_type(type_) for type_ in directive.types)
    return f"{_HOOK_NAME}({directive.target!r}, {argtypes!r})"


def render_directives(directives: Iterable[Directive], header: str) -> str:
    return header + "\n".join(serialize(directive) for directive in directives)


def write_directives(path: Path, directives: Iterable[Directive], config: Config) -> str:
    """Write ``directives`` to ``path``, replacing any previous content."""
    path = Path(path)
    text = render_directives(list(directives), config.header)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    logger.debug("Wrote %d bytes to %s", len(text), path)
    return text


def read_directives(path: Path) -> List[Tuple[str, Tuple[str, ...]]]:
    """Parse an artifact back into ``(target, argtypes)`` pairs without executing it."""
    entries: List[Tuple[str, Tuple[str, ...]]] = []
    text = Path(path).read_text(encoding="utf-8")
    for number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        entries.append(_parse_line(stripped, number))
    return entries


def _parse_line(line: str, number: int) -> Tuple[str, Tuple[str, ...]]:
    try:
        node = ast.parse(line, mode="eval").body
    except SyntaxError as exc:
        raise ValueError(f"line {number}: not a directive: {line!r}") from exc
    if (
        not isinstance(node, ast.Call)
        or not isinstance(node.func, ast.Name)
        or node.func.id != _HOOK_NAME
        or len(node.args) != 2
        or node.keywords
    ):
        raise ValueError(f"line {number}: expected {_HOOK_NAME}(target, argtypes): {line!r}")
    target = ast.literal_eval(node.args[0])
    argtypes = ast.literal_eval(node.args[1])
    if not isinstance(target, str) or not isinstance(argtypes, tuple):
        raise ValueError(f"line {number}: malformed directive arguments: {line!r}")
    return target, argtypes


__all__ = [
    "format_type",
    "read_directives",
    "render_directives",
    "serialize",
    "write_directives",
]
