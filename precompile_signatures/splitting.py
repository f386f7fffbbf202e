"""Expansion of union-typed signatures into concrete directives."""

from __future__ import annotations

import itertools
from typing import Any, List, Mapping, Sequence, Set, Tuple

from .config import Config
from .conversion import convert_type, is_concrete
from .logging import get_logger
from .models import Concrete, Directive, Signature, Sum, TypeDescriptor
from .writer import format_type

logger = get_logger("splitting")


def unpack_union(descriptor: TypeDescriptor) -> Tuple[TypeDescriptor, ...]:
    """Flatten nested sums into their leaf members, keeping declaration order."""
    if not isinstance(descriptor, Sum):
        return (descriptor,)
    return tuple(leaf for member in descriptor.members for leaf in unpack_union(member))


def candidate_types(descriptor: TypeDescriptor, type_conversions: Mapping[Any, Any]) -> List[Any]:
    """Return the concrete types a single parameter position can take."""
    candidates: List[Any] = []
    for member in unpack_union(descriptor):
        converted = convert_type(member, type_conversions)
        if not isinstance(converted, Concrete):
            continue
        if converted.type_ not in candidates:
            candidates.append(converted.type_)
    return candidates


def split_unions(signature: Signature, type_conversions: Mapping[Any, Any]) -> Set[Tuple[Any, ...]]:
    """Return every concrete parameter-type combination ``signature`` admits.

    A position without any concrete candidate empties the whole product.
    """
    pruned = [candidate_types(parameter, type_conversions) for parameter in signature.parameters]
    return set(itertools.product(*pruned))


def signature_directives(signature: Signature, config: Config) -> List[Directive]:
    """Return the directives for one signature under ``config``."""
    target = signature.function.target
    if all(is_concrete(parameter) for parameter in signature.parameters):
        types = tuple(parameter.type_ for parameter in signature.parameters)  # type: ignore[union-attr]
        return [Directive(target=target, types=types)]
    if not config.split_unions:
        return []
    combinations = split_unions(signature, config.type_conversions)
    if not combinations:
        logger.debug("No concrete combinations for %s%s", target, _describe(signature.parameters))
    ordered = sorted(combinations, key=lambda types: tuple(format_type(t) for t in types))
    return [Directive(target=target, types=combination) for combination in ordered]


def _describe(parameters: Sequence[TypeDescriptor]) -> str:
    return "(" + ", ".join(type(parameter).__name__ for parameter in parameters) + ")"


__all__ = ["candidate_types", "signature_directives", "split_unions", "unpack_union"]
