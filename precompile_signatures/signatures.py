"""Extraction of declared call signatures from annotated functions."""

from __future__ import annotations

import inspect
import types
import typing
from typing import Any, Callable, Iterable, List, Optional, Tuple

from .conversion import is_concrete_type, strip_bare_alias
from .logging import get_logger
from .models import Abstract, Concrete, FunctionInfo, Signature, Sum, TypeDescriptor, Unresolved

_TYPE_PARAMETERS = (typing.TypeVar, typing.ParamSpec, typing.TypeVarTuple)
_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)

logger = get_logger("signatures")


def describe_type(annotation: Any) -> TypeDescriptor:
    """Translate a runtime annotation into a type descriptor."""
    if annotation is None or annotation is type(None):
        return Concrete(type(None))
    if annotation is inspect.Parameter.empty or annotation is typing.Any:
        return Abstract(typing.Any)
    if isinstance(annotation, _TYPE_PARAMETERS):
        return Unresolved(annotation.__name__)
    if isinstance(annotation, (str, typing.ForwardRef)):
        return Unresolved(str(annotation))
    supertype = getattr(annotation, "__supertype__", None)
    if supertype is not None:
        # typing.NewType is erased at runtime
        return describe_type(supertype)

    annotation = strip_bare_alias(annotation)
    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)
    if origin is typing.Annotated:
        return describe_type(args[0])
    if origin is typing.Union or origin is types.UnionType:
        return Sum(tuple(describe_type(arg) for arg in args))
    if origin is typing.Literal:
        return Sum(tuple(describe_type(type(value)) for value in args))
    if getattr(annotation, "__parameters__", ()):
        return Unresolved(repr(annotation))

    if is_concrete_type(annotation):
        return Concrete(annotation)
    return Abstract(annotation)


def contains_unresolved(descriptor: TypeDescriptor) -> bool:
    if isinstance(descriptor, Unresolved):
        return True
    if isinstance(descriptor, Sum):
        return any(contains_unresolved(member) for member in descriptor.members)
    return False


def function_signatures(info: FunctionInfo) -> List[Signature]:
    """Return every fully-resolvable signature declared for ``info``.

    Overload variants replace the implementation when present, and each
    ``singledispatch`` registration counts as its own declaration. A parameter
    with a default contributes one signature per optional arity.
    """
    signatures: List[Signature] = []
    for implementation, first in _declarations(info.function):
        for signature in _implementation_signatures(info, implementation, first):
            if signature not in signatures:
                signatures.append(signature)
    return signatures


def _declarations(func: Callable[..., Any]) -> Iterable[Tuple[Callable[..., Any], Optional[Any]]]:
    registry = getattr(func, "registry", None)
    if registry is not None and hasattr(func, "dispatch"):
        return [(impl, cls) for cls, impl in registry.items() if cls is not object]
    overloads = typing.get_overloads(func)
    if overloads:
        return [(variant, None) for variant in overloads]
    return [(func, None)]


def _implementation_signatures(
    info: FunctionInfo,
    implementation: Callable[..., Any],
    first: Optional[Any],
) -> List[Signature]:
    try:
        parameters = inspect.signature(implementation).parameters.values()
        hints = typing.get_type_hints(implementation)
    except (NameError, TypeError, ValueError, AttributeError) as exc:
        logger.debug("Skipping %s: cannot evaluate annotations (%s)", info.target, exc)
        return []

    positional: List[inspect.Parameter] = []
    for parameter in parameters:
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            logger.debug("Skipping %s: variadic signature", info.target)
            return []
        if parameter.kind in _POSITIONAL:
            positional.append(parameter)

    descriptors = [describe_type(hints.get(p.name, inspect.Parameter.empty)) for p in positional]
    if first is not None and descriptors:
        descriptors[0] = describe_type(first)
    if any(contains_unresolved(descriptor) for descriptor in descriptors):
        logger.debug("Skipping generic signature of %s", info.target)
        return []

    required = sum(1 for p in positional if p.default is inspect.Parameter.empty)
    return [
        Signature(function=info, parameters=tuple(descriptors[:arity]))
        for arity in range(required, len(descriptors) + 1)
    ]


__all__ = ["contains_unresolved", "describe_type", "function_signatures"]
