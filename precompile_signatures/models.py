"""Core data models shared across precompile_signatures components."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from types import ModuleType
from typing import Any, Callable, Tuple, Union


@dataclass(frozen=True)
class Concrete:
    """A type that can be specialised on directly."""

    type_: Any


@dataclass(frozen=True)
class Abstract:
    """A type that has no instances of its own (ABCs, protocols, ``Any``)."""

    type_: Any


@dataclass(frozen=True)
class Sum:
    """A union of member descriptors; members may themselves be sums."""

    members: Tuple["TypeDescriptor", ...]


@dataclass(frozen=True)
class Unresolved:
    """A type parameter or reference that cannot be fixed to a type."""

    name: str


TypeDescriptor = Union[Concrete, Abstract, Sum, Unresolved]


class CallableKind(enum.Enum):
    FUNCTION = "function"
    MACRO = "macro"


@dataclass(frozen=True)
class FunctionInfo:
    """A callable discovered in its defining module."""

    name: str
    module: ModuleType
    function: Callable[..., Any]
    kind: CallableKind = CallableKind.FUNCTION

    @property
    def target(self) -> str:
        """Return the ``module:qualname`` reference used in directives."""
        qualname = getattr(self.function, "__qualname__", self.name)
        return f"{self.module.__name__}:{qualname}"


@dataclass(frozen=True)
class Signature:
    """Declared call signature: the function followed by its parameter types."""

    function: FunctionInfo
    parameters: Tuple[TypeDescriptor, ...]


@dataclass(frozen=True)
class Directive:
    """A fully-concrete signature ready to be handed to the host runtime."""

    target: str
    types: Tuple[Any, ...]


__all__ = [
    "Abstract",
    "CallableKind",
    "Concrete",
    "Directive",
    "FunctionInfo",
    "Signature",
    "Sum",
    "TypeDescriptor",
    "Unresolved",
]
