"""Concreteness checks and user-configured type substitutions."""

from __future__ import annotations

import abc
import inspect
import types
import typing
from typing import Any, Mapping

from .models import Abstract, Concrete, TypeDescriptor

# ABCs in these modules are interfaces even when they declare no abstract methods.
_INTERFACE_MODULES = frozenset({"numbers", "collections.abc", "typing", "typing_extensions"})


def strip_bare_alias(type_: Any) -> Any:
    """Return the origin class of an unsubscripted alias such as ``typing.List``.

    Subscripted aliases, including ``tuple[()]``, carry ``__args__`` and are
    returned unchanged.
    """
    origin = typing.get_origin(type_)
    if origin is not None and not hasattr(type_, "__args__"):
        return origin
    return type_


def is_concrete_type(type_: Any) -> bool:
    """Return True when ``type_`` names a class (or alias) that has its own instances."""
    type_ = strip_bare_alias(type_)
    origin = typing.get_origin(type_)
    if origin is not None:
        if origin is typing.Union or origin is types.UnionType or not isinstance(origin, type):
            return False
        args = typing.get_args(type_)
        return is_concrete_type(origin) and all(_is_concrete_argument(arg) for arg in args)
    if not isinstance(type_, type):
        return False
    if type_ is object or type_ is typing.Any or inspect.isabstract(type_):
        return False
    if getattr(type_, "_is_protocol", False):
        return False
    if isinstance(type_, abc.ABCMeta) and type_.__module__ in _INTERFACE_MODULES:
        return False
    return True


def _is_concrete_argument(arg: Any) -> bool:
    if arg is Ellipsis:
        # tuple[int, ...]
        return True
    return is_concrete_type(arg)


def is_concrete(descriptor: TypeDescriptor) -> bool:
    return isinstance(descriptor, Concrete)


def convert_type(descriptor: TypeDescriptor, type_conversions: Mapping[Any, Any]) -> TypeDescriptor:
    """Apply ``type_conversions`` to a non-concrete descriptor.

    Concrete descriptors are returned unchanged. An abstract descriptor whose
    type is a key of the mapping becomes the mapped type; anything else is
    returned as is and will be filtered out by the caller.
    """
    if is_concrete(descriptor):
        return descriptor
    if not isinstance(descriptor, Abstract):
        return descriptor
    try:
        replacement = type_conversions[descriptor.type_]
    except (KeyError, TypeError):
        return descriptor
    replacement = strip_bare_alias(replacement)
    if is_concrete_type(replacement):
        return Concrete(replacement)
    return Abstract(replacement)


__all__ = ["convert_type", "is_concrete", "is_concrete_type", "strip_bare_alias"]
