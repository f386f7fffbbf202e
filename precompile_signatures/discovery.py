"""Discovery of the functions a module defines."""

from __future__ import annotations

import inspect
from types import ModuleType
from typing import Any, Callable, Iterable, List, Set, TypeVar

from .logging import get_logger
from .models import CallableKind, FunctionInfo

_MACRO_ATTR = "__precompile_macro__"

# Module hooks that are looked up by the import system, never called by users.
_EXCLUDED_NAMES = frozenset({"__getattr__", "__dir__"})

_F = TypeVar("_F", bound=Callable[..., Any])

logger = get_logger("discovery")


def macro(func: _F) -> _F:
    """Tag ``func`` as a code-generating helper that should never be specialised."""
    setattr(func, _MACRO_ATTR, True)
    return func


def is_macro(obj: object) -> bool:
    return bool(getattr(obj, _MACRO_ATTR, False))


def classify(obj: object) -> CallableKind:
    return CallableKind.MACRO if is_macro(obj) else CallableKind.FUNCTION


def module_functions(module: ModuleType) -> List[FunctionInfo]:
    """Return the non-macro functions defined in ``module`` itself.

    Implementations registered on a ``singledispatch`` function of the module
    are reported through that function, not under their own names.
    """
    candidates: List[FunctionInfo] = []
    for name in sorted(vars(module)):
        if name in _EXCLUDED_NAMES:
            continue
        obj = getattr(module, name)
        if not _is_function(obj) or not _in_module(obj, module):
            continue
        candidates.append(FunctionInfo(name=name, module=module, function=obj, kind=classify(obj)))

    registered = _registered_implementations(info.function for info in candidates)
    functions: List[FunctionInfo] = []
    for info in candidates:
        if info.kind is CallableKind.MACRO:
            logger.debug("Skipping macro %s", info.target)
            continue
        if info.function in registered:
            logger.debug("Skipping %s: registered on a singledispatch function", info.target)
            continue
        functions.append(info)
    logger.debug("Found %d functions in %s", len(functions), module.__name__)
    return functions


def _registered_implementations(functions: Iterable[Callable[..., Any]]) -> List[Callable[..., Any]]:
    registered: List[Callable[..., Any]] = []
    for function in functions:
        registry = getattr(function, "registry", None)
        if registry is None or not hasattr(function, "dispatch"):
            continue
        registered.extend(impl for impl in registry.values() if impl is not function)
    return registered


def all_submodules(modules: Iterable[ModuleType]) -> List[ModuleType]:
    """Return ``modules`` plus every sub-module bound beneath them, depth first."""
    result: List[ModuleType] = []
    seen: Set[str] = set()

    def _visit(module: ModuleType) -> None:
        if module.__name__ in seen:
            return
        seen.add(module.__name__)
        result.append(module)
        prefix = module.__name__ + "."
        for name in sorted(vars(module)):
            child = getattr(module, name)
            if isinstance(child, ModuleType) and child.__name__.startswith(prefix):
                _visit(child)

    for module in modules:
        _visit(module)
    return result


def _is_function(obj: object) -> bool:
    # singledispatch wrappers are plain functions; builtins and classes are not.
    return inspect.isfunction(obj)


def _in_module(obj: Any, module: ModuleType) -> bool:
    return getattr(obj, "__module__", None) == module.__name__


__all__ = ["all_submodules", "classify", "is_macro", "macro", "module_functions"]
