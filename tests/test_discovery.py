"""Tests for function discovery."""

from __future__ import annotations

import json

from precompile_signatures.discovery import all_submodules, classify, is_macro, macro, module_functions
from precompile_signatures.models import CallableKind


def test_module_functions_returns_own_functions_only(module_builder) -> None:
    module = module_builder.build(
        "pkg",
        """
        from os.path import join
        from json import dumps as serialise

        def area(width: int, height: int) -> int:
            return width * height

        def _helper(x: float) -> float:
            return x

        class Shape:
            def scale(self, factor: float) -> None:
                pass

        CONSTANT = 3
        """,
    )

    names = [info.name for info in module_functions(module)]

    assert names == ["_helper", "area"]
    assert module.serialise is json.dumps


def test_module_functions_excludes_macros_and_module_hooks(module_builder) -> None:
    module = module_builder.build(
        "pkg",
        """
        from precompile_signatures import macro

        @macro
        def make_accessor(name: str):
            return lambda obj: getattr(obj, name)

        def __getattr__(name: str):
            raise AttributeError(name)

        def __dir__():
            return []

        def run(value: int) -> int:
            return value
        """,
    )

    infos = module_functions(module)

    assert [info.name for info in infos] == ["run"]
    assert infos[0].kind is CallableKind.FUNCTION
    assert infos[0].target == f"{module.__name__}:run"


def test_macro_marks_function_without_wrapping_it() -> None:
    def original(x: int) -> int:
        return x

    tagged = macro(original)

    assert tagged is original
    assert is_macro(tagged)
    assert classify(tagged) is CallableKind.MACRO
    assert classify(len) is CallableKind.FUNCTION


def test_all_submodules_walks_bound_children(module_builder) -> None:
    root = module_builder.build("")
    child = module_builder.build("child", "def f(x: int): pass")
    grandchild = module_builder.build("child.leaf", "def g(x: int): pass")
    module_builder.nest(root, child)
    module_builder.nest(child, grandchild)
    # Modules imported from elsewhere are not sub-modules.
    root.json = json

    modules = all_submodules([root])

    assert modules == [root, child, grandchild]


def test_all_submodules_deduplicates_overlapping_inputs(module_builder) -> None:
    root = module_builder.build("")
    child = module_builder.build("child")
    module_builder.nest(root, child)

    assert all_submodules([root, child]) == [root, child]
    assert all_submodules([child, root]) == [child, root]


def test_module_functions_skips_singledispatch_registrations(module_builder) -> None:
    module = module_builder.build(
        "pkg",
        """
        from functools import singledispatch

        @singledispatch
        def render(value) -> str:
            return repr(value)

        @render.register
        def _(value: int) -> str:
            return str(value)

        @render.register
        def render_text(value: str) -> str:
            return value

        def other(value: bytes) -> str:
            return value.decode()
        """,
    )

    assert [info.name for info in module_functions(module)] == ["other", "render"]
