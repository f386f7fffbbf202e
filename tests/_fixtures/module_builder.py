"""Helper utilities for constructing throwaway modules in tests."""

from __future__ import annotations

import sys
import textwrap
from types import ModuleType
from typing import List


class ModuleBuilder:
    """Builds importable modules from source snippets and removes them afterwards."""

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix
        self._created: List[str] = []

    def build(self, name: str, source: str = "", **attributes: object) -> ModuleType:
        """Execute ``source`` as module ``<prefix>.<name>`` and register it."""
        full_name = f"{self.prefix}.{name}" if name else self.prefix
        module = ModuleType(full_name)
        module.__dict__.update(attributes)
        sys.modules[full_name] = module
        self._created.append(full_name)
        code = compile(textwrap.dedent(source).lstrip("\n"), f"<{full_name}>", "exec")
        exec(code, module.__dict__)
        return module

    def nest(self, parent: ModuleType, child: ModuleType) -> None:
        """Bind ``child`` as an attribute of ``parent`` the way imports do."""
        setattr(parent, child.__name__.rsplit(".", 1)[-1], child)

    def cleanup(self) -> None:
        for name in self._created:
            sys.modules.pop(name, None)
        self._created.clear()


__all__ = ["ModuleBuilder"]
