"""Pipeline orchestration: modules in, directives (and an artifact) out."""

from __future__ import annotations

from pathlib import Path
from types import ModuleType
from typing import Iterable, List, Optional, Sequence, Set, Union

from .config import Config
from .discovery import all_submodules, module_functions
from .failsafe import format_error, write_empty_artifact
from .logging import get_logger
from .models import Directive
from .scratch import precompile_path
from .signatures import function_signatures
from .splitting import signature_directives
from .writer import write_directives as _write_directives

Modules = Union[ModuleType, Sequence[ModuleType]]


class Orchestrator:
    """Coordinates discovery, extraction, splitting and writing for a run."""

    def __init__(self, config: Config | None = None, *, cache_root: Path | None = None) -> None:
        self.config = config or Config()
        self.cache_root = cache_root
        self.logger = get_logger("orchestrator")

    def precompilables(self, modules: Modules, config: Config | None = None) -> List[Directive]:
        """Return the deduplicated directives for ``modules``."""
        config = config or self.config
        targets = self._expand_modules(modules, config)

        directives: List[Directive] = []
        seen: Set[Directive] = set()
        for module in targets:
            count = 0
            for function in module_functions(module):
                for signature in function_signatures(function):
                    for directive in signature_directives(signature, config):
                        if directive in seen:
                            continue
                        seen.add(directive)
                        directives.append(directive)
                        count += 1
            self.logger.debug("Module %s produced %d directives", module.__name__, count)
        self.logger.info("Collected %d directives from %d modules", len(directives), len(targets))
        return directives

    def write_directives(
        self,
        path: Path,
        source: Union[Modules, Iterable[Directive]],
        config: Config | None = None,
    ) -> str:
        """Write directives (given directly or collected from modules) to ``path``."""
        config = config or self.config
        if isinstance(source, ModuleType):
            return _write_directives(Path(path), self.precompilables(source, config), config)
        # materialised once so generators are consumed a single time
        items = list(source)
        if items and all(isinstance(item, ModuleType) for item in items):
            directives = self.precompilables(items, config)
        else:
            directives = items
        return _write_directives(Path(path), directives, config)

    def precompile_directives(
        self,
        module: ModuleType,
        config: Config | None = None,
        *,
        path: Optional[Path] = None,
    ) -> Path:
        """Generate the artifact for ``module`` and return its path.

        Never raises for pipeline failures: the error is logged and the path
        of an empty fallback artifact is returned instead.
        """
        config = config or self.config
        try:
            target = Path(path) if path is not None else precompile_path(module, self.cache_root)
            directives = self.precompilables(module, config)
            _write_directives(target, directives, config)
            return target
        except Exception as exc:
            self.logger.warning("Generating precompile directives failed\n%s", format_error(exc))
            fallback = write_empty_artifact()
            self.logger.debug("Wrote empty fallback artifact to %s", fallback)
            return fallback

    @staticmethod
    def _expand_modules(modules: Modules, config: Config) -> List[ModuleType]:
        selected = [modules] if isinstance(modules, ModuleType) else list(modules)
        if config.include_submodules:
            selected = all_submodules(selected)
        return selected


_DEFAULT = Orchestrator()


def precompilables(modules: Modules, config: Config | None = None) -> List[Directive]:
    return _DEFAULT.precompilables(modules, config)


def write_directives(
    path: Path,
    source: Union[Modules, Iterable[Directive]],
    config: Config | None = None,
) -> str:
    return _DEFAULT.write_directives(path, source, config)


def precompile_directives(module: ModuleType, config: Config | None = None) -> Path:
    return _DEFAULT.precompile_directives(module, config)


__all__ = [
    "Orchestrator",
    "precompilables",
    "precompile_directives",
    "write_directives",
]
