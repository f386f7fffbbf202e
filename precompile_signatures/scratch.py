"""Per-module scratch locations for generated artifacts."""

from __future__ import annotations

import os
from pathlib import Path
from types import ModuleType

ARTIFACT_NAME = "_precompile.py"
_CACHE_ENV = "PRECOMPILE_SIGNATURES_CACHE"
_CACHE_DIRNAME = "precompile_signatures"


def cache_root() -> Path:
    """Return the directory under which every module gets its scratch space."""
    override = os.environ.get(_CACHE_ENV)
    if override:
        return Path(override).expanduser()
    xdg = os.environ.get("XDG_CACHE_HOME")
    if xdg:
        return Path(xdg).expanduser() / _CACHE_DIRNAME
    return Path.home() / ".cache" / _CACHE_DIRNAME


def scratch_dir(module: ModuleType, root: Path | None = None) -> Path:
    directory = (root if root is not None else cache_root()) / module.__name__
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def precompile_path(module: ModuleType, root: Path | None = None) -> Path:
    return scratch_dir(module, root) / ARTIFACT_NAME


__all__ = ["ARTIFACT_NAME", "cache_root", "precompile_path", "scratch_dir"]
