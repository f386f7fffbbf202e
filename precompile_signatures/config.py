"""Configuration for directive generation (.precompile.yml)."""

from __future__ import annotations

import os
import pathlib
import pkgutil
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import yaml

CONFIG_FILENAME = ".precompile.yml"

INCLUDE_SUBMODULES_DEFAULT = True
SPLIT_UNIONS_DEFAULT = True
TYPE_CONVERSIONS_DEFAULT: Mapping[Any, Any] = MappingProxyType({os.PathLike: pathlib.Path})
DEFAULT_HEADER = (
    "# This file is machine-generated by precompile_signatures.\n"
    "# Editing it directly is not advised.\n\n"
)


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class Config:
    """Settings for one directive generation run.

    - ``include_submodules``: also scan sub-modules bound inside the given modules.
    - ``split_unions``: expand ``f(x: int | float)`` into one directive per member.
      When disabled, signatures that are not already concrete are dropped.
    - ``type_conversions``: abstract-to-concrete substitutions applied to union
      members before the concreteness filter, e.g. ``os.PathLike -> pathlib.Path``.
    - ``header``: text written at the top of the generated file.
    """

    include_submodules: bool = INCLUDE_SUBMODULES_DEFAULT
    split_unions: bool = SPLIT_UNIONS_DEFAULT
    type_conversions: Mapping[Any, Any] = field(default_factory=lambda: TYPE_CONVERSIONS_DEFAULT)
    header: str = DEFAULT_HEADER

    def __post_init__(self) -> None:
        if not isinstance(self.type_conversions, MappingProxyType):
            frozen = MappingProxyType(dict(self.type_conversions))
            object.__setattr__(self, "type_conversions", frozen)


def load_config(config_path: Path) -> Config:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    if not config_file.exists():
        return Config()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    options: Dict[str, Any] = {}

    for key in ("include_submodules", "split_unions"):
        if key not in data:
            continue
        value = _as_bool(data[key])
        if value is None:
            raise ConfigError(f"'{key}' must be a boolean")
        options[key] = value

    if "type_conversions" in data:
        options["type_conversions"] = _parse_conversions(data["type_conversions"])

    header = data.get("header")
    if header is not None:
        if not isinstance(header, str):
            raise ConfigError("'header' must be a string")
        options["header"] = header

    return Config(**options)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _parse_conversions(value: Any) -> Dict[Any, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError("'type_conversions' must be a mapping of type names")
    conversions: Dict[Any, Any] = {}
    for source, target in value.items():
        conversions[_resolve_type(source)] = _resolve_type(target)
    return conversions


def _resolve_type(name: Any) -> Any:
    if not isinstance(name, str) or not name.strip():
        raise ConfigError(f"Invalid type reference: {name!r}")
    reference = name.strip()
    if "." not in reference and ":" not in reference:
        reference = f"builtins:{reference}"
    try:
        return pkgutil.resolve_name(reference)
    except (ImportError, AttributeError, ValueError) as exc:
        raise ConfigError(f"Cannot resolve type '{name}': {exc}") from exc


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = [
    "CONFIG_FILENAME",
    "Config",
    "ConfigError",
    "DEFAULT_HEADER",
    "load_config",
]
