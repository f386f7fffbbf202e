"""Generate ``precompile`` directives from the annotated signatures of a module."""

from .config import Config, ConfigError, load_config
from .discovery import macro
from .models import Directive
from .orchestrator import Orchestrator, precompilables, precompile_directives, write_directives

__all__ = [
    "Config",
    "ConfigError",
    "Directive",
    "Orchestrator",
    "load_config",
    "macro",
    "precompilables",
    "precompile_directives",
    "write_directives",
]
