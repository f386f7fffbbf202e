"""Fallback artifacts for runs that fail part-way through."""

from __future__ import annotations

import os
import tempfile
import traceback
from pathlib import Path

_FALLBACK_PREFIX = "precompile_"
_FALLBACK_SUFFIX = ".py"


def format_error(exc: BaseException) -> str:
    """Return the exception with its traceback, as shown in the warning."""
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip()


def write_empty_artifact() -> Path:
    """Write an empty artifact to a fresh temporary file and return its path.

    The host includes whatever path it is handed, so the file must exist even
    when nothing could be generated.
    """
    fd, name = tempfile.mkstemp(prefix=_FALLBACK_PREFIX, suffix=_FALLBACK_SUFFIX)
    with os.fdopen(fd, "w", encoding="utf-8") as handle:
        handle.write("")
    return Path(name)


__all__ = ["format_error", "write_empty_artifact"]
