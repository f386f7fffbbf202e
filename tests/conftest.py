from __future__ import annotations

import logging
from typing import Iterator

import pytest

from tests._fixtures.module_builder import ModuleBuilder


@pytest.fixture
def module_builder(request: pytest.FixtureRequest) -> Iterator[ModuleBuilder]:
    """Provide a builder whose modules are unregistered after the test."""
    builder = ModuleBuilder(f"_psig_{request.node.name}")
    yield builder
    builder.cleanup()


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Undo handlers installed by CLI runs so later tests see a clean logger."""
    yield
    logger = logging.getLogger("precompile_signatures")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
