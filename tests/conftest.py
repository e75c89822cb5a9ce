from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

pytest_plugins = ["scene_assert.pytest_plugin"]


@pytest.fixture(autouse=True)
def _reset_scene_assert_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("scene_assert")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
