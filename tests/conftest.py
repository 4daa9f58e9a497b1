from __future__ import annotations

from collections.abc import Iterator

import pytest
from loguru import logger

from parley import logging_utils


@pytest.fixture(autouse=True)
def _reset_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv("PARLEY_LOG_LEVEL", raising=False)
    yield
    # CLI tests point loguru at captured streams that close after the test.
    logger.remove()
    logging_utils._CONFIGURED = None
