from __future__ import annotations

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog():
    """CLI runs configure logging against streams that close afterwards."""
    yield
    structlog.reset_defaults()
