# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Shared test configuration and fixtures."""

try:
    import arcspan_contextual  # noqa: F401
except ImportError:
    raise ImportError("arcspan_contextual is not installed. Run: pip install -e '.[dev]'") from None

import pytest
import structlog


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Keep bound contextvars (silo) from leaking between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
