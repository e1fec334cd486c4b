"""Shared fixtures."""

import pytest
import structlog


@pytest.fixture
def audit_logs():
    """Log entries written through structlog while the test runs."""
    with structlog.testing.capture_logs() as logs:
        yield logs
