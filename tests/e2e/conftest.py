"""E2E-specific pytest fixtures.

This module provides fixtures specifically for end-to-end tests.
"""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def no_file_logging(mocker):
    """Keep main() from attaching rotating file handlers during tests."""
    return mocker.patch("switchback.__main__._setup_logger")
