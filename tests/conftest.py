# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures."""

from __future__ import annotations

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def ordered_versions() -> list[str]:
    """Versions listed in ascending PEP 440 order."""
    return [
        "1.0.dev1",
        "1.0a1",
        "1.0a1.post1.dev1",
        "1.0a1.post1",
        "1.0b1",
        "1.0rc1",
        "1.0",
        "1.0+abc",
        "1.0+1",
        "1.0+1.1",
        "1.0.post1",
        "1.1.dev1",
        "1!0.1",
    ]
