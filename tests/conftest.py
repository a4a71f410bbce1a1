"""Shared fixtures for the NanoBASIC tests."""

from pathlib import Path

import pytest

from nanobasic import load, run

ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def programs_dir():
    return ROOT / "programs"


@pytest.fixture
def basic():
    """Run BASIC source text and return everything it printed as one string."""
    def _run(source):
        return "".join(run(load(source)))
    return _run
