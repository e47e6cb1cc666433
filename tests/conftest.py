"""Test setup for lexical2pt."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from lexical2pt.keys import KeyGenerator, reset_key_counter  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_default_keys() -> None:
    """Start every test with a fresh process-wide key counter."""
    reset_key_counter()


@pytest.fixture
def keys() -> KeyGenerator:
    """An isolated key generator for a single test."""
    return KeyGenerator()
