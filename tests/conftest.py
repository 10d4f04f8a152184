"""Pytest configuration helpers."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep CHQUERY_* variables from the outer environment out of the tests."""
    for name in ("CHQUERY_URL", "CHQUERY_DIALECT", "CHQUERY_LOG_QUERIES"):
        monkeypatch.delenv(name, raising=False)
