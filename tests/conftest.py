"""Pytest configuration for test isolation.

Settings are read from the environment (``DATABASE_URL`` and ``PASSBOOK_*``),
and a developer's shell or ``.env`` would otherwise leak into assertions about
defaults. Engines are cached per URL by ``passbook.db.client`` and the CLI
configures the package logger once per process; both are reset around every
test so each one starts from a clean slate.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from passbook.db.client import dispose_engines
from passbook.logging_setup import reset_logging


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear passbook settings and run from an empty directory (no stray .env)."""

    for name in list(os.environ):
        if name.startswith("PASSBOOK_") or name == "DATABASE_URL":
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    reset_logging()
    dispose_engines()
