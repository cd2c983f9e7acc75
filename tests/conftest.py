"""Pytest configuration for test isolation.

The consoles resolve their data directory from ``REGISTRAR_DATA_DIR`` (or the
current working directory). A test that forgets to pass an explicit
directory must never read or overwrite the developer's real data files, so an
autouse fixture points the variable at the test's own temporary directory.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Make sure the workspace `packages/` dir is on sys.path so `registrar` is importable
# (and the repo root, for `tests.helpers`)
_ROOT = Path(__file__).resolve().parents[1]
_PKG_DIR = _ROOT / "packages"
sys.path[:0] = [p for p in [str(_PKG_DIR), str(_ROOT)] if p not in sys.path]


@pytest.fixture(autouse=True)
def _isolate_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    data_root = tmp_path / "data"
    data_root.mkdir(parents=True, exist_ok=True)
    monkeypatch.setenv("REGISTRAR_DATA_DIR", os.fspath(data_root))
    monkeypatch.delenv("REGISTRAR_LOG_LEVEL", raising=False)
    return data_root
