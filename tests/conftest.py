"""
Pytest config.

Pins the repo root on sys.path so `import osslgate` works without an editable install, and
resets the process-wide policy state around every test.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_repo_root_on_syspath() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


_ensure_repo_root_on_syspath()


@pytest.fixture(autouse=True)
def _fresh_global_state():
    from osslgate.authz.state import reset_global_state

    reset_global_state()
    yield
    reset_global_state()
