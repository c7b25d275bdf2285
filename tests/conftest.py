from __future__ import annotations

import sys
from pathlib import Path

import pytest

STACKVM_ENV_VARS = ("STACKVM_PROMPT", "STACKVM_BANNER", "STACKVM_RESERVED")


def pytest_configure() -> None:
    project_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(project_root))


@pytest.fixture(autouse=True)
def _clean_stackvm_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in STACKVM_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
