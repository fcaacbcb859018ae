from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure(config) -> None:  # pragma: no cover - pytest hook
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if src_path.exists() and str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


VILLAGE_SCRIPT = (
    "Opening shot of a quiet village at dawn.\n\n"
    "A villager discovers a mysterious glowing stone."
)


@pytest.fixture
def village_script() -> str:
    return VILLAGE_SCRIPT


@pytest.fixture(autouse=True)
def _no_sora_key(monkeypatch):
    monkeypatch.delenv("SORA2_API_KEY", raising=False)
    monkeypatch.delenv("SORA2_API_URL", raising=False)
