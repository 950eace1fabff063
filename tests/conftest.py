import os
from pathlib import Path

import pytest

os.environ.setdefault("TEST_MODE", "1")

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture(autouse=True)
def _test_mode(monkeypatch):
    monkeypatch.setenv("TEST_MODE", "1")


@pytest.fixture
def load_response():
    """Lädt einen aufgezeichneten LLM-Report aus tests/fixtures/responses."""

    def _load(name: str) -> str:
        return (FIXTURES_DIR / "responses" / name).read_text(encoding="utf-8")

    return _load


@pytest.fixture
def load_document():
    """Lädt ein Referenzdokument aus tests/fixtures/documents."""

    def _load(name: str) -> str:
        return (FIXTURES_DIR / "documents" / name).read_text(encoding="utf-8")

    return _load
