from __future__ import annotations

import pytest

from app.core.config import Settings
from stubs import StubLemmatizer, make_settings


@pytest.fixture
def stub_lemmatizer() -> StubLemmatizer:
    return StubLemmatizer({"كتبها": "ktb+ha", "cats": "cat", "running": "run"})


@pytest.fixture
def stub_lemmatizer_factory(stub_lemmatizer):
    return lambda _settings: stub_lemmatizer


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return make_settings(tmp_path / "vocabulary.sqlite3")
