from __future__ import annotations

from collections.abc import Iterator

import pytest

TEST_OPENAI_API_KEY = "sk-test-key"


@pytest.fixture(autouse=True)
def _set_test_openai_api_key(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setenv("OPENAI_API_KEY", TEST_OPENAI_API_KEY)
    # Settings are cached via @lru_cache; clear so each test sees its own environment.
    from app.core.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from app.main import create_app

    app = create_app()
    with TestClient(app) as c:
        yield c
