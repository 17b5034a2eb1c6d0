from __future__ import annotations

import os
from collections.abc import Generator

import pytest


@pytest.fixture(autouse=True)
def _hermetic_engine_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Strip STACKCUT_* overrides so every test runs on the engine defaults."""

    for key in list(os.environ):
        if key.startswith("STACKCUT_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def client() -> Generator:
    """FastAPI TestClient backed by a fresh in-memory game store."""

    from fastapi.testclient import TestClient

    from stackcut.api.deps import get_store
    from stackcut.game_store import GameStore
    from stackcut.main import app

    store = GameStore()

    def _override() -> GameStore:
        return store

    app.dependency_overrides[get_store] = _override
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
