"""Shared fixtures: a store with the built-in template, the app and a client."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from pbar_server.app import create_app
from pbar_server.rendering import TemplateStore
from pbar_server.settings import get_settings


@pytest.fixture
def store() -> TemplateStore:
    return TemplateStore.load()


@pytest.fixture
def client(store: TemplateStore) -> TestClient:
    return TestClient(create_app(store))


@pytest.fixture
def make_client():
    def _make(store: TemplateStore) -> TestClient:
        return TestClient(create_app(store))

    return _make


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
