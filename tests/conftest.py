"""Shared vectors and fixtures."""

import pytest
from fastapi.testclient import TestClient

from deps.store import RoundStore, get_store
from main import app

SERVER_SEED = "b2a5f3f32a4d9c6ee7a8c1d33456677890abcdeffedcba0987654321ffeeddcc"
NONCE = "42"
CLIENT_SEED = "candidate-hello"
COMMIT_HEX = "bb9acdc67f3f18f3345236a01f0e5072596657a9005c7d8a22cff061451a6b34"
COMBINED_SEED = "e1dddf77de27d395ea2be2ed49aa2a59bd6bf12ee8d350c16c008abd406c07e0"
FIRST_FIVE = [0.1106166649, 0.7625129214, 0.0439292176, 0.4578678815, 0.3438999297]


@pytest.fixture
def store() -> RoundStore:
    return RoundStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
