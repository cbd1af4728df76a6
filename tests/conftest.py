"""
Test configuration and fixtures for the shortlink service.
This centralizes all test setup, making individual tests clean.
"""

import os

# Must be set before the settings object is created on first import
os.environ["STORE_BACKEND"] = "memory"
os.environ["JWT_SECRET"] = "test-secret-with-enough-bytes-for-hs256"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.pop("BASE_URL", None)

import pytest
from fastapi.testclient import TestClient

from main import app
from shortlink_app.dependencies import get_store
from shortlink_app.store.factory import StoreFactory
from shortlink_app.store.strategies import InMemoryStore

TEST_PASSWORD = "correct horse battery"


@pytest.fixture(scope="function")
def store():
    """
    Fresh in-memory store for each test.
    The factory singleton and the cached dependency are both reset so the
    app and the test share this instance.
    """
    StoreFactory.clear_instance()
    get_store.cache_clear()
    instance = get_store()
    assert isinstance(instance, InMemoryStore)
    yield instance
    StoreFactory.clear_instance()
    get_store.cache_clear()


@pytest.fixture(scope="function")
def client(store):
    """
    Test client with the app lifespan running (store check, version marker,
    session secret). This is the main fixture that tests will use.
    """
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def logged_in_client(client):
    """Client with the account created and a session cookie set"""
    response = client.post("/api/v1/auth/create-account", data={"password": TEST_PASSWORD})
    assert response.status_code == 201
    return client
