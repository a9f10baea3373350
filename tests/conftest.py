from __future__ import annotations

import pytest

from app import create_app
from config import TestingConfig
from models.subject import SubjectStore

from fakes import InMemoryCollection


@pytest.fixture
def collection():
    return InMemoryCollection()


@pytest.fixture
def store(collection):
    return SubjectStore(collection, timeout=1.0)


@pytest.fixture
def app(store):
    return create_app(TestingConfig, store=store)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_client():
    def _make(store):
        return create_app(TestingConfig, store=store).test_client()

    return _make
