"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from permsvc.infrastructure.directory import StaticGroupDirectory
from permsvc.main import build_app

from tests.conftest import MEMBERSHIPS, SOURCES, FailingGroupDirectory


@pytest.fixture
def app(uow_factory, add_resource_type):
    """Falcon ASGI app wired to fake storage and a static directory."""
    add_resource_type("app")
    return build_app(uow_factory, StaticGroupDirectory(MEMBERSHIPS, SOURCES))


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)


@pytest.fixture
def outage_client(uow_factory, add_resource_type) -> TestClient:
    """Client for an app whose group directory is unreachable."""
    add_resource_type("app")
    return TestClient(build_app(uow_factory, FailingGroupDirectory()))
