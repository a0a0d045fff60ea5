from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from coffee.api.rest.app import create_app
from coffee.infra.database import Database
from coffee.server.wire import ServiceBundle, build_services


@pytest.fixture
def database() -> Iterator[Database]:
    db = Database("sqlite://")
    db.initialize(seed=True)
    yield db
    db.dispose()


@pytest.fixture
def services(database: Database) -> ServiceBundle:
    return build_services(database)


@pytest.fixture
def client(services: ServiceBundle) -> Iterator[TestClient]:
    with TestClient(create_app(services)) as test_client:
        yield test_client
