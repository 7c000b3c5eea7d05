"""Service and application fixtures for testing."""

from collections.abc import Callable, Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.coffee_shop.api.http.app import create_app
from src.coffee_shop.core.services.catalog_service import CatalogService
from src.coffee_shop.core.services.database.store import DocumentStoreService
from src.coffee_shop.entities.audit import AuditRepository
from src.coffee_shop.entities.coffee import CoffeeRepository
from src.coffee_shop.runtime.config.config_data import ConfigData


@pytest.fixture
def coffee_repository(store: DocumentStoreService) -> CoffeeRepository:
    return CoffeeRepository(store)


@pytest.fixture
def audit_repository(store: DocumentStoreService) -> AuditRepository:
    return AuditRepository(store)


@pytest.fixture
def catalog_service(
    coffee_repository: CoffeeRepository, test_config: ConfigData
) -> CatalogService:
    return CatalogService(coffee_repository, seed_file=test_config.catalog.seed_file)


@pytest.fixture
def app_factory(
    test_config: ConfigData, store: DocumentStoreService
) -> Callable[..., FastAPI]:
    """Build an application over the in-memory store with feature overrides."""

    def _make_app(**features: bool) -> FastAPI:
        config = test_config.model_copy(
            update={
                "features": test_config.features.model_copy(update=features),
            }
        )
        return create_app(config=config, store=store)

    return _make_app


@pytest.fixture
def client_factory(
    app_factory: Callable[..., FastAPI],
) -> Generator[Callable[..., TestClient]]:
    """Start TestClients (lifespan included) and shut them down after the test."""
    clients: list[TestClient] = []

    def _make_client(**features: bool) -> TestClient:
        client = TestClient(app_factory(**features))
        client.__enter__()
        clients.append(client)
        return client

    yield _make_client

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(client_factory: Callable[..., TestClient]) -> TestClient:
    """Client for an application with every capability enabled."""
    return client_factory()
