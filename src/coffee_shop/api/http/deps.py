"""FastAPI dependency implementations."""

from __future__ import annotations

from fastapi import Request

from src.coffee_shop.api.http.app_data import ApplicationDependencies
from src.coffee_shop.core.services.catalog_service import CatalogService
from src.coffee_shop.core.services.database.store import DocumentStoreService
from src.coffee_shop.entities.audit import AuditRepository


def get_store(request: Request) -> DocumentStoreService:
    """Get the document store service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.store


def get_catalog_service(request: Request) -> CatalogService:
    """Get the catalog service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.catalog_service


def get_audit_repository(request: Request) -> AuditRepository:
    """Get the audit repository instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.audit_repository


async def read_body(request: Request) -> bytes:
    """Raw request body, parsed by the handlers so that errors map to 400."""
    return await request.body()
