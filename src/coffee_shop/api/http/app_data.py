from dataclasses import dataclass

from src.coffee_shop.core.services.catalog_service import CatalogService
from src.coffee_shop.core.services.database.store import DocumentStoreService
from src.coffee_shop.entities.audit import AuditRepository
from src.coffee_shop.entities.coffee import CoffeeRepository


@dataclass(frozen=True)
class ApplicationDependencies:
    store: DocumentStoreService
    coffee_repository: CoffeeRepository
    audit_repository: AuditRepository
    catalog_service: CatalogService
