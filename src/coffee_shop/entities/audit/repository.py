"""Data-access layer for the request audit collection."""

from pymongo.errors import PyMongoError

from src.coffee_shop.core.exceptions import WriteError
from src.coffee_shop.core.services.database.store import DocumentStoreService
from src.coffee_shop.entities.audit.entity import AuditRecord


class AuditRepository:
    """Write-only access to the audit trail."""

    def __init__(self, store: DocumentStoreService) -> None:
        self._store = store
        self._collection = store.collection(store.config.audit_collection)

    def insert(self, record: AuditRecord) -> None:
        with self._store.deadline():
            try:
                self._collection.insert_one(record.to_document())
            except PyMongoError as exc:
                if exc.timeout:
                    raise
                raise WriteError(str(exc)) from exc
