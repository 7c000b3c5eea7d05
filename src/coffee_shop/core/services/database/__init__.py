from .store import DocumentStoreService

__all__ = ["DocumentStoreService"]
