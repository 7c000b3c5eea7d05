"""Entity package: AuditRecord."""

from .entity import AuditRecord
from .repository import AuditRepository

__all__ = ["AuditRecord", "AuditRepository"]
