"""Entity: AuditRecord."""

import threading
from datetime import UTC, datetime

from pydantic import ConfigDict, Field

from src.coffee_shop.entities._base import Document

_clock_lock = threading.Lock()
_last_timestamp = datetime.min.replace(tzinfo=UTC)


def audit_timestamp() -> datetime:
    """Current UTC time, never earlier than the previous audit timestamp.

    Wall-clock steps backwards are absorbed by repeating the last value.
    """
    global _last_timestamp
    with _clock_lock:
        _last_timestamp = max(datetime.now(UTC), _last_timestamp)
        return _last_timestamp


class AuditRecord(Document):
    """One inbound HTTP request, written once and never read back by the service."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    path: str
    method: str
    host: str
    remote_address: str = Field(alias="remoteAddress")
    timestamp: datetime = Field(default_factory=audit_timestamp)

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, exclude={"id"})
