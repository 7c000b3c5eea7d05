"""Request audit middleware.

Every inbound request is recorded in the audit collection before it reaches
the router. The audit trail is best-effort: a failed write is logged and the
request carries on as if nothing happened.
"""

from fastapi import Request
from loguru import logger
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware

from src.coffee_shop.api.http.deps import get_audit_repository
from src.coffee_shop.entities.audit import AuditRecord


def build_audit_record(request: Request) -> AuditRecord:
    client = request.client
    remote_address = f"{client.host}:{client.port}" if client else ""
    return AuditRecord(
        path=request.url.path,
        method=request.method,
        host=request.headers.get("host", ""),
        remote_address=remote_address,
    )


class RequestAuditMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        record = build_audit_record(request)
        try:
            await run_in_threadpool(get_audit_repository(request).insert, record)
        except Exception:
            # Never fail or delay the request beyond the insert attempt itself
            logger.bind(path=record.path, method=record.method).exception(
                "audit.write_failed"
            )
        return await call_next(request)
