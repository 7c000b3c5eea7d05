"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from loguru import logger
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import PlainTextResponse

from src.coffee_shop.api.http.app_data import ApplicationDependencies
from src.coffee_shop.api.http.middleware.audit import RequestAuditMiddleware
from src.coffee_shop.api.http.routers import catalog, health
from src.coffee_shop.api.utils.app_startup import configure_logging
from src.coffee_shop.core.exceptions import CoffeeShopError
from src.coffee_shop.core.services.catalog_service import CatalogService
from src.coffee_shop.core.services.database.store import DocumentStoreService
from src.coffee_shop.entities.audit import AuditRepository
from src.coffee_shop.entities.coffee import CoffeeRepository
from src.coffee_shop.runtime.config.config_data import ConfigData
from src.coffee_shop.runtime.context import get_config

NOT_FOUND_TEXT = "404 page not found"
METHOD_NOT_ALLOWED_TEXT = "405 method not allowed"


def build_dependencies(
    store: DocumentStoreService, config: ConfigData
) -> ApplicationDependencies:
    """Create the collection-scoped services once the store is connected."""
    coffee_repository = CoffeeRepository(store)
    return ApplicationDependencies(
        store=store,
        coffee_repository=coffee_repository,
        audit_repository=AuditRepository(store),
        catalog_service=CatalogService(
            coffee_repository, seed_file=config.catalog.seed_file
        ),
    )


# --- Request logging middleware ---
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
        "host": request.headers.get("host", request.url.hostname or "-"),
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return PlainTextResponse(
                "Internal Server Error",
                status_code=500,
                headers={"X-Request-ID": request_id},
            )


# --- Exception handlers ---
async def coffee_shop_error_handler(
    request: Request, exc: CoffeeShopError
) -> PlainTextResponse:
    log = logger.bind(status_code=exc.status_code, error_type=type(exc).__name__)
    if exc.status_code >= 500:
        log.error("request.failed: {}", exc)
    else:
        log.info("request.rejected: {}", exc)
    return PlainTextResponse(str(exc), status_code=exc.status_code)


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> PlainTextResponse:
    if exc.status_code == 404:
        return PlainTextResponse(NOT_FOUND_TEXT, status_code=404)
    if exc.status_code == 405:
        config: ConfigData = request.app.state.config
        if not config.features.method_not_allowed:
            return PlainTextResponse(NOT_FOUND_TEXT, status_code=404)
        return PlainTextResponse(
            METHOD_NOT_ALLOWED_TEXT, status_code=405, headers=exc.headers
        )
    return PlainTextResponse(
        str(exc.detail), status_code=exc.status_code, headers=exc.headers
    )


def create_app(
    config: ConfigData | None = None,
    store: DocumentStoreService | None = None,
) -> FastAPI:
    """Build the application for the given configuration.

    Args:
        config: Configuration to serve with; the current context's when omitted.
        store: Pre-built document store. When omitted the lifespan creates one
            from ``config.database`` and closes it on shutdown.
    """
    config = config or get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = store is None
        active_store = DocumentStoreService(config.database) if owned else store
        logger.info(
            "Starting up application in {} environment", config.app.environment
        )
        # Fails fast: no traffic is served without a store connection
        await run_in_threadpool(active_store.connect)
        app.state.app_dependencies = build_dependencies(active_store, config)
        try:
            yield
        finally:
            logger.info("Shutting down application")
            if owned:
                active_store.close()

    app = FastAPI(
        title=config.app.title,
        lifespan=lifespan,
        docs_url=None if config.app.environment == "production" else "/docs",
        redoc_url=None if config.app.environment == "production" else "/redoc",
    )
    app.state.config = config

    app.add_exception_handler(CoffeeShopError, coffee_shop_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    # Added first so the logging middleware wraps it
    if config.features.audit_enabled:
        app.add_middleware(RequestAuditMiddleware)
    app.middleware("http")(log_requests)

    # --- Router registration ---
    app.include_router(catalog.router)
    if config.features.create_enabled:
        app.include_router(catalog.create_router)
    if config.features.import_enabled:
        app.include_router(catalog.import_router)
    app.include_router(health.router)

    return app


configure_logging()
app = create_app()


if __name__ == "__main__":
    import uvicorn

    main_config = get_config()
    uvicorn.run(
        app,
        host=main_config.app.host,
        port=main_config.app.port,
        access_log=False,  # We handle access logging in middleware
    )
