"""Document store client and collection handles used across the application."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from types import TracebackType
from typing import Any

import pymongo
from loguru import logger
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from src.coffee_shop.core.exceptions import StoreConnectionError, StoreTimeoutError
from src.coffee_shop.runtime.config.config_data import DatabaseConfig
from src.coffee_shop.runtime.context import get_config


def _default_client_factory(config: DatabaseConfig) -> MongoClient:
    timeout_ms = int(config.connect_timeout_seconds * 1000)
    return MongoClient(
        config.url,
        serverSelectionTimeoutMS=timeout_ms,
        connectTimeoutMS=timeout_ms,
        # No retries anywhere in the request path
        retryReads=False,
        retryWrites=False,
    )


class DocumentStoreService:
    """Owns the MongoDB client and hands out collection handles.

    The client is created once at startup. Repositories borrow collection
    handles from here but never open or close the connection themselves.
    """

    def __init__(
        self,
        config: DatabaseConfig | None = None,
        client_factory: Callable[[DatabaseConfig], Any] = _default_client_factory,
    ) -> None:
        self._config = config or get_config().database
        self._client_factory = client_factory
        self._client: Any = None

    @property
    def config(self) -> DatabaseConfig:
        return self._config

    @property
    def client(self) -> Any:
        if self._client is None:
            raise RuntimeError("Document store is not connected")
        return self._client

    @property
    def connected(self) -> bool:
        return self._client is not None

    def connect(self) -> DocumentStoreService:
        """Create the client and verify the server answers.

        Raises:
            StoreConnectionError: If the server is not reachable within
                ``connect_timeout_seconds``.
        """
        if self._client is not None:
            return self

        logger.info("Connecting to document store at {}", self._config.redacted_url)
        client = self._client_factory(self._config)
        try:
            with pymongo.timeout(self._config.connect_timeout_seconds):
                client.admin.command("ping")
        except PyMongoError as exc:
            client.close()
            logger.error("Document store unreachable: {}", exc)
            raise StoreConnectionError(str(exc)) from exc

        self._client = client
        logger.info("Connected to document store database {}", self._config.name)
        return self

    def close(self) -> None:
        """Release the client. Safe to call more than once."""
        if self._client is None:
            return
        logger.info("Closing document store connection")
        self._client.close()
        self._client = None

    def __enter__(self) -> DocumentStoreService:
        return self.connect()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def collection(self, name: str) -> Collection:
        """Return the handle for a collection of the configured database."""
        return self.client[self._config.name][name]

    @contextmanager
    def deadline(self) -> Iterator[None]:
        """Bound the enclosed store calls by the per-operation timeout.

        Timeouts reported by the driver are re-raised as StoreTimeoutError;
        every other driver error propagates unchanged.
        """
        try:
            with pymongo.timeout(self._config.operation_timeout_seconds):
                yield
        except PyMongoError as exc:
            if exc.timeout:
                raise StoreTimeoutError(str(exc)) from exc
            raise

    def health_check(self) -> bool:
        """Ping the server; False when it does not answer in time."""
        try:
            with self.deadline():
                self.client.admin.command("ping")
            return True
        except (PyMongoError, StoreTimeoutError, RuntimeError) as e:
            logger.error(
                "Document store health check failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return False
