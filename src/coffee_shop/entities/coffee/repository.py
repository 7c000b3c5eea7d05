"""Data-access layer for the catalog collection."""

from collections.abc import Iterator

from bson import ObjectId
from bson.errors import InvalidDocument
from loguru import logger
from pydantic import ValidationError
from pymongo.errors import PyMongoError

from src.coffee_shop.core.exceptions import NotFoundError, QueryError, WriteError
from src.coffee_shop.core.services.database.store import DocumentStoreService
from src.coffee_shop.entities.coffee.entity import Coffee, NewCoffee


def identifier_filter(identifier: str) -> dict:
    """Build the ``_id`` filter for an identifier received from a caller.

    Identifiers assigned by the store are 24-character hex ObjectIds; anything
    else is matched as a raw string key.
    """
    if ObjectId.is_valid(identifier):
        return {"_id": ObjectId(identifier)}
    return {"_id": identifier}


class CoffeeRepository:
    """Read and insert coffees in the catalog collection."""

    def __init__(self, store: DocumentStoreService) -> None:
        self._store = store
        self._collection = store.collection(store.config.catalog_collection)

    def find_all(self) -> Iterator[Coffee]:
        """Yield every coffee in the collection.

        The cursor is consumed lazily. A document that cannot be decoded
        aborts the iteration with QueryError; nothing after it is yielded.
        """
        with self._store.deadline():
            try:
                for document in self._collection.find({}):
                    try:
                        yield Coffee.model_validate(document)
                    except ValidationError as exc:
                        logger.error("Undecodable catalog document {}", document.get("_id"))
                        raise QueryError(str(exc)) from exc
            except PyMongoError as exc:
                if exc.timeout:
                    raise
                raise QueryError(str(exc)) from exc

    def find_by_identifier(self, identifier: str) -> Coffee:
        """Return the coffee with the given identifier.

        Raises:
            NotFoundError: If no document matches.
            QueryError: If the lookup fails or the document cannot be decoded.
        """
        with self._store.deadline():
            try:
                document = self._collection.find_one(identifier_filter(identifier))
            except PyMongoError as exc:
                if exc.timeout:
                    raise
                raise QueryError(str(exc)) from exc

        if document is None:
            raise NotFoundError()
        try:
            return Coffee.model_validate(document)
        except ValidationError as exc:
            raise QueryError(str(exc)) from exc

    def insert_one(self, coffee: NewCoffee) -> Coffee:
        """Insert one coffee and return it with its store-assigned identifier."""
        document = coffee.to_document()
        with self._store.deadline():
            try:
                result = self._collection.insert_one(document)
            except PyMongoError as exc:
                if exc.timeout:
                    raise
                raise WriteError(str(exc)) from exc
            except (OverflowError, InvalidDocument) as exc:
                # Raised by the driver while encoding, before anything is sent
                raise WriteError(str(exc)) from exc
        return Coffee(id=str(result.inserted_id), name=coffee.name, price=coffee.price)
