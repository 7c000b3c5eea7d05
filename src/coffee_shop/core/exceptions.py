"""Error taxonomy shared by the store gateway, the catalog service and the API.

Each error carries the HTTP status it is answered with; the response body is
the error message as plain text.
"""


class CoffeeShopError(Exception):
    """Base class for errors that terminate a request with a known status."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class StoreConnectionError(CoffeeShopError, ConnectionError):
    """The document store could not be reached at startup."""


class StoreTimeoutError(CoffeeShopError, TimeoutError):
    """A store operation exceeded its deadline."""


class QueryError(CoffeeShopError):
    """The store rejected a read, or a returned document could not be decoded."""


class WriteError(CoffeeShopError):
    """The store rejected a write."""


class NotFoundError(CoffeeShopError):
    """No catalog item matches the requested identifier."""

    status_code = 404

    def __init__(self, message: str = "Coffee not found") -> None:
        super().__init__(message)


class BodyValidationError(CoffeeShopError):
    """The request body is not valid JSON of the expected shape."""

    status_code = 400


class SeedFileError(CoffeeShopError):
    """The seed file could not be read or parsed."""
