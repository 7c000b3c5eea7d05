"""Catalog API routers.

The routes are split by capability so the application factory can include
only the route-set enabled in the configuration.
"""

from fastapi import APIRouter, Depends
from pydantic import StrictStr, TypeAdapter, ValidationError
from starlette.responses import PlainTextResponse

from src.coffee_shop.api.http.deps import get_catalog_service, read_body
from src.coffee_shop.core.exceptions import BodyValidationError
from src.coffee_shop.core.services.catalog_service import CatalogService
from src.coffee_shop.entities.coffee import Coffee, NewCoffee

# POST /buy takes a bare JSON string: "65f1c0ffee..."
_identifier_adapter = TypeAdapter(StrictStr)


def parse_identifier(body: bytes) -> str:
    try:
        return _identifier_adapter.validate_json(body)
    except ValidationError as exc:
        raise BodyValidationError(str(exc)) from exc


def parse_new_coffee(body: bytes) -> NewCoffee:
    try:
        return NewCoffee.model_validate_json(body)
    except ValidationError as exc:
        raise BodyValidationError(str(exc)) from exc


router = APIRouter(tags=["catalog"])
create_router = APIRouter(tags=["catalog"])
import_router = APIRouter(tags=["catalog"])


@router.get("/coffees", response_model=list[Coffee])
def list_coffees(
    catalog: CatalogService = Depends(get_catalog_service),
) -> list[Coffee]:
    """List every coffee in the catalog."""
    return catalog.list_coffees()


@router.post("/buy", response_class=PlainTextResponse)
def buy_coffee(
    body: bytes = Depends(read_body),
    catalog: CatalogService = Depends(get_catalog_service),
) -> PlainTextResponse:
    """Buy the coffee whose identifier is the JSON string in the body."""
    identifier = parse_identifier(body)
    return PlainTextResponse(catalog.buy(identifier))


@create_router.post("/coffees", response_class=PlainTextResponse)
def create_coffee(
    body: bytes = Depends(read_body),
    catalog: CatalogService = Depends(get_catalog_service),
) -> PlainTextResponse:
    """Create a coffee from a ``{name, price}`` body."""
    new_coffee = parse_new_coffee(body)
    return PlainTextResponse(catalog.create(new_coffee))


@import_router.post("/import", response_class=PlainTextResponse)
def import_coffees(
    catalog: CatalogService = Depends(get_catalog_service),
) -> PlainTextResponse:
    """Import the coffees of the configured seed file."""
    return PlainTextResponse(catalog.import_seed())
