"""Seed file loading for the bulk import operation."""

from pathlib import Path

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from src.coffee_shop.core.exceptions import SeedFileError
from src.coffee_shop.entities.coffee.entity import NewCoffee

_seed_adapter = TypeAdapter(list[NewCoffee])


def load_seed_file(path: str | Path) -> list[NewCoffee]:
    """Read a JSON array of ``{name, price}`` objects.

    Raises:
        SeedFileError: If the file cannot be read or is not a valid array.
    """
    seed_path = Path(path)
    try:
        content = seed_path.read_bytes()
    except OSError as exc:
        raise SeedFileError(str(exc)) from exc

    try:
        coffees = _seed_adapter.validate_json(content)
    except ValidationError as exc:
        raise SeedFileError(str(exc)) from exc

    logger.debug("Loaded {} coffees from {}", len(coffees), seed_path)
    return coffees
