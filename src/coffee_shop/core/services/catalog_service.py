"""Catalog operations: list, buy, create and import."""

from collections.abc import Callable
from pathlib import Path

from loguru import logger

from src.coffee_shop.core.exceptions import StoreTimeoutError, WriteError
from src.coffee_shop.core.services.seed_loader import load_seed_file
from src.coffee_shop.entities.coffee.entity import Coffee, NewCoffee
from src.coffee_shop.entities.coffee.repository import CoffeeRepository


class CatalogService:
    """Business operations on the coffee catalog.

    Return values are the confirmation texts sent back to the caller; failures
    propagate as CoffeeShopError subclasses.
    """

    def __init__(
        self,
        repository: CoffeeRepository,
        seed_file: str | Path,
        seed_loader: Callable[[str | Path], list[NewCoffee]] = load_seed_file,
    ) -> None:
        self._repository = repository
        self._seed_file = seed_file
        self._seed_loader = seed_loader

    def list_coffees(self) -> list[Coffee]:
        """Materialize the whole catalog; any decode failure discards it all."""
        return list(self._repository.find_all())

    def buy(self, identifier: str) -> str:
        coffee = self._repository.find_by_identifier(identifier)
        logger.info("Sold {} ({})", coffee.name, coffee.id)
        return f"You have successfully bought a {coffee.name} for {coffee.price} cents."

    def create(self, new_coffee: NewCoffee) -> str:
        coffee = self._repository.insert_one(new_coffee)
        logger.info("Created coffee {} with id {}", coffee.name, coffee.id)
        return f"New coffee created: {coffee.name} - Price: {coffee.price}"

    def import_seed(self) -> str:
        """Insert every coffee of the seed file, one at a time, in file order.

        The first failing insert stops the import. Coffees inserted before it
        stay in the catalog; there is no rollback.
        """
        coffees = self._seed_loader(self._seed_file)
        imported = 0
        for coffee in coffees:
            try:
                self._repository.insert_one(coffee)
            except (WriteError, StoreTimeoutError):
                logger.error(
                    "Import aborted after {} of {} coffees", imported, len(coffees)
                )
                raise
            imported += 1

        logger.info("Imported {} coffees from {}", imported, self._seed_file)
        return f"Imported {imported} coffee instances into the database"
