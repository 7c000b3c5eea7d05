"""Entity package: Coffee."""

from .entity import Coffee, NewCoffee
from .repository import CoffeeRepository

__all__ = ["Coffee", "CoffeeRepository", "NewCoffee"]
