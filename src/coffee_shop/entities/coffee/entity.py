"""Entity: Coffee."""

from pydantic import BaseModel, Field, StrictInt, StrictStr

from src.coffee_shop.entities._base import Document

# BSON stores integers as signed 64-bit values
MIN_PRICE = -(2**63)
MAX_PRICE = 2**63 - 1


class NewCoffee(BaseModel):
    """Caller-supplied shape of a coffee that does not exist yet.

    Used for the create request body and for every entry of the seed file.
    Any identifier sent along is ignored; the store assigns one on insert.
    """

    name: StrictStr = Field(description="Display name")
    price: StrictInt = Field(
        ge=MIN_PRICE, le=MAX_PRICE, description="Price in cents"
    )

    def to_document(self) -> dict:
        return {"name": self.name, "price": self.price}


class Coffee(Document):
    """One catalog entry as stored in and read back from the catalog collection."""

    name: str = Field(description="Display name")
    price: int = Field(description="Price in cents")
