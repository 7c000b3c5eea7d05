from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Document(BaseModel):
    """Base class for models persisted as MongoDB documents.

    The store assigns the ``_id`` key on insert; it is exposed as an opaque
    string and serialized under its document name.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = Field(
        default=None,
        alias="_id",
        description="Store-assigned identifier",
    )

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_object_id(cls, value: object) -> object:
        if isinstance(value, ObjectId):
            return str(value)
        return value
