"""Dog records returned by the /dogs endpoint."""

from datetime import datetime
from decimal import Decimal
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError


class Dog(BaseModel):
    """
    A dog listed for sale.

    Field names follow Python conventions; the aliases are the JSON keys
    the API sends. Dates accept ISO-8601 strings or Unix seconds.
    """

    id: str
    seller_id: str = Field(alias="sellerID")
    about: str
    birthday: datetime
    breed: str
    breeder_rating: float = Field(alias="breederRating")
    cost: Decimal
    created: datetime
    image_url: str = Field(alias="imageURL")
    name: str

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


_DOG_LIST = TypeAdapter(list[Dog])


def decode_dogs(data: Union[bytes, str]) -> list[Dog]:
    """
    Decode a JSON array of dogs.

    Decoding is all-or-nothing: one invalid element fails the whole list.

    Raises:
        ValidationError: On malformed JSON or any missing/invalid field
    """
    return _DOG_LIST.validate_json(data)


def decode_error_category(error: BaseException) -> tuple[str, tuple[str, ...]]:
    """
    Return a comparable category for a decode failure.

    Two failures share a category when they have the same exception type and
    the same set of pydantic error types ("missing", "json_invalid", ...).
    Messages and locations are not part of the category.
    """
    if isinstance(error, ValidationError):
        return type(error).__name__, tuple(sorted({str(e["type"]) for e in error.errors()}))
    return type(error).__name__, ()
