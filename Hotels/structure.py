'''
Structure class implementation for Hotels module.
'''
import math
from typing import Any, Optional, Union

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator

# BSON stores integers as signed 64-bit values
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class HotelDraft(BaseModel):
    """Hotel payload accepted for persistence, before an id is assigned."""

    name : str
    location : str
    price : Union[int, float]
    rooms : int
    description : Optional[str] = None

    @field_validator("name", "location")
    @classmethod
    def not_blank(cls, value: str) -> str:
        """
        Trim and reject blank text fields.

        Args:
            value: Raw string value.

        Returns:
            The stripped string.

        Raises:
            ValueError: If nothing is left after trimming.
        """
        stripped = value.strip()
        if not stripped:
            raise ValueError("must be a non-empty string")
        return stripped

    @field_validator("price", "rooms", mode="before")
    @classmethod
    def reject_booleans(cls, value: Any) -> Any:
        """Refuse JSON booleans, which would otherwise coerce to 0 or 1."""
        if isinstance(value, bool):
            raise ValueError("must be a number")
        return value

    @field_validator("price")
    @classmethod
    def validate_price(cls, value: Union[int, float]) -> Union[int, float]:
        # enforce a finite, non-negative price
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError("must be a finite number")
        if isinstance(value, int) and value > INT64_MAX:
            raise ValueError("must fit in a 64-bit integer")
        if value < 0:
            raise ValueError("must be non-negative")
        return value

    @field_validator("rooms")
    @classmethod
    def validate_rooms(cls, value: int) -> int:
        """Rooms must be a non-negative count that fits in a 64-bit integer."""
        if value < 0:
            raise ValueError("must be non-negative")
        if value > INT64_MAX:
            raise ValueError("must fit in a 64-bit integer")
        return value

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize the hotel into a document ready for insertion.

        Returns:
            dict[str, Any]: Mapping without an ``_id`` key, so the storage layer assigns one.
        """
        document: dict[str, Any] = {
            "name": self.name,
            "location": self.location,
            "price": self.price,
            "rooms": self.rooms,
        }
        if self.description is not None:
            document["description"] = self.description
        return document


class HotelRecord(HotelDraft):
    """Persisted hotel, as read back from the collection."""

    model_config = ConfigDict(populate_by_name=True)

    id : str = Field(alias="_id", frozen=True)

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, value: Any) -> str:
        if isinstance(value, ObjectId):
            return str(value)
        return value
