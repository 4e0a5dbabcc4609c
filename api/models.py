"""Shared API request and response models for the Hotel Index API."""

from pydantic import BaseModel, ConfigDict, Field

from Hotels.structure import HotelRecord


class MessageResponse(BaseModel):
    """Envelope for simple string responses."""

    status: int
    message: str


class HotelCreatedResponse(BaseModel):
    """Envelope returned after a hotel has been persisted."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    id: str = Field(alias="_id")
    hotel: HotelRecord
