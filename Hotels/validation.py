"""Validation of incoming hotel payloads before they reach the collection."""

import logging
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from Hotels.structure import HotelDraft

logger = logging.getLogger(__name__)


class FieldError(BaseModel):
    """A single reason a payload was rejected."""

    field: str
    message: str


class ValidationOutcome(BaseModel):
    """Result of validating a hotel payload: either a draft or a list of errors."""

    hotel: Optional[HotelDraft] = None
    errors: list[FieldError] = []

    @property
    def accepted(self) -> bool:
        return self.hotel is not None and not self.errors

    @property
    def reason(self) -> str:
        return "; ".join(f"{error.field}: {error.message}" for error in self.errors)


def _field_errors(exc: ValidationError) -> list[FieldError]:
    errors = []
    for error in exc.errors():
        # union members report nested locations, e.g. ("price", "float")
        field = str(error["loc"][0]) if error["loc"] else "payload"
        message = error["msg"]
        if error["type"] == "missing":
            message = "field is required"
        if any(existing.field == field for existing in errors):
            continue
        errors.append(FieldError(field=field, message=message))
    return errors


def validate_hotel_payload(payload: Any) -> ValidationOutcome:
    """
    Check a decoded JSON payload against the hotel rules.

    Required text fields are trimmed and must be non-empty strings; ``price``
    and ``rooms`` are required and numeric strings are coerced. Unknown keys,
    including any client supplied ``_id``, are dropped.

    Args:
        payload: Decoded request body.

    Returns:
        ValidationOutcome carrying the normalized draft or the rejection reasons.
    """

    if not isinstance(payload, dict):
        return ValidationOutcome(
            errors=[FieldError(field="payload", message="must be a JSON object")]
        )

    try:
        hotel = HotelDraft.model_validate(payload)
    except ValidationError as exc:
        outcome = ValidationOutcome(errors=_field_errors(exc))
        logger.warning("Hotel payload rejected", extra={"reason": outcome.reason})
        return outcome

    return ValidationOutcome(hotel=hotel)
