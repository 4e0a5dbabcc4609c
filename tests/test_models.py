"""Testing guidance for the hotel models and the payload validator.

Each test below exercises either the happy-path construction or the validation
errors for a specific rule. When introducing a new rule, add a test that feeds
a valid payload and one that feeds an invalid payload.
"""

from pathlib import Path
import sys

import pytest
from bson import ObjectId
from pydantic import ValidationError

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from Hotels.structure import HotelDraft, HotelRecord  # noqa: E402
from Hotels.validation import validate_hotel_payload  # noqa: E402


def _payload(**overrides):
    payload = {
        "name": "Sunset Resort",
        "location": "California",
        "price": 200,
        "rooms": 50,
        "description": "A beautiful beachfront resort.",
    }
    payload.update(overrides)
    return payload


def test_valid_payload_is_accepted_and_normalized() -> None:
    """Ensure text fields are trimmed and numbers kept as given."""
    outcome = validate_hotel_payload(_payload(name="  Sunset Resort ", location=" California"))

    assert outcome.accepted
    assert outcome.errors == []
    assert outcome.hotel is not None
    assert outcome.hotel.name == "Sunset Resort"
    assert outcome.hotel.location == "California"
    assert outcome.hotel.price == 200
    assert outcome.hotel.rooms == 50


@pytest.mark.parametrize("field", ["name", "location"])
def test_missing_required_text_field_is_rejected(field: str) -> None:
    """Ensure a payload without name or location never yields a draft."""
    payload = _payload()
    del payload[field]

    outcome = validate_hotel_payload(payload)

    assert not outcome.accepted
    assert outcome.hotel is None
    assert [error.field for error in outcome.errors] == [field]
    assert "required" in outcome.reason


@pytest.mark.parametrize("field", ["name", "location"])
@pytest.mark.parametrize("value", ["", "   ", 42, None])
def test_blank_or_non_string_text_field_is_rejected(field: str, value) -> None:
    """Ensure empty, whitespace-only and non-string values are refused."""
    outcome = validate_hotel_payload(_payload(**{field: value}))

    assert not outcome.accepted
    assert outcome.errors[0].field == field


@pytest.mark.parametrize("field", ["price", "rooms"])
def test_missing_numeric_field_is_rejected(field: str) -> None:
    payload = _payload()
    del payload[field]

    outcome = validate_hotel_payload(payload)

    assert not outcome.accepted
    assert outcome.errors[0].field == field
    assert outcome.errors[0].message == "field is required"


def test_numeric_strings_are_coerced() -> None:
    outcome = validate_hotel_payload(_payload(price="199.5", rooms="12"))

    assert outcome.accepted
    assert outcome.hotel is not None
    assert outcome.hotel.price == 199.5
    assert outcome.hotel.rooms == 12


@pytest.mark.parametrize(
    "overrides",
    [
        {"price": "cheap"},
        {"price": -1},
        {"price": True},
        {"rooms": -3},
        {"rooms": "many"},
    ],
)
def test_invalid_numbers_are_rejected(overrides) -> None:
    outcome = validate_hotel_payload(_payload(**overrides))

    assert not outcome.accepted
    assert [error.field for error in outcome.errors] == list(overrides)


def test_non_object_payload_is_rejected() -> None:
    outcome = validate_hotel_payload(["not", "a", "hotel"])

    assert not outcome.accepted
    assert outcome.errors[0].field == "payload"


def test_client_supplied_id_is_dropped() -> None:
    """Ensure the identifier is left for the storage layer to assign."""
    outcome = validate_hotel_payload(_payload(_id="forged", id="forged"))

    assert outcome.accepted
    assert outcome.hotel is not None
    assert "_id" not in outcome.hotel.to_dict()


def test_draft_to_dict_omits_missing_description() -> None:
    hotel = HotelDraft(name="Inn", location="Rome", price=80, rooms=5)

    assert hotel.to_dict() == {"name": "Inn", "location": "Rome", "price": 80, "rooms": 5}


def test_draft_rejects_non_finite_price() -> None:
    with pytest.raises(ValidationError, match="finite"):
        HotelDraft(name="Inn", location="Rome", price=float("inf"), rooms=5)


def test_record_stringifies_object_id() -> None:
    object_id = ObjectId()
    record = HotelRecord.model_validate(
        {"_id": object_id, "name": "Inn", "location": "Rome", "price": 80, "rooms": 5}
    )

    assert record.id == str(object_id)
    assert record.model_dump(by_alias=True)["_id"] == str(object_id)


@pytest.mark.parametrize("field", ["price", "rooms"])
def test_integers_beyond_64_bits_are_rejected(field: str) -> None:
    """Ensure values the database cannot encode never reach persistence."""
    outcome = validate_hotel_payload(_payload(**{field: 10 ** 20}))

    assert not outcome.accepted
    assert [error.field for error in outcome.errors] == [field]
    assert "64-bit" in outcome.reason


def test_largest_64_bit_price_is_accepted() -> None:
    outcome = validate_hotel_payload(_payload(price=2 ** 63 - 1))

    assert outcome.accepted
