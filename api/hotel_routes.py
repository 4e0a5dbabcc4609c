"""Hotel-related FastAPI routes."""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from bson.errors import InvalidDocument
from pymongo.errors import PyMongoError

from Database.deps import get_db, get_price_index
from Database.indexes import DynamicIndex
from Hotels.queries import (
    DispatchOutcome,
    HotelQueryDispatcher,
    plan_compound,
    plan_dynamic,
    plan_single_field,
    plan_text,
)
from Hotels.structure import HotelRecord
from Hotels.validation import validate_hotel_payload

from .models import HotelCreatedResponse, MessageResponse
from .utils import _require_plan, _to_records

logger = logging.getLogger(__name__)

HOTEL_CREATED_MESSAGE = "Hotel successfully added!"
QUERY_FAILURE_DETAIL = "Unable to query hotels due to an internal error."
# driver errors plus BSON encoding failures raised before a request is sent
STORAGE_ERRORS = (PyMongoError, OverflowError, InvalidDocument)

# mount api router
hotel_router = APIRouter()


def get_dispatcher(
    db: Any = Depends(get_db),
    price_index: DynamicIndex = Depends(get_price_index),
) -> HotelQueryDispatcher:
    """Build a dispatcher bound to the shared collection and price index."""

    return HotelQueryDispatcher(db, price_index)


async def _run_query(dispatcher: HotelQueryDispatcher, outcome: DispatchOutcome) -> list[HotelRecord]:
    """
    Execute a dispatch outcome and convert the matches into records.

    Args:
        dispatcher: Dispatcher bound to the hotels collection.
        outcome: Plan or rejection produced by one of the plan builders.

    Returns:
        Matching hotels, possibly empty.

    Raises:
        HTTPException: 400 when the parameters were rejected, 500 on storage failures.
    """

    plan = _require_plan(outcome, logger)
    try:
        documents = await run_in_threadpool(dispatcher.execute, plan)
    except STORAGE_ERRORS as exc:
        logger.exception("Failed to query hotels", extra={"path": plan.path.value})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=QUERY_FAILURE_DETAIL,
        ) from exc
    return _to_records(documents)


@hotel_router.get("/health", response_model=MessageResponse)
async def health_check() -> MessageResponse:
    """Quick liveness probe for the hotel service."""

    return MessageResponse(status=status.HTTP_200_OK, message="Hotel service is healthy")


@hotel_router.post(
    "",
    response_model=HotelCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_hotel(payload: Any = Body(...), db=Depends(get_db)) -> HotelCreatedResponse:
    """
    Validate a hotel payload and add it to the collection.

    Args:
        payload: Raw JSON body; validated before anything is written.
        db: Hotels collection injected via dependency.

    Returns:
        HotelCreatedResponse with the identifier assigned by the database.
    """

    outcome = validate_hotel_payload(payload)
    if not outcome.accepted or outcome.hotel is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid hotel payload: {outcome.reason}",
        )

    document = outcome.hotel.to_dict()
    try:
        insert_result = await run_in_threadpool(lambda: db.insert_one(document))
    except STORAGE_ERRORS as exc:
        logger.exception("Failed to insert hotel", extra={"location": outcome.hotel.location})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to create hotel due to an internal error.",
        ) from exc

    created_hotel = HotelRecord(**outcome.hotel.model_dump(), _id=insert_result.inserted_id)
    logger.info(
        "Hotel created", extra={"hotel_id": created_hotel.id, "location": created_hotel.location}
    )
    return HotelCreatedResponse(message=HOTEL_CREATED_MESSAGE, _id=created_hotel.id, hotel=created_hotel)


@hotel_router.get(
    "/test-single-field",
    response_model=list[HotelRecord],
    status_code=status.HTTP_200_OK,
)
async def query_single_field(
    location: Optional[str] = None,
    dispatcher: HotelQueryDispatcher = Depends(get_dispatcher),
) -> list[HotelRecord]:
    """Hotels whose location matches exactly, served by the ``location`` index."""

    return await _run_query(dispatcher, plan_single_field(location))


@hotel_router.get(
    "/test-compound",
    response_model=list[HotelRecord],
    status_code=status.HTTP_200_OK,
)
async def query_compound(
    location: Optional[str] = None,
    price: Optional[str] = None,
    dispatcher: HotelQueryDispatcher = Depends(get_dispatcher),
) -> list[HotelRecord]:
    """Hotels matching both location and price, served by the compound index."""

    return await _run_query(dispatcher, plan_compound(location, price))


@hotel_router.get(
    "/test-text",
    response_model=list[HotelRecord],
    status_code=status.HTTP_200_OK,
)
async def query_text(
    search: Optional[str] = None,
    dispatcher: HotelQueryDispatcher = Depends(get_dispatcher),
) -> list[HotelRecord]:
    """Full-text search over name and description."""

    return await _run_query(dispatcher, plan_text(search))


@hotel_router.get(
    "/test-dynamic",
    response_model=list[HotelRecord],
    status_code=status.HTTP_200_OK,
)
async def query_dynamic(
    price: Optional[str] = None,
    op: Optional[str] = None,
    dispatcher: HotelQueryDispatcher = Depends(get_dispatcher),
) -> list[HotelRecord]:
    """
    Price range query; the price index is created on first use.

    Args:
        price: Threshold to compare against.
        op: Comparison operator, ``gt`` when omitted.
        dispatcher: Dispatcher injected via dependency.

    Returns:
        Hotels whose price satisfies the comparison.
    """

    return await _run_query(dispatcher, plan_dynamic(price, op))
