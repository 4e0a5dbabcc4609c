from logging import Logger
from typing import Any

from fastapi import HTTPException, status

from Hotels.queries import DispatchOutcome, QueryPlan
from Hotels.structure import HotelRecord


def _require_plan(outcome: DispatchOutcome, logger: Logger) -> QueryPlan:
    """Return the query plan, or raise a 400 when the parameters were rejected."""

    if isinstance(outcome, QueryPlan):
        return outcome
    logger.warning(
        "Invalid query parameters",
        extra={"path": outcome.path.value, "parameter": outcome.parameter},
    )
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=outcome.detail,
    )


def _to_records(documents: list[dict[str, Any]]) -> list[HotelRecord]:
    """Convert raw collection documents into response records."""

    return [HotelRecord.model_validate(document) for document in documents]
