"""
Query routing for the hotels collection.

Each index-backed query path has a pure builder that turns request parameters
into either a ``QueryPlan`` (the filter to run) or a ``QueryRejection`` (why
the parameters cannot be served). ``HotelQueryDispatcher`` runs plans against
the injected collection.
"""

import logging
import math
import re
import time
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel

from Database.indexes import DynamicIndex
from Hotels.structure import INT64_MAX, INT64_MIN

logger = logging.getLogger(__name__)


class QueryPath(str, Enum):
    SINGLE_FIELD = "single_field"
    COMPOUND = "compound"
    TEXT = "text"
    DYNAMIC = "dynamic"


COMPARISON_OPERATORS = {
    "gt": "$gt",
    "gte": "$gte",
    "lt": "$lt",
    "lte": "$lte",
}


class QueryPlan(BaseModel):
    """Filter selected for one of the index-backed query paths."""

    path: QueryPath
    filter: dict[str, Any]


class QueryRejection(BaseModel):
    """Parameters that cannot be turned into a filter."""

    path: QueryPath
    parameter: str
    reason: str

    @property
    def detail(self) -> str:
        return f"Query parameter '{self.parameter}' {self.reason}."


DispatchOutcome = Union[QueryPlan, QueryRejection]

_INTEGER = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def parse_number(value: str) -> Optional[Union[int, float]]:
    """
    Parse a query string value into an int or a finite float.

    Only plain ASCII decimal notation is accepted, so digit separators and
    non-ASCII digits are refused. Integers must fit in 64 bits.

    Returns:
        The parsed number, or None when the value is not numeric.
    """

    if _INTEGER.fullmatch(value):
        integer = int(value)
        if not INT64_MIN <= integer <= INT64_MAX:
            return None
        return integer
    if not _DECIMAL.fullmatch(value):
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    return number


def plan_single_field(location: Optional[str]) -> DispatchOutcome:
    """Exact, case-sensitive match on ``location``."""

    location = _clean(location)
    if location is None:
        return QueryRejection(path=QueryPath.SINGLE_FIELD, parameter="location", reason="is required")
    return QueryPlan(path=QueryPath.SINGLE_FIELD, filter={"location": location})


def plan_compound(location: Optional[str], price: Optional[str]) -> DispatchOutcome:
    """Exact match on both ``location`` and ``price``; both are required."""

    location = _clean(location)
    price = _clean(price)
    if location is None:
        return QueryRejection(path=QueryPath.COMPOUND, parameter="location", reason="is required")
    if price is None:
        return QueryRejection(path=QueryPath.COMPOUND, parameter="price", reason="is required")
    number = parse_number(price)
    if number is None:
        return QueryRejection(path=QueryPath.COMPOUND, parameter="price", reason="must be a number")
    return QueryPlan(path=QueryPath.COMPOUND, filter={"location": location, "price": number})


def plan_text(search: Optional[str]) -> DispatchOutcome:
    """Full-text search over the name and description text index."""

    search = _clean(search)
    if search is None:
        return QueryRejection(path=QueryPath.TEXT, parameter="search", reason="is required")
    return QueryPlan(path=QueryPath.TEXT, filter={"$text": {"$search": search}})


def plan_dynamic(price: Optional[str], op: Optional[str] = None) -> DispatchOutcome:
    """
    Range comparison on ``price``.

    Args:
        price: Threshold value from the query string.
        op: One of ``gt`` (default), ``gte``, ``lt``, ``lte``.
    """

    price = _clean(price)
    op = (_clean(op) or "gt").lower()
    if price is None:
        return QueryRejection(path=QueryPath.DYNAMIC, parameter="price", reason="is required")
    number = parse_number(price)
    if number is None:
        return QueryRejection(path=QueryPath.DYNAMIC, parameter="price", reason="must be a number")
    if op not in COMPARISON_OPERATORS:
        return QueryRejection(
            path=QueryPath.DYNAMIC,
            parameter="op",
            reason=f"must be one of {', '.join(COMPARISON_OPERATORS)}",
        )
    return QueryPlan(path=QueryPath.DYNAMIC, filter={"price": {COMPARISON_OPERATORS[op]: number}})


class HotelQueryDispatcher:
    """Runs query plans against the hotels collection."""

    def __init__(self, collection: Any, price_index: DynamicIndex) -> None:
        self.collection = collection
        self.price_index = price_index

    def execute(self, plan: QueryPlan) -> list[dict[str, Any]]:
        """
        Run the plan's filter and return the matching documents.

        The dynamic path makes sure the price index exists before querying.
        Storage errors are not caught here.
        """

        if plan.path is QueryPath.DYNAMIC:
            self.price_index.ensure(self.collection)

        started = time.perf_counter()
        documents = list(self.collection.find(plan.filter))
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "Hotel query executed",
            extra={"path": plan.path.value, "matches": len(documents), "elapsed_ms": round(elapsed_ms, 3)},
        )
        return documents
