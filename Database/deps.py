'''
FastAPI dependencies exposing the storage handles created at startup.
'''
from typing import Any

from fastapi import Request

from Database.indexes import DynamicIndex


def get_db(request: Request) -> Any:
    """Return the hotels collection stored on the application state."""
    return request.app.state.db


def get_price_index(request: Request) -> DynamicIndex:
    """Return the lazily created price index guard shared by all requests."""
    return request.app.state.price_index
