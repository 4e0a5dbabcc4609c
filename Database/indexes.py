'''
Index declarations for the hotels collection.

The declared indexes are infrastructure metadata: they are applied once when the
application (or the bootstrap script) starts, never per request. The price index
is the exception, it is created lazily by the dynamic query path.
'''

import logging
import threading
import time
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict
from pymongo import ASCENDING, TEXT, IndexModel

logger = logging.getLogger(__name__)

IndexKey = list[tuple[str, Union[int, str]]]

DEFAULT_RECHECK_SECONDS = 300.0


class IndexDeclaration(BaseModel):
    """Name and ordered key list of a collection index."""

    model_config = ConfigDict(frozen=True)

    name: str
    keys: IndexKey

    def to_index_model(self) -> IndexModel:
        return IndexModel(self.keys, name=self.name)


LOCATION_INDEX = IndexDeclaration(name="location_1", keys=[("location", ASCENDING)])
LOCATION_PRICE_INDEX = IndexDeclaration(
    name="location_1_price_1",
    keys=[("location", ASCENDING), ("price", ASCENDING)],
)
NAME_DESCRIPTION_TEXT_INDEX = IndexDeclaration(
    name="name_text_description_text",
    keys=[("name", TEXT), ("description", TEXT)],
)
PRICE_INDEX = IndexDeclaration(name="price_1", keys=[("price", ASCENDING)])

DECLARED_INDEXES: tuple[IndexDeclaration, ...] = (
    LOCATION_INDEX,
    LOCATION_PRICE_INDEX,
    NAME_DESCRIPTION_TEXT_INDEX,
)


def apply_declared_indexes(collection: Any) -> list[str]:
    """
    Create every declared index on the collection.

    MongoDB treats re-creating an identical index as a no-op, so this is safe to
    run on every startup.

    Args:
        collection: pymongo collection holding hotel documents.

    Returns:
        Names of the declared indexes.
    """

    names = collection.create_indexes([index.to_index_model() for index in DECLARED_INDEXES])
    logger.info("Declared indexes applied", extra={"indexes": names})
    return names


def _normalize_key(key: Any) -> list[tuple[str, Any]]:
    return [(str(field), direction) for field, direction in key]


def index_exists(collection: Any, declaration: IndexDeclaration) -> bool:
    """Check the collection's index metadata for an index with the same key."""

    wanted = _normalize_key(declaration.keys)
    for info in collection.index_information().values():
        if _normalize_key(info["key"]) == wanted:
            return True
    return False


class DynamicIndex:
    """
    Index created on demand the first time a query path needs it.

    ``ensure`` checks the existing index metadata before creating anything and
    serializes first calls behind a lock, so concurrent requests never issue
    duplicate definitions. Once the index is known to exist the metadata check
    is skipped for ``recheck_seconds``; after that it runs again, so an index
    dropped out of band is recreated on the next dynamic query.
    """

    def __init__(self, declaration: IndexDeclaration, recheck_seconds: float = DEFAULT_RECHECK_SECONDS) -> None:
        self.declaration = declaration
        self.recheck_seconds = recheck_seconds
        self._lock = threading.Lock()
        self._ensured_at: Optional[float] = None

    @property
    def ensured(self) -> bool:
        if self._ensured_at is None:
            return False
        return time.monotonic() - self._ensured_at < self.recheck_seconds

    def ensure(self, collection: Any) -> bool:
        """
        Make sure the index exists on the collection.

        Args:
            collection: pymongo collection holding hotel documents.

        Returns:
            True only when this call created the index.
        """

        if self.ensured:
            return False

        with self._lock:
            if self.ensured:
                return False
            if index_exists(collection, self.declaration):
                self._ensured_at = time.monotonic()
                logger.debug("Dynamic index already present", extra={"index": self.declaration.name})
                return False
            collection.create_index(self.declaration.keys, name=self.declaration.name)
            self._ensured_at = time.monotonic()

        logger.info("Dynamic index created", extra={"index": self.declaration.name})
        return True
