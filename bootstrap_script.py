from __future__ import annotations

import argparse
import logging
from typing import Any, Optional, Sequence

from Database.db import HotelDB
from Database.indexes import PRICE_INDEX, DynamicIndex, apply_declared_indexes


LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line options for the index bootstrap."""

    parser = argparse.ArgumentParser(description="Create the indexes of the hotels collection.")
    parser.add_argument(
        "--with-dynamic",
        action="store_true",
        help="Also create the price index normally created on the first dynamic query.",
    )
    return parser.parse_args(argv)


def bootstrap_indexes(collection: Any, with_dynamic: bool = False) -> list[str]:
    """Apply the declared indexes and, optionally, the dynamic price index.

    Args:
        collection: pymongo collection holding hotel documents.
        with_dynamic: Whether to create the price index up front.

    Returns:
        Names of all indexes present on the collection afterwards.
    """

    apply_declared_indexes(collection)
    if with_dynamic:
        DynamicIndex(PRICE_INDEX).ensure(collection)
    return sorted(collection.index_information())


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Entry point that orchestrates configuration loading and index creation."""

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    args = parse_args(argv)

    LOGGER.info("Connecting to MongoDB.")
    hotel_db = HotelDB()
    try:
        present = bootstrap_indexes(hotel_db.collection, with_dynamic=args.with_dynamic)
    finally:
        hotel_db.close()
    LOGGER.info("Indexes present: %s", ", ".join(present))


if __name__ == "__main__":
    main()
