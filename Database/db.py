'''
This file contains the database configuration for the Hotel Index API.
'''
from typing import Any, Optional
import os

from dotenv import load_dotenv
from pymongo import MongoClient
from pymongo.collection import Collection

DEFAULT_DB_NAME = "hotel_index"
DEFAULT_COLLECTION_NAME = "hotels"
DEFAULT_TIMEOUT_MS = 5000


class HotelDB:
    """Database Client"""

    # private interface
    def __init__(self):
        load_dotenv()
        uri: Optional[str] = os.environ.get("MONGODB_URI")
        if uri is None:
            raise ValueError("Database URI not found in environment variables.")
        db_name = os.environ.get("MONGODB_DB_NAME", DEFAULT_DB_NAME)
        collection_name = os.environ.get("MONGODB_COLLECTION", DEFAULT_COLLECTION_NAME)
        timeout_ms = int(os.environ.get("MONGODB_TIMEOUT_MS", DEFAULT_TIMEOUT_MS))

        self.client: MongoClient[dict[str, Any]] = MongoClient(uri, serverSelectionTimeoutMS=timeout_ms)
        self.collection: Collection[dict[str, Any]] = self.client[db_name][collection_name]

    # public interface
    def close(self) -> None:
        """Release the pooled connections held by the client."""
        self.client.close()


if __name__ == "__main__":
    db_conn = HotelDB()

    _ = list(db_conn.collection.find().limit(5))
    print(_)
    db_conn.close()
