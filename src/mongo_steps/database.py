"""
MongoDB database wrapper used by the step manager

===============================================================================
PROVENANCE TRACKING
===============================================================================
File: src/mongo_steps/database.py
Created: 2026-10-17
Author: Mongo Steps Contributors
Type: Core Implementation

Change History:
-------------------------------------------------------------------------------
Date        Author      Type    Description
-------------------------------------------------------------------------------
2026-10-17  Contrib     CREATE  pymongo wrapper for find, insert, count,
                                truncate and after-scenario clean-up.
-------------------------------------------------------------------------------

License: MIT
===============================================================================
"""

from contextlib import suppress
from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging

from pymongo.database import Database as MongoDatabase
from pymongo.errors import PyMongoError

from .errors import DatabaseError

logger = logging.getLogger(__name__)

Document = Dict[str, Any]
SortSpec = Sequence[Tuple[str, int]]


class Database:
    """
    Wrapper around one logical MongoDB database.

    Every driver failure is re-raised as DatabaseError naming the
    collection, the driver message is kept as is.

    Usage:
        db = Database(client["app"], clean_up_collections=["customer"])
        db.store("customer", [{"name": "John"}])
        db.count("customer", {})  # 1
        db.clean_up()
    """

    def __init__(self, conn: MongoDatabase, clean_up_collections: Optional[List[str]] = None):
        """
        Initialize the wrapper.

        Args:
            conn: pymongo database handle, connections are managed by the caller
            clean_up_collections: Collections truncated by clean_up()
        """
        self.conn = conn
        self.clean_up_collections = list(clean_up_collections or [])

    @property
    def name(self) -> str:
        return self.conn.name

    def clean_up(self) -> None:
        """Truncate every clean-up collection, stopping at the first failure"""
        for collection in self.clean_up_collections:
            self.truncate(collection)

    def find(self, collection: str, filter: Optional[Document] = None,
             sort: Optional[SortSpec] = None, limit: int = 0) -> List[Document]:
        """Return the documents in the collection that match the filter"""
        logger.debug(f"Finding documents in {self.name}.{collection}: filter={filter} sort={sort} limit={limit}")

        try:
            cursor = self.conn[collection].find(filter or {}, sort=sort, limit=limit)
        except PyMongoError as e:
            raise DatabaseError("find documents in", collection, e) from e

        try:
            return list(cursor)
        except PyMongoError as e:
            raise DatabaseError("find documents in", collection, e) from e
        finally:
            with suppress(PyMongoError):
                cursor.close()

    def truncate(self, collection: str) -> None:
        """Delete all the documents in the collection"""
        try:
            result = self.conn[collection].delete_many({})
        except PyMongoError as e:
            raise DatabaseError("truncate", collection, e) from e

        logger.info(f"Truncated {self.name}.{collection} ({getattr(result, 'deleted_count', 0)} deleted)")

    def store(self, collection: str, docs: List[Document]) -> None:
        """
        Insert documents into the collection.

        An empty list is passed to the driver unchanged, which rejects it.
        """
        try:
            self.conn[collection].insert_many(docs)
        except (PyMongoError, TypeError) as e:
            raise DatabaseError("insert documents into", collection, e) from e

        logger.info(f"Stored {len(docs)} document(s) in {self.name}.{collection}")

    def count(self, collection: str, filter: Optional[Document] = None) -> int:
        """Count the documents in the collection that match the filter"""
        try:
            return self.conn[collection].count_documents(filter or {})
        except PyMongoError as e:
            raise DatabaseError("count documents in", collection, e) from e
