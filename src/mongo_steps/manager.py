"""
Step manager - maps step operations onto registered databases

===============================================================================
PROVENANCE TRACKING
===============================================================================
File: src/mongo_steps/manager.py
Created: 2026-10-17
Author: Mongo Steps Contributors
Type: Core Implementation

Change History:
-------------------------------------------------------------------------------
Date        Author      Type    Description
-------------------------------------------------------------------------------
2026-10-17  Contrib     CREATE  Manager owning the database registrations
                                and implementing the seed, clear, search
                                and assertion operations.
2026-10-17  Contrib     UPDATE  Every database call is bounded by the
                                scenario timeout.
2026-10-17  Contrib     UPDATE  Removed the unused database_names property.
-------------------------------------------------------------------------------

License: MIT
===============================================================================
"""

from contextlib import nullcontext
from pathlib import Path
from typing import Dict, Optional, Union
import logging

import pymongo

from .compare import assert_json_equal
from .config import DEFAULT_DATABASE, ManagerConfig
from .context import ScenarioState
from .convert import parse_documents, parse_filter, read_documents_file, read_text, serialize_documents
from .database import Database
from .errors import DocumentAssertionError, ParseError, UnregisteredDatabaseError

logger = logging.getLogger(__name__)

SORT_BY_ID = [("_id", pymongo.ASCENDING)]


class Manager:
    """
    Manages all databases used by the MongoDB steps.

    The registrations come from a ManagerConfig and are read-only once the
    manager exists, so one instance can serve scenarios running in
    parallel. Scenario specific data lives in the ScenarioState passed to
    every operation.
    """

    def __init__(self, config: Optional[ManagerConfig] = None):
        self.config = config or ManagerConfig()
        self._databases: Dict[str, Database] = {
            name: Database(entry.database, entry.clean_up_after_scenario)
            for name, entry in self.config.databases.items()
        }

    def get_database(self, name: str) -> Database:
        """
        Get a registered database.

        Raises:
            UnregisteredDatabaseError: If no database was registered under name
        """
        try:
            return self._databases[name]
        except KeyError:
            raise UnregisteredDatabaseError(name) from None

    def new_scenario(self) -> ScenarioState:
        """Create the state for a new scenario"""
        return ScenarioState(timeout=self.config.timeout)

    def resolve_path(self, file_path: Union[str, Path]) -> Path:
        """Resolve a fixture path against the configured base path"""
        path = Path(file_path)
        if self.config.base_path is None or path.is_absolute():
            return path
        return Path(self.config.base_path) / path

    def _deadline(self, state: ScenarioState):
        if state.timeout is None:
            return nullcontext()
        return pymongo.timeout(state.timeout)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def clean_up(self, state: ScenarioState) -> None:
        """Truncate the clean-up collections of every registered database"""
        with self._deadline(state):
            for name, db in self._databases.items():
                db.clean_up()
                if db.clean_up_collections:
                    logger.debug(f"Cleaned up database {name!r}: {', '.join(db.clean_up_collections)}")

    # =========================================================================
    # Setup steps
    # =========================================================================

    def truncate_collection(self, state: ScenarioState, collection: str,
                            database: str = DEFAULT_DATABASE) -> None:
        """Delete all documents of a collection"""
        db = self.get_database(database)

        with self._deadline(state):
            db.truncate(collection)

    def store_documents(self, state: ScenarioState, collection: str, data: Optional[str],
                        database: str = DEFAULT_DATABASE) -> None:
        """Seed a collection with documents given as extended JSON"""
        db = self.get_database(database)

        try:
            docs = parse_documents(data)
        except ParseError as e:
            raise ParseError(f"failed to parse documents: {e}") from e

        with self._deadline(state):
            db.store(collection, docs)

    def store_documents_from_file(self, state: ScenarioState, file_path: Union[str, Path],
                                  collection: str, database: str = DEFAULT_DATABASE) -> None:
        """Seed a collection with documents read from a fixture file"""
        db = self.get_database(database)
        docs = read_documents_file(self.resolve_path(file_path))

        with self._deadline(state):
            db.store(collection, docs)

    def search_in_collection(self, state: ScenarioState, collection: str,
                             database: str = DEFAULT_DATABASE, query: Optional[str] = None) -> None:
        """
        Query a collection and keep the result in the scenario state.

        The result is sorted by _id and replaces any previous result. When
        the query fails the previous result is kept.
        """
        db = self.get_database(database)

        try:
            filter = parse_filter(query)
        except ParseError as e:
            raise ParseError(f"failed to parse filter: {e}") from e

        with self._deadline(state):
            result = db.find(collection, filter, sort=SORT_BY_ID, limit=0)

        logger.debug(f"Found {len(result)} document(s) in {database}.{collection}")
        state.set_documents(result)

    # =========================================================================
    # Collection assertions
    # =========================================================================

    def assert_no_documents(self, state: ScenarioState, collection: str,
                            database: str = DEFAULT_DATABASE) -> None:
        """Fail if the collection has any document"""
        db = self.get_database(database)

        with self._deadline(state):
            count = db.count(collection, {})

        if count > 0:
            raise DocumentAssertionError(f'collection "{collection}" has {count} document(s), expected none')

    def assert_document_count(self, state: ScenarioState, expected: int, collection: str,
                              database: str = DEFAULT_DATABASE) -> None:
        """Fail unless the collection has exactly the expected number of documents"""
        db = self.get_database(database)

        with self._deadline(state):
            actual = db.count(collection, {})

        if actual != expected:
            raise DocumentAssertionError(
                f'collection "{collection}" has {actual} document(s), expected {expected}'
            )

    def assert_only_these_documents(self, state: ScenarioState, collection: str, data: Optional[str],
                                    database: str = DEFAULT_DATABASE) -> None:
        """Fail unless the collection holds exactly the given documents, sorted by _id"""
        db = self.get_database(database)

        try:
            expected_docs = parse_documents(data)
        except ParseError as e:
            raise ParseError(f"failed to parse expected documents: {e}") from e

        with self._deadline(state):
            actual_docs = db.find(collection, {}, sort=SORT_BY_ID, limit=0)

        assert_json_equal(serialize_documents(expected_docs), serialize_documents(actual_docs))

    def assert_only_these_documents_from_file(self, state: ScenarioState, file_path: Union[str, Path],
                                              collection: str, database: str = DEFAULT_DATABASE) -> None:
        """Same as assert_only_these_documents with the documents read from a file"""
        data = read_text(self.resolve_path(file_path))

        self.assert_only_these_documents(state, collection, data, database)

    # =========================================================================
    # Search result assertions
    # =========================================================================

    def assert_result_count(self, state: ScenarioState, expected: int) -> None:
        """Fail unless the last search returned the expected number of documents"""
        actual = len(state.require_documents())

        if actual != expected:
            raise DocumentAssertionError(
                f"there are {actual} documents in the search result, expected {expected}"
            )

    def assert_result_documents(self, state: ScenarioState, data: Optional[str]) -> None:
        """Fail unless the last search returned exactly the given documents"""
        actual_docs = state.require_documents()

        try:
            expected_docs = parse_documents(data)
        except ParseError as e:
            raise ParseError(f"failed to parse expected documents: {e}") from e

        assert_json_equal(serialize_documents(expected_docs), serialize_documents(actual_docs))
