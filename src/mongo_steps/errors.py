"""
Error types raised by the MongoDB step definitions

===============================================================================
PROVENANCE TRACKING
===============================================================================
File: src/mongo_steps/errors.py
Created: 2026-10-17
Author: Mongo Steps Contributors
Type: Core Implementation

Change History:
-------------------------------------------------------------------------------
Date        Author      Type    Description
-------------------------------------------------------------------------------
2026-10-17  Contrib     CREATE  Exception hierarchy for unregistered
                                databases, parse, driver, file and
                                assertion failures.
-------------------------------------------------------------------------------

License: MIT
===============================================================================
"""

from typing import Optional


class MongoStepsError(Exception):
    """Base class for all errors raised by mongo_steps"""


class UnregisteredDatabaseError(MongoStepsError):
    """A step referenced a database name that was never registered"""

    def __init__(self, name: str):
        super().__init__(f'mongo database "{name}" is not registered to the manager')
        self.name = name


class ParseError(MongoStepsError):
    """Extended JSON payload could not be decoded"""


class FileReadError(MongoStepsError):
    """Fixture file is missing or unreadable"""

    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path


class DatabaseError(MongoStepsError):
    """
    Wraps a driver failure.

    The message names the operation and the collection, followed by the
    driver's own message, e.g.
    ``could not truncate collection "customer": command failed``.
    """

    def __init__(self, operation: str, collection: str, cause: Optional[BaseException] = None):
        message = f'could not {operation} collection "{collection}"'
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.operation = operation
        self.collection = collection
        self.cause = cause


class DocumentAssertionError(MongoStepsError, AssertionError):
    """Count mismatch, missing search result or document diff"""
