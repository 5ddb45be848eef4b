"""
Mongo Steps - MongoDB step definitions for pytest-bdd

===============================================================================
PROVENANCE TRACKING
===============================================================================
File: src/mongo_steps/__init__.py
Created: 2026-10-17
Author: Mongo Steps Contributors
Type: Package Initialization

Change History:
-------------------------------------------------------------------------------
Date        Author      Type    Description
-------------------------------------------------------------------------------
2026-10-17  Contrib     CREATE  Main package initialization with version
                                and public API exports.
-------------------------------------------------------------------------------

License: MIT
===============================================================================
"""

__version__ = "1.0.0"
__author__ = "Mongo Steps Contributors"
__license__ = "MIT"

from .config import DEFAULT_DATABASE, DatabaseConfig, ManagerConfig, build_config
from .context import ScenarioState
from .database import Database
from .errors import (
    DatabaseError,
    DocumentAssertionError,
    FileReadError,
    MongoStepsError,
    ParseError,
    UnregisteredDatabaseError,
)
from .manager import Manager

__all__ = [
    # Core
    "Manager",
    "ManagerConfig",
    "DatabaseConfig",
    "Database",
    "ScenarioState",
    "DEFAULT_DATABASE",
    "build_config",
    # Errors
    "MongoStepsError",
    "UnregisteredDatabaseError",
    "ParseError",
    "FileReadError",
    "DatabaseError",
    "DocumentAssertionError",
    "__version__",
]
