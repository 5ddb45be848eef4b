"""
Manager configuration

===============================================================================
PROVENANCE TRACKING
===============================================================================
File: src/mongo_steps/config.py
Created: 2026-10-17
Author: Mongo Steps Contributors
Type: Core Implementation

Change History:
-------------------------------------------------------------------------------
Date        Author      Type    Description
-------------------------------------------------------------------------------
2026-10-17  Contrib     CREATE  Dataclass configuration for registered
                                databases, clean-up collections, fixture
                                base path and step timeout.
2026-10-17  Contrib     UPDATE  build_config() factory creating a
                                configuration from a plain mapping.
-------------------------------------------------------------------------------

License: MIT
===============================================================================
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from pymongo import MongoClient
from pymongo.database import Database as MongoDatabase

DEFAULT_DATABASE = "default"


@dataclass
class DatabaseConfig:
    """A database handle plus the collections to truncate after every scenario"""
    database: MongoDatabase
    clean_up_after_scenario: List[str] = field(default_factory=list)


@dataclass
class ManagerConfig:
    """
    Configuration for a Manager.

    Registrations are made once while the suite starts and are not changed
    afterwards.

    Usage:
        config = (
            ManagerConfig(base_path="tests/resources")
            .with_default_database(client["default_db"], ["customer"])
            .with_database("other", client["other_db"], ["customer"])
        )
    """
    databases: Dict[str, DatabaseConfig] = field(default_factory=dict)
    base_path: Optional[Union[str, Path]] = None
    timeout: Optional[float] = None

    def with_database(self, name: str, database: MongoDatabase,
                      clean_up_after_scenario: Optional[List[str]] = None) -> "ManagerConfig":
        """Register a named database"""
        self.databases[name] = DatabaseConfig(
            database=database,
            clean_up_after_scenario=list(clean_up_after_scenario or []),
        )
        return self

    def with_default_database(self, database: MongoDatabase,
                              clean_up_after_scenario: Optional[List[str]] = None) -> "ManagerConfig":
        """Register the database used when a step names none"""
        return self.with_database(DEFAULT_DATABASE, database, clean_up_after_scenario)


_SETTING_KEYS = {"database", "clean_up_after_scenario"}


def build_config(client: MongoClient, settings: Mapping[str, Any],
                 base_path: Optional[Union[str, Path]] = None,
                 timeout: Optional[float] = None) -> ManagerConfig:
    """
    Build a ManagerConfig from a mapping.

    Args:
        client: Connected MongoClient
        settings: Maps a registration name to either a database name or
            a dict with "database" and "clean_up_after_scenario" keys
        base_path: Directory fixture files are resolved against
        timeout: Seconds allowed for each database call of a step

    Returns:
        Configuration with one entry per registration

    Raises:
        ValueError: If a registration is malformed
    """
    config = ManagerConfig(base_path=base_path, timeout=timeout)

    for name, entry in settings.items():
        if isinstance(entry, str):
            entry = {"database": entry}

        if not isinstance(entry, Mapping):
            raise ValueError(f"Invalid settings for database {name!r}: {entry!r}")

        unknown = set(entry) - _SETTING_KEYS
        if unknown:
            raise ValueError(f"Unknown settings for database {name!r}: {', '.join(sorted(unknown))}")

        if not entry.get("database"):
            raise ValueError(f"Missing database name for {name!r}")

        collections = entry.get("clean_up_after_scenario") or []
        if isinstance(collections, str):
            collections = [collections]

        config.with_database(name, client[entry["database"]], collections)

    return config
