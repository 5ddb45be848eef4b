"""
pytest configuration and fixtures for unit and BDD tests

===============================================================================
PROVENANCE TRACKING
===============================================================================
File: tests/conftest.py
Created: 2026-10-17
Author: Mongo Steps Contributors
Type: Test Configuration

Change History:
-------------------------------------------------------------------------------
Date        Author      Type    Description
-------------------------------------------------------------------------------
2026-10-17  Contrib     CREATE  Mock pymongo fixtures for unit tests and a
                                MongoDB backed manager for the scenarios.
-------------------------------------------------------------------------------

License: MIT
===============================================================================
"""

import logging
import os
from pathlib import Path
from typing import Dict, List
from unittest.mock import MagicMock

import pytest
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from mongo_steps import Manager, ManagerConfig, ScenarioState

logger = logging.getLogger(__name__)

RESOURCES_DIR = Path(__file__).parent / "resources"
FIXTURES_DIR = RESOURCES_DIR / "fixtures"


# =============================================================================
# Test Data Fixtures
# =============================================================================

@pytest.fixture
def resources_dir() -> Path:
    """Directory fixture file paths are resolved against"""
    return RESOURCES_DIR


@pytest.fixture
def customers_json() -> str:
    """Raw extended JSON of the customers fixture file"""
    return (FIXTURES_DIR / "customers.json").read_text(encoding="utf-8")


# =============================================================================
# Mock pymongo Fixtures
# =============================================================================

def make_cursor(docs: List[Dict]) -> MagicMock:
    """Mock pymongo cursor yielding docs"""
    cursor = MagicMock()
    cursor.__iter__.return_value = iter(docs)
    return cursor


@pytest.fixture
def mock_collection() -> MagicMock:
    """Mock pymongo collection, every call succeeds with an empty result"""
    collection = MagicMock()
    collection.find.return_value = make_cursor([])
    collection.count_documents.return_value = 0
    return collection


@pytest.fixture
def mock_db(mock_collection) -> MagicMock:
    """Mock pymongo database returning mock_collection for any name"""
    db = MagicMock()
    db.name = "db"
    db.__getitem__.return_value = mock_collection
    return db


@pytest.fixture
def manager(mock_db, resources_dir) -> Manager:
    """Manager with the mock database registered as default"""
    return Manager(ManagerConfig(base_path=resources_dir).with_default_database(mock_db))


@pytest.fixture
def state() -> ScenarioState:
    """Fresh scenario state"""
    return ScenarioState()


# =============================================================================
# MongoDB Fixtures (BDD scenarios)
# =============================================================================

@pytest.fixture(scope="session")
def mongo_client():
    """
    MongoDB client for the scenario suite.

    Uses MONGO_URI when set, otherwise starts mongo:<MONGO_VERSION> with
    testcontainers. Skips when neither is available.
    """
    uri = os.environ.get("MONGO_URI")
    container = None

    if not uri:
        from docker.errors import DockerException
        from testcontainers.mongodb import MongoDbContainer

        version = os.environ.get("MONGO_VERSION", "4.4")
        logger.info(f"Starting mongo:{version} container")

        try:
            container = MongoDbContainer(f"mongo:{version}")
            container.start()
        except DockerException as e:
            pytest.skip(f"MongoDB is not available: {e}")

        uri = container.get_connection_url()

    client = MongoClient(uri, serverSelectionTimeoutMS=5000)
    try:
        client.admin.command("ping")
    except PyMongoError as e:
        client.close()
        if container is not None:
            container.stop()
        pytest.skip(f"MongoDB is not available: {e}")

    yield client

    client.close()
    if container is not None:
        container.stop()


@pytest.fixture(scope="session")
def mongo_manager(mongo_client) -> Manager:
    """Manager used by the step definitions of the scenario suite"""
    config = (
        ManagerConfig(base_path=RESOURCES_DIR, timeout=30)
        .with_default_database(mongo_client["default_db"], ["customer"])
        .with_database("other", mongo_client["other_db"], ["customer"])
    )
    return Manager(config)
