"""
Unit tests for the pytest plugin hooks

===============================================================================
PROVENANCE TRACKING
===============================================================================
File: tests/unit/test_plugin.py
Created: 2026-10-17
Author: Mongo Steps Contributors
Type: Unit Test Suite

Change History:
-------------------------------------------------------------------------------
Date        Author      Type    Description
-------------------------------------------------------------------------------
2026-10-17  Contrib     CREATE  Tests for the after-scenario clean-up hook.
2026-10-17  Contrib     UPDATE  Scenarios without MongoDB steps are cleaned
                                up as well.
-------------------------------------------------------------------------------

License: MIT
===============================================================================
"""

from unittest.mock import MagicMock

import pytest
from pymongo.errors import PyMongoError

from mongo_steps import DatabaseError, Manager, ManagerConfig
from mongo_steps.plugin import pytest_bdd_after_scenario


def make_request(fixtures):
    """Mock request resolving only the given fixtures"""
    request = MagicMock()

    def getfixturevalue(name):
        if name not in fixtures:
            raise pytest.FixtureLookupError(name, request)
        return fixtures[name]

    request.fixturenames = []
    request.getfixturevalue.side_effect = getfixturevalue
    return request


class TestAfterScenario:
    """Tests for pytest_bdd_after_scenario"""

    def test_cleans_up_after_mongo_scenario(self, mock_db, mock_collection, state):
        manager = Manager(ManagerConfig().with_default_database(mock_db, ["customer"]))
        request = make_request({"mongo_manager": manager, "mongo_scenario": state})
        request.fixturenames = ["mongo_manager", "mongo_scenario"]

        pytest_bdd_after_scenario(request, MagicMock(), MagicMock())

        mock_collection.delete_many.assert_called_once_with({})

    def test_cleans_up_after_scenario_without_mongo_steps(self, mock_db, mock_collection, state):
        """The scenario never requested the manager, it is still cleaned up"""
        manager = Manager(ManagerConfig().with_default_database(mock_db, ["customer"]))
        request = make_request({"mongo_manager": manager, "mongo_scenario": state})

        pytest_bdd_after_scenario(request, MagicMock(), MagicMock())

        assert "mongo_manager" not in request.fixturenames
        mock_collection.delete_many.assert_called_once_with({})

    def test_skips_suites_without_manager(self):
        request = make_request({})

        pytest_bdd_after_scenario(request, MagicMock(), MagicMock())

        request.getfixturevalue.assert_called_once_with("mongo_manager")

    def test_clean_up_failure_is_raised(self, mock_db, mock_collection, state):
        mock_collection.delete_many.side_effect = PyMongoError("command failed")
        manager = Manager(ManagerConfig().with_default_database(mock_db, ["customer"]))
        request = make_request({"mongo_manager": manager, "mongo_scenario": state})

        with pytest.raises(DatabaseError, match='^could not truncate collection "customer": command failed$'):
            pytest_bdd_after_scenario(request, MagicMock(), MagicMock())
