"""
pytest plugin - registers the MongoDB steps with pytest-bdd

===============================================================================
PROVENANCE TRACKING
===============================================================================
File: src/mongo_steps/plugin.py
Created: 2026-10-17
Author: Mongo Steps Contributors
Type: pytest Plugin

Change History:
-------------------------------------------------------------------------------
Date        Author      Type    Description
-------------------------------------------------------------------------------
2026-10-17  Contrib     CREATE  Step registration, per-scenario state fixture
                                and after-scenario clean-up hook.
2026-10-17  Contrib     UPDATE  Clean up after every scenario, not only
                                the ones that requested the manager.
-------------------------------------------------------------------------------

License: MIT

Loaded through the "pytest11" entry point. The test suite provides the
manager:

    @pytest.fixture(scope="session")
    def mongo_manager(mongo_client):
        return Manager(
            ManagerConfig(base_path="tests/resources")
            .with_default_database(mongo_client["app"], ["customer"])
        )
===============================================================================
"""

import logging

import pytest

from .context import ScenarioState
from .steps import register_steps

logger = logging.getLogger(__name__)

MANAGER_FIXTURE = "mongo_manager"
SCENARIO_FIXTURE = "mongo_scenario"

register_steps()


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def mongo_scenario(mongo_manager) -> ScenarioState:
    """Fresh scenario state, holds the last search result"""
    return mongo_manager.new_scenario()


# =============================================================================
# pytest-bdd Hooks
# =============================================================================

def pytest_bdd_after_scenario(request, feature, scenario):
    """
    Truncate the clean-up collections after every scenario.

    Runs whether or not the scenario used a MongoDB step. Suites that do
    not define the manager fixture are left alone.
    """
    try:
        manager = request.getfixturevalue(MANAGER_FIXTURE)
    except pytest.FixtureLookupError:
        return

    manager.clean_up(request.getfixturevalue(SCENARIO_FIXTURE))
    logger.debug(f"Cleaned up after scenario {scenario.name!r}")


def pytest_bdd_step_error(request, feature, scenario, step, step_func, step_func_args, exception):
    """Log step errors for debugging"""
    logger.error(f"Step failed: {step.keyword} {step.name} ({scenario.name!r}): {exception}")
