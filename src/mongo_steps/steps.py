"""
Step vocabulary - table of step expressions and their handlers

===============================================================================
PROVENANCE TRACKING
===============================================================================
File: src/mongo_steps/steps.py
Created: 2026-10-17
Author: Mongo Steps Contributors
Type: Core Implementation

Change History:
-------------------------------------------------------------------------------
Date        Author      Type    Description
-------------------------------------------------------------------------------
2026-10-17  Contrib     CREATE  Step definition table and pytest-bdd
                                registration for the seed, clear, search
                                and assertion steps.
-------------------------------------------------------------------------------

License: MIT

Step handlers receive the "mongo_manager" fixture (supplied by the test
suite) and the "mongo_scenario" fixture (supplied by mongo_steps.plugin).
Payloads written as a docstring below the step arrive as "docstring".
===============================================================================
"""

from dataclasses import dataclass, field
from inspect import signature
from typing import Any, Callable, Dict, Tuple
import re

from pytest_bdd import parsers, step

from .config import DEFAULT_DATABASE
from .context import ScenarioState
from .manager import Manager

# Reusable pieces of the step expressions
DOCS = r"(?:docs|documents)"
ANY_DOCS = r"(?:doc|docs|document|documents)"
COLLECTION = r'collection "(?P<collection>[^"]*)"'
OF_DATABASE = r' of database "(?P<database>[^"]*)"'
COUNT = r"(?P<count>[0-9]+)"
FILE = r'from(?: file)? "(?P<path>[^"]*)"'


# =============================================================================
# Handlers
# =============================================================================

def truncate_collection(mongo_manager: Manager, mongo_scenario: ScenarioState,
                        collection: str, database: str):
    mongo_manager.truncate_collection(mongo_scenario, collection, database)


def store_documents(mongo_manager: Manager, mongo_scenario: ScenarioState,
                    collection: str, database: str, docstring: str):
    mongo_manager.store_documents(mongo_scenario, collection, docstring, database)


def store_documents_from_file(mongo_manager: Manager, mongo_scenario: ScenarioState,
                              path: str, collection: str, database: str):
    mongo_manager.store_documents_from_file(mongo_scenario, path, collection, database)


def search(mongo_manager: Manager, mongo_scenario: ScenarioState,
           collection: str, database: str):
    mongo_manager.search_in_collection(mongo_scenario, collection, database)


def search_with_query(mongo_manager: Manager, mongo_scenario: ScenarioState,
                      collection: str, database: str, docstring: str):
    mongo_manager.search_in_collection(mongo_scenario, collection, database, docstring)


def no_documents_available(mongo_manager: Manager, mongo_scenario: ScenarioState,
                           collection: str, database: str):
    mongo_manager.assert_no_documents(mongo_scenario, collection, database)


def number_of_documents_available(mongo_manager: Manager, mongo_scenario: ScenarioState,
                                  count: int, collection: str, database: str):
    mongo_manager.assert_document_count(mongo_scenario, count, collection, database)


def only_these_documents_available(mongo_manager: Manager, mongo_scenario: ScenarioState,
                                   collection: str, database: str, docstring: str):
    mongo_manager.assert_only_these_documents(mongo_scenario, collection, docstring, database)


def only_these_documents_from_file_available(mongo_manager: Manager, mongo_scenario: ScenarioState,
                                             path: str, collection: str, database: str):
    mongo_manager.assert_only_these_documents_from_file(mongo_scenario, path, collection, database)


def number_of_documents_in_result(mongo_manager: Manager, mongo_scenario: ScenarioState, count: int):
    mongo_manager.assert_result_count(mongo_scenario, count)


def documents_in_result(mongo_manager: Manager, mongo_scenario: ScenarioState, docstring: str):
    mongo_manager.assert_result_documents(mongo_scenario, docstring)


# =============================================================================
# Step Table
# =============================================================================

@dataclass(frozen=True)
class StepDefinition:
    """
    One entry of the step vocabulary.

    Expressions are unanchored at the start, anchored at the end, and use
    named groups for the handler arguments. Arguments listed in defaults
    are not part of the expression and are bound before the call.
    """
    expression: str
    handler: Callable[..., Any]
    defaults: Dict[str, Any] = field(default_factory=dict)
    converters: Dict[str, Callable[[str], Any]] = field(default_factory=dict)

    @property
    def pattern(self) -> "re.Pattern[str]":
        return re.compile(r".*?" + self.expression)

    def matches(self, text: str) -> bool:
        return self.pattern.fullmatch(text) is not None

    def bind(self) -> Callable[..., Any]:
        """
        Build the step function handed to pytest-bdd.

        pytest-bdd reads the function signature to decide which arguments
        come from the expression and which are fixtures, so the bound
        arguments are removed from it.
        """
        handler = self.handler
        defaults = self.defaults
        handler_signature = signature(handler)

        def step_function(**kwargs):
            return handler(**kwargs, **defaults)

        step_function.__name__ = handler.__name__
        step_function.__qualname__ = handler.__qualname__
        step_function.__doc__ = handler.__doc__
        step_function.__signature__ = handler_signature.replace(
            parameters=[p for name, p in handler_signature.parameters.items() if name not in defaults]
        )
        return step_function


_DEFAULT = {"database": DEFAULT_DATABASE}
_INT_COUNT = {"count": int}

STEP_DEFINITIONS: Tuple[StepDefinition, ...] = (
    # Setup, default database
    StepDefinition(rf"no {DOCS} in {COLLECTION}$", truncate_collection, _DEFAULT),
    StepDefinition(rf"these {DOCS} are(?: stored)? in {COLLECTION}[:]?$", store_documents, _DEFAULT),
    StepDefinition(rf"{DOCS} {FILE} are(?: stored)? in {COLLECTION}$", store_documents_from_file, _DEFAULT),
    StepDefinition(rf"(?:search|find) in {COLLECTION}$", search, _DEFAULT),
    StepDefinition(rf"(?:search|find) in {COLLECTION} with query[:]?$", search_with_query, _DEFAULT),

    # Setup, named database
    StepDefinition(rf"no {DOCS} in {COLLECTION}{OF_DATABASE}$", truncate_collection),
    StepDefinition(rf"these {DOCS} are(?: stored)? in {COLLECTION}{OF_DATABASE}[:]?$", store_documents),
    StepDefinition(rf"{DOCS} {FILE} are(?: stored)? in {COLLECTION}{OF_DATABASE}[:]?$", store_documents_from_file),
    StepDefinition(rf"(?:search|find) in {COLLECTION}{OF_DATABASE} with query[:]?$", search_with_query),
    StepDefinition(rf"(?:search|find) in {COLLECTION}{OF_DATABASE}$", search),

    # Assertions, default database
    StepDefinition(rf"no {DOCS} are(?: available)? in {COLLECTION}$", no_documents_available, _DEFAULT),
    StepDefinition(
        rf"there (?:is|are) {COUNT} {ANY_DOCS}(?: available)? in {COLLECTION}$",
        number_of_documents_available, _DEFAULT, _INT_COUNT,
    ),
    StepDefinition(
        rf"{COLLECTION} should have {COUNT} {ANY_DOCS}(?: available)?$",
        number_of_documents_available, _DEFAULT, _INT_COUNT,
    ),
    StepDefinition(
        rf"there (?:is|are) only (?:this|these) {ANY_DOCS}(?: available)? in {COLLECTION}[:]?$",
        only_these_documents_available, _DEFAULT,
    ),
    StepDefinition(
        rf"{COLLECTION} should have only (?:this|these) {ANY_DOCS}(?: available)?[:]?$",
        only_these_documents_available, _DEFAULT,
    ),
    StepDefinition(
        rf"there (?:is|are) only (?:this|these) {ANY_DOCS} {FILE}(?: available)? in {COLLECTION}[:]?$",
        only_these_documents_from_file_available, _DEFAULT,
    ),

    # Assertions, named database
    StepDefinition(rf"no {DOCS} are(?: available)? in {COLLECTION}{OF_DATABASE}$", no_documents_available),
    StepDefinition(
        rf"there (?:is|are) {COUNT} {ANY_DOCS}(?: available)? in {COLLECTION}{OF_DATABASE}$",
        number_of_documents_available, converters=_INT_COUNT,
    ),
    StepDefinition(
        rf"there (?:is|are) only (?:this|these) {ANY_DOCS}(?: available)? in {COLLECTION}{OF_DATABASE}[:]?$",
        only_these_documents_available,
    ),
    StepDefinition(
        rf"{COLLECTION}{OF_DATABASE} should have only (?:this|these) {ANY_DOCS}(?: available)?[:]?$",
        only_these_documents_available,
    ),
    StepDefinition(
        rf"there (?:is|are) only (?:this|these) {ANY_DOCS} {FILE}(?: available)? in {COLLECTION}{OF_DATABASE}[:]?$",
        only_these_documents_from_file_available,
    ),
    StepDefinition(
        rf"{COLLECTION}{OF_DATABASE} should have {COUNT} {ANY_DOCS}(?: available)?$",
        number_of_documents_available, converters=_INT_COUNT,
    ),

    # Search result
    StepDefinition(rf"found {COUNT} {ANY_DOCS} in the result$", number_of_documents_in_result, converters=_INT_COUNT),
    StepDefinition(
        rf"there (?:is|are) {COUNT} {ANY_DOCS} in the result$",
        number_of_documents_in_result, converters=_INT_COUNT,
    ),
    StepDefinition(rf"found (?:this|these) {ANY_DOCS} in the result[:]?$", documents_in_result),
    StepDefinition(rf"(?:this|these) {ANY_DOCS} (?:is|are) in the result[:]?$", documents_in_result),
)


def find_step(text: str) -> StepDefinition:
    """
    Return the definition matching a step text.

    Raises:
        LookupError: If no definition matches
    """
    for definition in STEP_DEFINITIONS:
        if definition.matches(text):
            return definition
    raise LookupError(f"No MongoDB step matches {text!r}")


def register_steps(stacklevel: int = 1) -> None:
    """
    Register every step definition with pytest-bdd.

    pytest-bdd stores the step fixtures in the module calling this
    function, which must be a conftest.py or a pytest plugin module.
    Steps are registered keyword agnostic, so they work after Given,
    When, Then, And and But.
    """
    for definition in STEP_DEFINITIONS:
        step(
            parsers.re(r".*?" + definition.expression),
            converters=definition.converters,
            stacklevel=stacklevel + 1,
        )(definition.bind())
