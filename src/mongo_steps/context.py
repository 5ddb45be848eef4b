"""
Per-scenario state shared between steps

===============================================================================
PROVENANCE TRACKING
===============================================================================
File: src/mongo_steps/context.py
Created: 2026-10-17
Author: Mongo Steps Contributors
Type: Core Implementation

Change History:
-------------------------------------------------------------------------------
Date        Author      Type    Description
-------------------------------------------------------------------------------
2026-10-17  Contrib     CREATE  Scenario state carrying the last search
                                result and the step timeout.
-------------------------------------------------------------------------------

License: MIT
===============================================================================
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .errors import DocumentAssertionError


@dataclass
class ScenarioState:
    """
    State owned by a single scenario.

    A new instance is created for every scenario, so a search result never
    leaks into the next one.
    """
    documents: Optional[List[Dict[str, Any]]] = None
    timeout: Optional[float] = None  # seconds, None means no bound

    def set_documents(self, documents: List[Dict[str, Any]]) -> None:
        """Replace the search result"""
        self.documents = list(documents)

    def require_documents(self) -> List[Dict[str, Any]]:
        """Return the search result, failing if no search ran yet"""
        if self.documents is None:
            raise DocumentAssertionError(
                "no documents are available in the search result, did you forget to search?"
            )
        return self.documents
