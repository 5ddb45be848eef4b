"""
Extended JSON conversion helpers

===============================================================================
PROVENANCE TRACKING
===============================================================================
File: src/mongo_steps/convert.py
Created: 2026-10-17
Author: Mongo Steps Contributors
Type: Core Implementation

Change History:
-------------------------------------------------------------------------------
Date        Author      Type    Description
-------------------------------------------------------------------------------
2026-10-17  Contrib     CREATE  Parsing of document sets and filters from
                                extended JSON, fixture file loading and
                                serialization for comparisons.
-------------------------------------------------------------------------------

License: MIT
===============================================================================
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import logging

from bson import json_util
from bson.errors import BSONError

from .errors import FileReadError, ParseError

logger = logging.getLogger(__name__)

IGNORE_DIFF = "<ignore-diff>"

# Escaped and legacy spellings of the marker, rewritten after serialization
_IGNORE_DIFF_ALIASES = (
    r'"\u003cignore-diff\u003e"',
    r'"\u003cignored-diff\u003e"',
    '"<ignored-diff>"',
)

JSON_OPTIONS = json_util.RELAXED_JSON_OPTIONS

Document = Dict[str, Any]


def _loads(text: str) -> Any:
    try:
        return json_util.loads(text, json_options=JSON_OPTIONS)
    except (ValueError, TypeError, BSONError) as e:
        raise ParseError(f"error unmarshaling extjson: {e}") from e


def parse_documents(text: Optional[str]) -> List[Document]:
    """
    Parse an extended JSON array into a list of documents.

    Args:
        text: Extended JSON text, usually a step docstring

    Returns:
        Documents in the order they appear in the array

    Raises:
        ParseError: If text is None, malformed, or not an array of objects
    """
    if text is None:
        raise ParseError("data is nil")

    docs = _loads(text)

    if not isinstance(docs, list) or not all(isinstance(doc, dict) for doc in docs):
        raise ParseError("error unmarshaling extjson: expected an array of documents")

    return docs


def parse_filter(text: Optional[str]) -> Document:
    """Parse an extended JSON object into a query filter, empty text matches all"""
    if text is None or not text.strip():
        return {}

    result = _loads(text)

    if not isinstance(result, dict):
        raise ParseError("error unmarshaling extjson: expected a document")

    return result


def read_text(path: Union[str, Path]) -> str:
    """Read a UTF-8 fixture file"""
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise FileReadError(str(path), str(e)) from e


def read_documents_file(path: Union[str, Path]) -> List[Document]:
    """Read and parse a fixture file holding an extended JSON array"""
    text = read_text(path)
    logger.debug(f"Loaded fixture file {path} ({len(text)} bytes)")
    return parse_documents(text)


def serialize_documents(docs: List[Document]) -> str:
    """
    Render documents as an extended JSON array for comparison.

    Every document is dumped on its own and joined into an array, so the
    per-document key order is kept. Escaped forms of the ignore-diff marker
    are rewritten to the literal ``<ignore-diff>``.
    """
    if not docs:
        return "[]"

    data = "[" + ",".join(json_util.dumps(doc, json_options=JSON_OPTIONS) for doc in docs) + "]"

    for alias in _IGNORE_DIFF_ALIASES:
        data = data.replace(alias, f'"{IGNORE_DIFF}"')

    return data
