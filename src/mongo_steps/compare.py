"""
Document set comparison with patch-style diff output

===============================================================================
PROVENANCE TRACKING
===============================================================================
File: src/mongo_steps/compare.py
Created: 2026-10-17
Author: Mongo Steps Contributors
Type: Core Implementation

Change History:
-------------------------------------------------------------------------------
Date        Author      Type    Description
-------------------------------------------------------------------------------
2026-10-17  Contrib     CREATE  JSON equality via deepdiff with support for
                                the <ignore-diff> placeholder and a
                                unified-diff failure message.
-------------------------------------------------------------------------------

License: MIT
===============================================================================
"""

from itertools import islice
from typing import Any, List
import difflib
import json
import logging

from deepdiff import DeepDiff

from .convert import IGNORE_DIFF
from .errors import DocumentAssertionError

logger = logging.getLogger(__name__)


# =============================================================================
# Equality
# =============================================================================

def _is_ignored(obj: Any, path: str) -> bool:
    return isinstance(obj, str) and obj == IGNORE_DIFF


def json_diff(expected: Any, actual: Any) -> DeepDiff:
    """
    Structural diff of two decoded JSON values.

    Lists are compared in order and types must match exactly. Positions
    where the expected value is ``<ignore-diff>`` are skipped.
    """
    return DeepDiff(
        expected,
        actual,
        ignore_order=False,
        verbose_level=2,
        exclude_obj_callback=_is_ignored,
    )


# =============================================================================
# Rendering
# =============================================================================

def _resolve_ignored(expected: Any, actual: Any) -> Any:
    """Replace ignored expected values with the actual ones"""
    if isinstance(expected, str) and expected == IGNORE_DIFF:
        return actual

    if isinstance(expected, dict) and isinstance(actual, dict):
        return {
            key: _resolve_ignored(value, actual[key]) if key in actual else value
            for key, value in expected.items()
        }

    if isinstance(expected, list) and isinstance(actual, list):
        resolved = [_resolve_ignored(e, a) for e, a in zip(expected, actual)]
        return resolved + expected[len(actual):]

    return expected


def _align_keys(expected: Any, actual: Any) -> Any:
    """Reorder actual object keys to follow the expected key order"""
    if isinstance(expected, dict) and isinstance(actual, dict):
        aligned = {key: _align_keys(expected[key], actual[key]) for key in expected if key in actual}
        aligned.update((key, value) for key, value in actual.items() if key not in aligned)
        return aligned

    if isinstance(expected, list) and isinstance(actual, list):
        aligned = [_align_keys(e, a) for e, a in zip(expected, actual)]
        return aligned + actual[len(expected):]

    return actual


def render_lines(value: Any, level: int = 0, label: str = "") -> List[str]:
    """
    Pretty-print a JSON value with two spaces per level.

    Empty arrays and objects take two lines so that added elements diff
    as insertions between the brackets.
    """
    pad = "  " * level

    if isinstance(value, dict):
        items = list(value.items())
        lines = [f"{pad}{label}{{"]
        for i, (key, item) in enumerate(items):
            child = render_lines(item, level + 1, json.dumps(key, ensure_ascii=False) + ": ")
            if i < len(items) - 1:
                child[-1] += ","
            lines.extend(child)
        lines.append(f"{pad}}}")
        return lines

    if isinstance(value, list):
        lines = [f"{pad}{label}["]
        for i, item in enumerate(value):
            child = render_lines(item, level + 1)
            if i < len(value) - 1:
                child[-1] += ","
            lines.extend(child)
        lines.append(f"{pad}]")
        return lines

    return [f"{pad}{label}{json.dumps(value, ensure_ascii=False)}"]


def format_diff(expected: Any, actual: Any) -> str:
    """Unified diff body between expected and actual, without headers"""
    expected_lines = render_lines(_resolve_ignored(expected, actual))
    actual_lines = render_lines(_align_keys(expected, actual))
    context = max(len(expected_lines), len(actual_lines))

    diff = difflib.unified_diff(expected_lines, actual_lines, n=context, lineterm="")

    # Skip the ---, +++ and @@ header lines
    return "".join(f"{line}\n" for line in islice(diff, 3, None))


# =============================================================================
# Assertion
# =============================================================================

def assert_json_equal(expected: str, actual: str) -> None:
    """
    Fail with a patch-style message when two JSON texts differ.

    Args:
        expected: Expected JSON, may contain ``<ignore-diff>`` values
        actual: Actual JSON

    Raises:
        DocumentAssertionError: If the documents are not equal
    """
    expected_value = json.loads(expected)
    actual_value = json.loads(actual)

    diff = json_diff(expected_value, actual_value)
    if not diff:
        return

    body = format_diff(expected_value, actual_value)
    if not body:
        body = diff.pretty() + "\n"

    logger.debug(f"Documents differ: {diff.to_json()}")
    raise DocumentAssertionError(f"not equal:\n{body}")
