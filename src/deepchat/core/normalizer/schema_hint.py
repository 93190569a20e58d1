"""
Schema hint sniffing - decide whether the caller expects a JSON array.

The hint is a JSON Schema document passed around as text. It is never
validated; the only question asked of it is whether the top-level type is
"array".
"""

import json
import re
from typing import Any

ARRAY_TYPE_MARKER = '"type":"array"'

_WHITESPACE_PATTERN = re.compile(r"\s+")


def expects_array(schema_hint: str | None, structural: bool = True) -> bool:
    """
    Check whether a schema hint asks for a top-level array.

    With ``structural`` on, the lower-cased hint is parsed and its top-level
    ``type`` inspected. Hints that do not parse to a JSON object (or any hint
    when ``structural`` is off) go through the substring check instead.

    Args:
        schema_hint: JSON Schema as text, may be malformed or None
        structural: Parse the hint before falling back to the substring check

    Returns:
        True if an array is expected
    """
    if schema_hint is None:
        return False

    if structural:
        schema = _parse_hint(schema_hint.lower())
        if isinstance(schema, dict):
            return _declares_array(schema.get("type"))

    return contains_array_marker(schema_hint)


def contains_array_marker(schema_hint: str) -> bool:
    """Substring check: does the compacted, lower-cased hint mention an array type."""
    compact = _WHITESPACE_PATTERN.sub("", schema_hint).lower()
    return ARRAY_TYPE_MARKER in compact


def _parse_hint(text: str) -> Any:
    try:
        return json.loads(text)
    except (ValueError, RecursionError):
        return None


def _declares_array(type_value: Any) -> bool:
    # "type" may be a single name or a list of names
    if isinstance(type_value, str):
        return type_value == "array"
    if isinstance(type_value, list):
        return "array" in type_value
    return False
