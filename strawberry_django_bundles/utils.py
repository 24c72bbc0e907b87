from __future__ import annotations

import json
from typing import Any, Optional


def is_empty(value: Any) -> bool:
    """Check if a stored option value counts as not set.

    Falsy values are empty, and so is the string "0" options are commonly
    persisted with.
    """
    return not value or value == "0"


def value_or_none(value: Any) -> Any:
    return None if is_empty(value) else value


def int_or_none(value: Any) -> Optional[int]:
    if is_empty(value):
        return None

    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def yes_no(value: Any) -> Optional[bool]:
    """Convert a "yes"/"no" option into a boolean, None when it is not set."""
    if is_empty(value):
        return None

    return value == "yes"


def json_or_none(value: Any) -> Optional[str]:
    if is_empty(value):
        return None

    return json.dumps(value, separators=(",", ":"))


def decode_json(data: Optional[str]) -> Any:
    """Decode a JSON payload, returning None when it is empty or invalid."""
    if not data:
        return None

    try:
        decoded = json.loads(data)
    except ValueError:
        return None

    return decoded
