"""Coercion of list-valued request fields"""

import json
from typing import Any, List


def parse_string_list(value: Any) -> List[str]:
    """
    Accept a list of strings, or a string holding a JSON array of strings.

    JSON array is the only accepted text encoding; comma-separated text and
    JSON scalars are rejected with ValueError. Empty values give [].
    """
    if value is None:
        return []

    if isinstance(value, str):
        if not value.strip():
            return []
        try:
            value = json.loads(value)
        except json.JSONDecodeError as e:
            raise ValueError("must be a JSON array of strings") from e

    if not isinstance(value, list):
        raise ValueError("must be a JSON array of strings")

    items = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError("must be a JSON array of strings")
        item = item.strip()
        if item:
            items.append(item)
    return items
