"""Dotted-path control names.

A nested field's control is named prefix + field name + '.' + inner name,
so 'address.zip' addresses data['address']['zip']. unflatten() rebuilds
nested data from submitted form values; flatten() is its inverse.
"""

from collections.abc import Mapping
from typing import Any

SEPARATOR = "."


def control_name(name_prefix: str, field_name: str) -> str:
    return f"{name_prefix}{field_name}"


def nested_prefix(name_prefix: str, field_name: str) -> str:
    """Prefix for the controls of a nested schema field."""
    return f"{name_prefix}{field_name}{SEPARATOR}"


def unflatten(form_data: Mapping[str, Any]) -> dict[str, Any]:
    """Rebuild nested data from dotted control names.

    Raises:
        ValueError: If a path is empty, or is used both as a value and as
            a parent of other values
    """
    result: dict[str, Any] = {}
    for path, value in form_data.items():
        parts = path.split(SEPARATOR)
        if not all(parts):
            raise ValueError(f"Invalid control name: '{path}'")

        node = result
        for depth, part in enumerate(parts[:-1]):
            child = node.setdefault(part, {})
            if not isinstance(child, dict):
                prefix = SEPARATOR.join(parts[: depth + 1])
                raise ValueError(f"'{prefix}' is both a value and an object in '{path}'")
            node = child

        leaf = parts[-1]
        if isinstance(node.get(leaf), dict):
            raise ValueError(f"'{path}' is both a value and an object")
        node[leaf] = value
    return result


def flatten(data: Mapping[str, Any], name_prefix: str = "") -> dict[str, Any]:
    """Flatten nested data into dotted control names."""
    flat: dict[str, Any] = {}
    for key, value in data.items():
        name = control_name(name_prefix, key)
        if isinstance(value, Mapping) and value:
            flat.update(flatten(value, nested_prefix(name_prefix, key)))
        else:
            flat[name] = value
    return flat
