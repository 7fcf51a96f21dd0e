"""
Object utilities for converting between models and wire payloads.

The REST API speaks camelCase JSON while the models use snake_case
dataclass fields. These helpers do the key translation in both
directions and drop unset optional values from outgoing bodies.
"""

import re
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Mapping

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def camel_case(name: str) -> str:
    """Convert ``snake_case`` to ``camelCase``."""
    head, *tail = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in tail)


def snake_case(name: str) -> str:
    """Convert ``camelCase`` to ``snake_case``."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def to_payload(obj: Any, drop_none: bool = True) -> Any:
    """
    Serialize a dataclass (or nested structure of them) to a JSON payload.

    Field names are converted to camelCase and enums to their values.

    Args:
        obj: Dataclass instance, mapping, list or scalar.
        drop_none: Omit keys whose value is None.

    Returns:
        JSON-compatible structure.
    """
    if is_dataclass(obj) and not isinstance(obj, type):
        items = ((f.name, getattr(obj, f.name)) for f in fields(obj))
        return {
            camel_case(key): to_payload(value, drop_none)
            for key, value in items
            if not (drop_none and value is None)
        }
    if isinstance(obj, Mapping):
        return {
            camel_case(str(key)): to_payload(value, drop_none)
            for key, value in obj.items()
            if not (drop_none and value is None)
        }
    if isinstance(obj, (list, tuple)):
        return [to_payload(value, drop_none) for value in obj]
    if isinstance(obj, Enum):
        return obj.value
    return obj


def from_payload(data: Mapping[str, Any] | None) -> dict[str, Any]:
    """Return a copy of a wire payload with snake_case keys (top level only)."""
    if not data:
        return {}
    return {snake_case(str(key)): value for key, value in data.items()}
