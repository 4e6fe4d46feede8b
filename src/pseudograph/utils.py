from __future__ import annotations

import re
import uuid
from typing import Any, Mapping, Optional

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")


def new_id() -> str:
    """Return a fresh random identifier (uuid4 in canonical form)."""
    return str(uuid.uuid4())


def is_empty(value: Any) -> bool:
    """None, an empty/blank string and an empty container are all empty."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    try:
        return len(value) == 0
    except TypeError:
        return False


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_string_or_number(value: Any) -> bool:
    return isinstance(value, str) or is_number(value)


def is_identifier(value: Any) -> bool:
    return isinstance(value, str) and _IDENTIFIER.match(value) is not None


def to_id_string(value: Any) -> str:
    """
    Canonical string form of a scalar used as an identifier.

    Booleans render as ``true``/``false``, integral floats drop the ``.0``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, str):
        return value.strip()
    return str(value)


def edge_label(edge: Mapping[str, Any]) -> Optional[str]:
    """
    The disambiguating label of an edge: its name when non-empty, otherwise
    its type name. Trimmed and lower-cased; None when neither is set.
    """
    for key in ("name", "typeName"):
        value = edge.get(key)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text.lower()
    return None
