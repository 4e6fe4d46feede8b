"""
Literal payloads of pseudo-cypher fragments.

A payload is a flat object literal::

    {id: 1, name: 'Ann', "full name": "Ann Smith", tags: ['a', 'b'], ok: true}

Keys are identifiers or quoted strings. Values are quoted strings, numbers,
booleans or flat arrays of those. Nothing is evaluated; anything outside
this grammar raises PayloadError.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Mapping, Union

from ..errors import PayloadError

Scalar = Union[str, int, float, bool]
Value = Union[Scalar, List[Scalar]]

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0", "b": "\b", "f": "\f"}
_NUMBER_CHARS = set("0123456789+-.eE")


class _Scanner:
    __slots__ = ("text", "pos")

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    # ------------------------------------------------------------------ #
    # Primitives
    # ------------------------------------------------------------------ #
    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return "" if self.at_end() else self.text[self.pos]

    def skip_ws(self) -> None:
        while not self.at_end() and self.text[self.pos].isspace():
            self.pos += 1

    def expect(self, char: str) -> None:
        self.skip_ws()
        if self.peek() != char:
            found = self.peek() or "end of input"
            raise PayloadError(f"Expected '{char}' at offset {self.pos}, found {found!r}")
        self.pos += 1

    def error(self, message: str) -> PayloadError:
        return PayloadError(f"{message} at offset {self.pos} in {self.text!r}")

    # ------------------------------------------------------------------ #
    # Grammar
    # ------------------------------------------------------------------ #
    def read_object(self) -> Dict[str, Value]:
        self.expect("{")
        result: Dict[str, Value] = {}
        self.skip_ws()
        if self.peek() == "}":
            self.pos += 1
            return result
        while True:
            key = self.read_key()
            self.expect(":")
            result[key] = self.read_value(allow_array=True)
            self.skip_ws()
            char = self.peek()
            if char == ",":
                self.pos += 1
                self.skip_ws()
                # trailing comma
                if self.peek() == "}":
                    self.pos += 1
                    return result
                continue
            if char == "}":
                self.pos += 1
                return result
            raise self.error("Expected ',' or '}'")

    def read_key(self) -> str:
        self.skip_ws()
        char = self.peek()
        if char in ("'", '"'):
            return self.read_string()
        start = self.pos
        while not self.at_end() and (self.text[self.pos].isalnum() or self.text[self.pos] in "_$"):
            self.pos += 1
        if start == self.pos or self.text[start].isdigit():
            raise self.error("Expected a property name")
        return self.text[start:self.pos]

    def read_value(self, allow_array: bool) -> Value:
        self.skip_ws()
        char = self.peek()
        if char in ("'", '"'):
            return self.read_string()
        if char == "[":
            if not allow_array:
                raise self.error("Nested arrays are not supported")
            return self.read_array()
        if char == "{":
            raise self.error("Nested objects are not supported")
        if char and (char.isdigit() or char in "+-."):
            return self.read_number()
        return self.read_word()

    def read_array(self) -> List[Scalar]:
        self.expect("[")
        items: List[Scalar] = []
        self.skip_ws()
        if self.peek() == "]":
            self.pos += 1
            return items
        while True:
            items.append(self.read_value(allow_array=False))  # type: ignore[arg-type]
            self.skip_ws()
            char = self.peek()
            if char == ",":
                self.pos += 1
                continue
            if char == "]":
                self.pos += 1
                return items
            raise self.error("Expected ',' or ']'")

    def read_string(self) -> str:
        quote = self.text[self.pos]
        self.pos += 1
        chars: List[str] = []
        while not self.at_end():
            char = self.text[self.pos]
            self.pos += 1
            if char == "\\":
                if self.at_end():
                    break
                escaped = self.text[self.pos]
                self.pos += 1
                chars.append(_ESCAPES.get(escaped, escaped))
            elif char == quote:
                return "".join(chars)
            else:
                chars.append(char)
        raise self.error("Unterminated string")

    def read_number(self) -> Union[int, float]:
        start = self.pos
        while not self.at_end() and self.text[self.pos] in _NUMBER_CHARS:
            self.pos += 1
        token = self.text[start:self.pos]
        try:
            return int(token)
        except ValueError:
            pass
        try:
            value = float(token)
        except ValueError:
            raise self.error(f"Invalid number {token!r}") from None
        if not math.isfinite(value):
            raise self.error(f"Invalid number {token!r}")
        return value

    def read_word(self) -> bool:
        start = self.pos
        while not self.at_end() and self.text[self.pos].isalpha():
            self.pos += 1
        word = self.text[start:self.pos]
        if word == "true":
            return True
        if word == "false":
            return False
        if word:
            raise self.error(f"Unsupported literal {word!r}")
        raise self.error("Expected a value")


def parse_payload(text: str) -> Dict[str, Value]:
    """Parse a `{...}` payload into a dict. Raises PayloadError."""
    if not isinstance(text, str):
        raise PayloadError(f"Payload must be a string, got {type(text).__name__}")
    scanner = _Scanner(text.strip())
    result = scanner.read_object()
    scanner.skip_ws()
    if not scanner.at_end():
        raise scanner.error("Unexpected trailing characters")
    return result


# ------------------------------------------------------------------ #
# Rendering
# ------------------------------------------------------------------ #
def _render_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise PayloadError(f"Cannot render non-finite number {value!r}")
        return repr(value)
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace("'", "\\'")
        return f"'{escaped}'"
    raise PayloadError(f"Cannot render value of type {type(value).__name__}")


def render_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_render_scalar(item) for item in value) + "]"
    return _render_scalar(value)


def _render_key(key: str) -> str:
    if key and (key[0].isalpha() or key[0] in "_$") and all(c.isalnum() or c in "_$" for c in key):
        return key
    return _render_scalar(str(key))


def render_payload(data: Mapping[str, Any]) -> str:
    """Render a flat mapping as a payload literal; None values are omitted."""
    parts = [
        f"{_render_key(str(key))}: {render_value(value)}"
        for key, value in data.items()
        if value is not None
    ]
    return "{" + ", ".join(parts) + "}"
