"""Conversion between edited text and JSON scalars."""

from __future__ import annotations

import json
import math

Scalar = str | int | float | bool | None

_LITERALS: dict[str, Scalar] = {"true": True, "false": False, "null": None}


def coerce_primitive(text: str) -> Scalar:
    """Turn the text of an input field into a JSON scalar.

    ``true``/``false``/``null`` become their literals and the empty string
    stays a string. Anything else is a number only when rendering the parsed
    number reproduces *text* exactly, so ``"007"`` or ``"1e3"`` stay strings.
    """
    if text in _LITERALS:
        return _LITERALS[text]
    if text == "":
        return ""

    number = _parse_number(text)
    if number is not None and json.dumps(number) == text:
        return number
    return text


def _parse_number(text: str) -> int | float | None:
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def scalar_to_text(value: Scalar) -> str:
    """Render a scalar as it appears in an input field (strings unquoted)."""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def scalar_type(value: object) -> str:
    """Return the row type tag for *value*."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    return "string"
