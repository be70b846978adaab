"""Identifiers shared across the engine.

Built-in convertor and validator ids, plus the codes attached to the
validation errors the engine reports on its own.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    """Codes carried by errors the engine records during validation."""

    MISSING = "missing_parameter"
    CONVERSION = "conversion_failed"
    INVALID_TYPE = "invalid_type"
    NIL = "nil_value"
    BLANK = "blank_value"


class BuiltinType(StrEnum):
    """Convertor ids registered on the base ``Command`` class."""

    BOOLEAN = "boolean"
    FLOAT = "float"
    INTEGER = "integer"
    STRING = "string"
