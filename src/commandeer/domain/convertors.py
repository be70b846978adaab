"""Convertor protocol and the built-in type convertors.

A convertor turns a raw, untyped parameter value into one semantic type.
``convertible()`` is a strict check; ``convert()`` is only meaningful when
``convertible()`` accepted the same value. The built-ins fall back to a
zero-ish value instead of raising when handed something they reject.

Convertors are registered on a command type as factories (normally the
class itself). Every command instance builds its own convertor objects.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from commandeer.domain.types import BuiltinType


@runtime_checkable
class Convertor(Protocol):
    """Capability converting raw values to one type."""

    def convertible(self, value: Any) -> bool:
        """Whether *value* can be converted."""
        ...

    def convert(self, value: Any) -> Any:
        """Convert *value*; only meaningful after ``convertible()``."""
        ...


ConvertorFactory = Callable[[], Convertor]

_INT_PREFIX = re.compile(r"\s*[+-]?\d+")
_FLOAT_PREFIX = re.compile(r"\s*[+-]?(?:\d+(?:\.\d+)?(?:[eE][+-]?\d+)?|\.\d+)")


def text_of(value: Any) -> str:
    """The string form of a raw value.

    Examples:
        >>> text_of(None)
        ''
        >>> text_of(True)
        'true'
        >>> text_of(3.5)
        '3.5'
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class BooleanConvertor:
    """Accepts real booleans and the usual yes/no spellings, case-insensitively."""

    TRUE_VALUES = ("1", "on", "true", "y", "yes")
    FALSE_VALUES = ("0", "false", "n", "no", "off")
    VALID_VALUES = FALSE_VALUES + TRUE_VALUES

    def convertible(self, value: Any) -> bool:
        return isinstance(value, bool) or text_of(value).lower() in self.VALID_VALUES

    def convert(self, value: Any) -> bool:
        return text_of(value).lower() in self.TRUE_VALUES


class IntegerConvertor:
    """Integers whose string form survives a parse/format round trip."""

    def convertible(self, value: Any) -> bool:
        text = text_of(value)
        try:
            return str(int(text)) == text
        except ValueError:
            return False

    def convert(self, value: Any) -> int:
        text = text_of(value)
        try:
            return int(text)
        except ValueError:
            match = _INT_PREFIX.match(text)
            return int(match.group()) if match else 0


class FloatConvertor:
    """Finite floats whose string form survives a parse/format round trip.

    ``"3"`` is rejected because it formats back as ``"3.0"``.
    """

    def convertible(self, value: Any) -> bool:
        text = text_of(value)
        try:
            number = float(text)
        except ValueError:
            return False
        return math.isfinite(number) and str(number) == text

    def convert(self, value: Any) -> float:
        text = text_of(value)
        try:
            return float(text)
        except ValueError:
            match = _FLOAT_PREFIX.match(text)
            return float(match.group()) if match else 0.0


class StringConvertor:
    """Everything converts to its string form."""

    def convertible(self, value: Any) -> bool:
        return True

    def convert(self, value: Any) -> str:
        return text_of(value)


BUILTIN_CONVERTORS: dict[str, ConvertorFactory] = {
    BuiltinType.BOOLEAN: BooleanConvertor,
    BuiltinType.FLOAT: FloatConvertor,
    BuiltinType.INTEGER: IntegerConvertor,
    BuiltinType.STRING: StringConvertor,
}
