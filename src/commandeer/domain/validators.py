"""Validator protocol and the built-in validators.

A validator inspects one resolved parameter value and reports problems
through an error sink. It receives only what it needs::

    def check(name, value, error, raw):
        if value > raw("limit"):
            error(f"'{name}' exceeds the limit.", "too_large")

* ``name``: the parameter being validated
* ``value``: its resolved (converted) value
* ``error``: ``error(message, code=None)`` appends an error to the current call
* ``raw``: ``raw(other_name)`` returns another parameter's raw value
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

from commandeer.domain.convertors import text_of
from commandeer.domain.types import ErrorCode

ErrorSink = Callable[..., None]
RawLookup = Callable[[str], Any]


class Validator(Protocol):
    def __call__(self, name: str, value: Any, error: ErrorSink, raw: RawLookup) -> None: ...


def not_blank(name: str, value: Any, error: ErrorSink, raw: RawLookup) -> None:
    """Reject values whose stripped string form is empty."""
    if not text_of(value).strip():
        error(f"Blank value specified for the '{name}' parameter.", ErrorCode.BLANK)


def not_nil(name: str, value: Any, error: ErrorSink, raw: RawLookup) -> None:
    """Reject ``None``."""
    if value is None:
        error(f"Nil value specified for the '{name}' parameter.", ErrorCode.NIL)


BUILTIN_VALIDATORS: dict[str, Validator] = {
    "not_blank": not_blank,
    "not_nil": not_nil,
}
