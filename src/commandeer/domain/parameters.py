"""Parameter declarations.

:class:`ParameterSpec` is the frozen description of one declared input.
:class:`Parameter` is the class-body descriptor that carries a spec onto a
command type and exposes the resolved value as a read-only attribute::

    class Resize(Command):
        width = required(type="integer")
        keep_ratio = optional(type="boolean", default=True)

    Resize(width="640").width  # -> 640
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from pydantic import BaseModel

from commandeer.exceptions import ConfigurationError


class ParameterSpec(BaseModel):
    """Declarative metadata for one named command input.

    Attributes:
        name: Parameter name, unique within one type's own declarations.
        required: Whether a value must be supplied.
        type: Convertor id the raw value is converted through, if any.
        default: Value used for an optional parameter that is unsupplied or
            supplied as ``None``.
        validations: Ordered validator ids run against the resolved value.
        transform: Attached metadata for derived behaviour. The engine never
            calls it.
    """

    model_config = {"frozen": True}

    name: str
    required: bool = False
    type: str | None = None
    default: Any = None
    validations: tuple[str, ...] = ()
    transform: Callable[[Any], Any] | None = None


def normalize_key(key: Any) -> str:
    """Canonical identifier form of an input key.

    Examples:
        >>> normalize_key(" max-count ")
        'max_count'
    """
    return str(key).strip().replace("-", "_")


class Parameter:
    """Descriptor declaring a command parameter in a class body.

    The owning class reads the spec in ``__init_subclass__``. On an
    instance the attribute resolves through ``instance.get(name)``.
    """

    def __init__(
        self,
        *,
        required: bool = False,
        type: str | None = None,
        default: Any = None,
        validations: Iterable[str] = (),
        transform: Callable[[Any], Any] | None = None,
    ) -> None:
        if isinstance(validations, str):
            msg = f"Validations must be a list of validator ids, not the string {validations!r}."
            raise ConfigurationError(msg)
        self._options: dict[str, Any] = {
            "required": required,
            "type": type,
            "default": default,
            "validations": tuple(validations),
            "transform": transform,
        }
        self.spec: ParameterSpec | None = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.spec = ParameterSpec(name=name, **self._options)

    @property
    def name(self) -> str | None:
        return self.spec.name if self.spec else None

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return instance.get(self.name)

    def __set__(self, instance: Any, value: Any) -> None:
        msg = f"The '{self.name}' parameter is read-only."
        raise AttributeError(msg)

    def __repr__(self) -> str:
        return f"Parameter({self.spec!r})"


def required(**options: Any) -> Parameter:
    """Declare a parameter that must be supplied."""
    return Parameter(**{**options, "required": True})


def optional(**options: Any) -> Parameter:
    """Declare a parameter that may be omitted."""
    return Parameter(**{**options, "required": False})
