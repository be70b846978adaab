"""Command — base class for declared, validated units of work.

Subclasses declare parameters in the class body and override
:meth:`Command.perform`. Callers construct an instance from raw input and
call :meth:`Command.execute`, which validates every declared parameter and
runs ``perform()`` only when no error was recorded.

Usage::

    class Add(Command):
        a = required(type="integer", validations=["not_nil"])
        b = required(type="integer")

        def perform(self) -> int:
            return self.a + self.b

    Add(a="4", b="6").execute().value  # -> 10
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, ClassVar

from commandeer.domain.convertors import BUILTIN_CONVERTORS, Convertor, ConvertorFactory
from commandeer.domain.parameters import Parameter, ParameterSpec, normalize_key
from commandeer.domain.schema import (
    Declarations,
    Schema,
    declarations_of,
    declare_class,
    ensure_parameter_name,
)
from commandeer.domain.types import ErrorCode
from commandeer.domain.validators import BUILTIN_VALIDATORS, Validator
from commandeer.exceptions import (
    ConversionError,
    MissingParameterError,
    PerformNotImplementedError,
    UnknownConvertorError,
    UnknownParameterError,
    UnknownValidatorError,
)
from commandeer.services.result import Error, Result

logger = logging.getLogger(__name__)

_SCHEMA_ATTR = "_sealed_schema"


def _conversion_message(spec: ParameterSpec) -> str:
    return f"The value of the '{spec.name}' parameter cannot be converted to the '{spec.type}' type."


class Command:
    """Base class for command objects.

    Instances hold their raw input (immutable after construction) and a
    per-call error list that ``is_valid()`` and ``execute()`` rebuild from
    scratch, so repeated calls never accumulate errors.
    """

    _declarations: ClassVar[Declarations]
    # Set on every instance by __init__; never usable as parameter names.
    _reserved_names: ClassVar[frozenset[str]] = frozenset(
        {"_schema", "_convertors", "_parameters", "_errors"}
    )

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        declare_class(cls)

    def __init__(self, parameters: Mapping[str, Any] | None = None, /, **kwargs: Any) -> None:
        self._schema = type(self).schema()
        self._convertors = self._schema.instantiate_convertors()
        supplied = {**(parameters or {}), **kwargs}
        self._parameters: Mapping[str, Any] = MappingProxyType(
            {normalize_key(key): value for key, value in supplied.items()}
        )
        self._errors: list[Error] = []

    def __repr__(self) -> str:
        return f"{type(self).__qualname__}({dict(self._parameters)!r})"

    # --- Declaration API ---------------------------------------------------

    @classmethod
    def schema(cls) -> Schema:
        """The sealed, hierarchy-merged schema of this command type."""
        cached = vars(cls).get(_SCHEMA_ATTR)
        if cached is None:
            cached = Schema.build(cls)
            setattr(cls, _SCHEMA_ATTR, cached)
        return cached

    @classmethod
    def declare_parameter(cls, name: str, **options: Any) -> None:
        """Declare a parameter outside the class body."""
        ensure_parameter_name(cls, name)
        parameter = Parameter(**options)
        parameter.__set_name__(cls, name)
        assert parameter.spec is not None
        cls._own_declarations().add_parameter(parameter.spec)
        setattr(cls, name, parameter)

    @classmethod
    def add_convertor(cls, type_id: str, factory: ConvertorFactory) -> None:
        """Register a convertor factory under *type_id* for this type and its subclasses."""
        cls._own_declarations().add_convertor(type_id, factory)

    @classmethod
    def add_validator(cls, validator_id: str, check: Validator | None = None) -> None:
        """Register a validator under *validator_id* for this type and its subclasses."""
        cls._own_declarations().add_validator(validator_id, check)

    @classmethod
    def validates(cls, parameter_name: str, check: Validator | None = None) -> None:
        """Register a validator keyed to a parameter name."""
        cls.add_validator(parameter_name, check)

    @classmethod
    def _own_declarations(cls) -> Declarations:
        declarations = declarations_of(cls)
        assert declarations is not None
        return declarations

    # --- Introspection -----------------------------------------------------

    @property
    def errors(self) -> list[Error]:
        """Errors recorded during the current call."""
        return list(self._errors)

    @property
    def raw_parameters(self) -> Mapping[str, Any]:
        return self._parameters

    @property
    def parameter_names(self) -> list[str]:
        return list(self._schema.parameters)

    @property
    def required_parameter_names(self) -> list[str]:
        return self._schema.required_names

    @property
    def optional_parameter_names(self) -> list[str]:
        return self._schema.optional_names

    def expects(self, name: str) -> bool:
        """Whether *name* is a declared parameter."""
        return name in self._schema.parameters

    def provided(self, name: str) -> bool:
        """Whether a value (possibly None) was supplied for *name*."""
        return name in self._parameters

    def spec_for(self, name: str) -> ParameterSpec:
        if not self.expects(name):
            msg = f"Unknown parameter '{name}' requested from a {type(self).__qualname__} command."
            raise UnknownParameterError(msg, name)
        return self._schema.parameters[name]

    def has_convertor(self, type_id: str) -> bool:
        return type_id in self._convertors

    def get_convertor(self, type_id: str) -> Convertor:
        if not self.has_convertor(type_id):
            msg = f"Unable to locate the '{type_id}' parameter convertor."
            raise UnknownConvertorError(msg, type_id)
        return self._convertors[type_id]

    # --- Resolution --------------------------------------------------------

    def is_convertible(self, name: str, value: Any) -> bool:
        """Whether *value* is acceptable for the declared type of *name*.

        False for undeclared names; True for untyped parameters.
        """
        if not self.expects(name):
            return False
        spec = self._schema.parameters[name]
        if spec.type is None:
            return True
        return self.get_convertor(spec.type).convertible(value)

    def get_raw_value(self, name: str) -> Any:
        """The value supplied for *name* untouched, or None when not supplied."""
        if not self.expects(name):
            msg = f"Unknown parameter '{name}' requested in command."
            raise UnknownParameterError(msg, name)
        return self._parameters.get(name)

    def get(self, name: str) -> Any:
        """The resolved (converted) value of parameter *name*.

        Optional parameters that were never supplied yield their default
        as-is, without conversion. An optional parameter supplied as None
        has its default substituted and converted like any supplied value.
        """
        spec = self.spec_for(name)
        if spec.required:
            if not self.provided(name):
                msg = f"A value has not been provided for the '{name}' parameter."
                raise MissingParameterError(msg, name)
            return self._convert(spec, self._parameters[name])

        if not self.provided(name):
            return spec.default
        raw = self._parameters[name]
        if raw is None:
            raw = spec.default
        return self._convert(spec, raw)

    def _convert(self, spec: ParameterSpec, raw: Any) -> Any:
        if spec.type is None:
            return raw
        convertor = self.get_convertor(spec.type)
        if not convertor.convertible(raw):
            raise ConversionError(_conversion_message(spec), spec.name)
        return convertor.convert(raw)

    # --- Validation --------------------------------------------------------

    def validations_for(self, name: str) -> list[Validator]:
        """Validators applicable to *name*, in the order they run.

        The validator registered under the parameter's own name comes first,
        then the ids listed in its ``validations``, without duplicates.
        """
        if not self.expects(name):
            msg = f"Validators requested for unknown parameter '{name}'."
            raise UnknownParameterError(msg, name)
        spec = self._schema.parameters[name]
        registry = self._schema.validators

        ids: list[str] = [name] if name in registry else []
        ids.extend(spec.validations)
        checks: list[Validator] = []
        for key in dict.fromkeys(ids):
            if key not in registry:
                msg = f"Unknown validation '{key}' requested for the '{name}' parameter."
                raise UnknownValidatorError(msg, name)
            checks.append(registry[key])
        return checks

    def validate(self) -> None:
        """Check every declared parameter, recording errors without stopping.

        Subclasses adding their own checks should call ``super().validate()``.
        """
        for spec in self._schema.parameters.values():
            name = spec.name
            if not self.provided(name):
                if spec.required:
                    self.error(
                        f"No value specified for the '{name}' required parameter.",
                        ErrorCode.MISSING,
                    )
                continue

            raw = self._parameters[name]
            if spec.type is not None:
                if not self.has_convertor(spec.type):
                    self.error(
                        f"Invalid type '{spec.type}' specified for the '{name}' parameter.",
                        ErrorCode.INVALID_TYPE,
                    )
                    continue
                if not self._convertors[spec.type].convertible(raw):
                    self.error(_conversion_message(spec), ErrorCode.CONVERSION)

            if self.is_convertible(name, raw):
                value = self.get(name)
                for check in self.validations_for(name):
                    check(name, value, self.error, self.get_raw_value)
            else:
                self.error(_conversion_message(spec), ErrorCode.CONVERSION)

    def is_valid(self) -> bool:
        """Reset the error list, validate, and report whether it stayed empty."""
        self._errors = []
        self.validate()
        return not self._errors

    def error(self, message: str, code: str | None = None) -> None:
        """Record an error against the current call."""
        self._errors.append(Error(message=message, code=None if code is None else str(code)))

    # --- Execution ---------------------------------------------------------

    def perform(self) -> Any:
        """Do the command's work. Only invoked once validation passed."""
        msg = f"The {type(self).__qualname__} command class has not overridden perform()."
        raise PerformNotImplementedError(msg)

    def execute(self) -> Result:
        """Validate, then perform if valid. Always returns a Result."""
        self._errors = []
        value = None
        if self.is_valid():
            value = self.perform()
        else:
            logger.debug(
                "%s rejected: %s",
                type(self).__qualname__,
                "; ".join(error.message for error in self._errors),
            )
        return Result(value=value, errors=tuple(self._errors))


declare_class(Command)
for _type_id, _factory in BUILTIN_CONVERTORS.items():
    Command.add_convertor(_type_id, _factory)
for _validator_id, _check in BUILTIN_VALIDATORS.items():
    Command.add_validator(_validator_id, _check)
