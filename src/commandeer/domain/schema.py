"""Per-type registries and the sealed, hierarchy-merged Schema.

Every command class owns a :class:`Declarations` object holding the
parameter specs, convertor factories and validators registered directly on
it. Convertor and validator maps are merged along the class hierarchy:
the walk goes from the most-ancestral class down to the most-derived one,
so a derived registration under an existing id wins. Parameter specs
follow the same rule when a :class:`Schema` is built.

INVARIANT: Building a Schema seals the declarations of the type and all of
its ancestors. Registrations on a sealed type raise ``SealedSchemaError``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Literal

from commandeer.domain.convertors import Convertor, ConvertorFactory
from commandeer.domain.parameters import Parameter, ParameterSpec
from commandeer.domain.validators import Validator
from commandeer.exceptions import (
    ConfigurationError,
    DuplicateRegistrationError,
    ParameterClashError,
    SealedSchemaError,
)

logger = logging.getLogger(__name__)

DECLARATIONS_ATTR = "_declarations"
RESERVED_ATTR = "_reserved_names"


class Declarations:
    """Registrations made directly on one command class."""

    def __init__(self, owner: str) -> None:
        self.owner = owner
        self.parameters: dict[str, ParameterSpec] = {}
        self.convertors: dict[str, ConvertorFactory] = {}
        self.validators: dict[str, Validator] = {}
        self.sealed = False

    def _ensure_open(self, kind: str, key: str) -> None:
        if self.sealed:
            msg = (
                f"Cannot register the '{key}' {kind} on the {self.owner} class "
                "after its schema has been built."
            )
            raise SealedSchemaError(msg)

    def add_parameter(self, spec: ParameterSpec) -> None:
        self._ensure_open("parameter", spec.name)
        if spec.name in self.parameters:
            msg = f"Duplicate parameter '{spec.name}' specified for the {self.owner} class."
            raise DuplicateRegistrationError(msg)
        self.parameters[spec.name] = spec

    def add_convertor(self, type_id: str, factory: ConvertorFactory) -> None:
        self._ensure_open("convertor", type_id)
        if type_id in self.convertors:
            msg = f"Duplicate convertor '{type_id}' specified for the {self.owner} class."
            raise DuplicateRegistrationError(msg)
        if not callable(factory):
            msg = f"The '{type_id}' convertor for the {self.owner} class is not a factory."
            raise ConfigurationError(msg)
        self.convertors[type_id] = factory
        logger.debug("Registered convertor %s on %s", type_id, self.owner)

    def add_validator(self, validator_id: str, check: Validator | None) -> None:
        self._ensure_open("validator", validator_id)
        if validator_id in self.validators:
            msg = f"Duplicate validator '{validator_id}' specified for the {self.owner} class."
            raise DuplicateRegistrationError(msg)
        if check is None:
            msg = (
                f"No check function specified for the '{validator_id}' validator "
                f"in the {self.owner} class."
            )
            raise ConfigurationError(msg)
        self.validators[validator_id] = check
        logger.debug("Registered validator %s on %s", validator_id, self.owner)


# ---------------------------------------------------------------------------
# Class-body registration markers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Registration:
    """Marker left in a class body by :func:`validator` or :func:`convertor`."""

    kind: Literal["validator", "convertor"]
    key: str
    target: Any


def validator(validator_id: str) -> Callable[[Validator], Registration]:
    """Register the decorated function as a validator of the enclosing command."""

    def decorate(check: Validator) -> Registration:
        return Registration("validator", validator_id, check)

    return decorate


def validates(parameter_name: str) -> Callable[[Validator], Registration]:
    """Register a validator keyed to a parameter name.

    It runs for that parameter without being listed in ``validations``.
    """
    return validator(parameter_name)


def convertor(type_id: str) -> Callable[[ConvertorFactory], Registration]:
    """Register the decorated class (or factory) as a convertor of the enclosing command."""

    def decorate(factory: ConvertorFactory) -> Registration:
        return Registration("convertor", type_id, factory)

    return decorate


# ---------------------------------------------------------------------------
# Registry access
# ---------------------------------------------------------------------------


def declarations_of(command_type: type) -> Declarations | None:
    """The declarations owned by *command_type* itself, if any."""
    found = vars(command_type).get(DECLARATIONS_ATTR)
    return found if isinstance(found, Declarations) else None


def _lineage(command_type: type) -> list[Declarations]:
    """Declarations from the most-ancestral class to *command_type*."""
    chain = (declarations_of(klass) for klass in reversed(command_type.__mro__))
    return [d for d in chain if d is not None]


def ensure_parameter_name(command_type: type, name: str) -> None:
    """Raise if *name* is already taken by a non-parameter attribute.

    Names listed in the type's ``_reserved_names`` (per-instance state the
    command keeps for itself) are taken as well.
    """
    reserved = getattr(command_type, RESERVED_ATTR, frozenset())
    clashes = name in reserved or any(
        name in vars(klass) and not isinstance(vars(klass)[name], Parameter)
        for klass in command_type.__mro__
    )
    if clashes:
        msg = (
            f"The '{name}' parameter clashes with an existing attribute "
            f"of the {command_type.__qualname__} class."
        )
        raise ParameterClashError(msg, name)


def _inherited_parameter_names(command_type: type) -> set[str]:
    names: set[str] = set()
    for klass in command_type.__mro__[1:]:
        declarations = declarations_of(klass)
        if declarations is not None:
            names.update(declarations.parameters)
    return names


def declare_class(command_type: type) -> Declarations:
    """Create the declarations for a freshly defined command class.

    Collects :class:`Parameter` descriptors and registration markers from
    the class body. Markers are removed from the class afterwards. Any other
    member named after an inherited parameter raises ``ParameterClashError``,
    since it would hide the parameter from attribute access.
    """
    inherited = _inherited_parameter_names(command_type)
    declarations = Declarations(command_type.__qualname__)
    setattr(command_type, DECLARATIONS_ATTR, declarations)

    for attr, member in list(vars(command_type).items()):
        if isinstance(member, Parameter):
            ensure_parameter_name(command_type, attr)
            assert member.spec is not None
            declarations.add_parameter(member.spec)
        elif isinstance(member, Registration):
            delattr(command_type, attr)
            if member.kind == "validator":
                declarations.add_validator(member.key, member.target)
            else:
                declarations.add_convertor(member.key, member.target)
        elif attr in inherited:
            msg = (
                f"The {command_type.__qualname__} class hides the inherited "
                f"'{attr}' parameter with a non-parameter attribute."
            )
            raise ParameterClashError(msg, attr)
    return declarations


def parameters_of(command_type: type) -> dict[str, ParameterSpec]:
    """Parameter specs declared on *command_type* itself (ancestors excluded)."""
    declarations = declarations_of(command_type)
    return dict(declarations.parameters) if declarations else {}


def convertors_of(command_type: type) -> dict[str, ConvertorFactory]:
    """Convertor factories visible to *command_type*; derived registrations win."""
    merged: dict[str, ConvertorFactory] = {}
    for declarations in _lineage(command_type):
        merged.update(declarations.convertors)
    return merged


def validators_of(command_type: type) -> dict[str, Validator]:
    """Validators visible to *command_type*; derived registrations win."""
    merged: dict[str, Validator] = {}
    for declarations in _lineage(command_type):
        merged.update(declarations.validators)
    return merged


def merged_parameters_of(command_type: type) -> dict[str, ParameterSpec]:
    """Parameter specs visible to *command_type*; derived declarations win."""
    merged: dict[str, ParameterSpec] = {}
    for declarations in _lineage(command_type):
        merged.update(declarations.parameters)
    return merged


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Schema:
    """Immutable, merged view of a command type's registries.

    Built once per command type and shared by every instance of it.
    """

    name: str
    parameters: Mapping[str, ParameterSpec]
    convertors: Mapping[str, ConvertorFactory]
    validators: Mapping[str, Validator]

    @classmethod
    def build(cls, command_type: type) -> Schema:
        """Merge and seal the registries of *command_type* and its ancestors."""
        for declarations in _lineage(command_type):
            declarations.sealed = True
        schema = cls(
            name=command_type.__qualname__,
            parameters=MappingProxyType(merged_parameters_of(command_type)),
            convertors=MappingProxyType(convertors_of(command_type)),
            validators=MappingProxyType(validators_of(command_type)),
        )
        logger.debug(
            "Built schema for %s: %d parameters, %d convertors, %d validators",
            schema.name,
            len(schema.parameters),
            len(schema.convertors),
            len(schema.validators),
        )
        return schema

    def instantiate_convertors(self) -> dict[str, Convertor]:
        """One fresh convertor object per registered type id."""
        return {type_id: factory() for type_id, factory in self.convertors.items()}

    @property
    def required_names(self) -> list[str]:
        return [spec.name for spec in self.parameters.values() if spec.required]

    @property
    def optional_names(self) -> list[str]:
        return [spec.name for spec in self.parameters.values() if not spec.required]
