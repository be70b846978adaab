"""commandeer — declarative command objects with typed, validated parameters."""

from __future__ import annotations

from commandeer.domain.convertors import (
    BooleanConvertor,
    Convertor,
    FloatConvertor,
    IntegerConvertor,
    StringConvertor,
)
from commandeer.domain.parameters import Parameter, ParameterSpec, optional, required
from commandeer.domain.schema import (
    Schema,
    convertor,
    convertors_of,
    parameters_of,
    validates,
    validator,
    validators_of,
)
from commandeer.domain.types import ErrorCode
from commandeer.services.command import Command
from commandeer.services.result import Error, Result

__version__ = "0.1.0"

__all__ = [
    "BooleanConvertor",
    "Command",
    "Convertor",
    "Error",
    "ErrorCode",
    "FloatConvertor",
    "IntegerConvertor",
    "Parameter",
    "ParameterSpec",
    "Result",
    "Schema",
    "StringConvertor",
    "__version__",
    "convertor",
    "convertors_of",
    "optional",
    "parameters_of",
    "required",
    "validates",
    "validator",
    "validators_of",
]
