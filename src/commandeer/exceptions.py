"""Exception hierarchy for misdefined or misused command types.

These signal programmer mistakes (configuration errors). They are raised
immediately and never collected into a :class:`~commandeer.services.result.Result`.
User-input problems are reported as ``Error`` records instead.
"""

from __future__ import annotations


class CommandError(Exception):
    """Root of every exception raised by commandeer."""


class ConfigurationError(CommandError):
    """A command type is declared or used incorrectly."""


class ParameterError(ConfigurationError):
    """A configuration error tied to one named parameter."""

    def __init__(self, message: str, parameter: str | None = None) -> None:
        super().__init__(message)
        self.parameter = parameter


class UnknownParameterError(ParameterError):
    """A parameter that the command type does not declare was requested."""


class MissingParameterError(ParameterError):
    """A required parameter was read directly but never supplied."""


class ConversionError(ParameterError):
    """A parameter value could not be converted to its declared type."""


class UnknownValidatorError(ParameterError):
    """A parameter lists a validator id that is not registered."""


class ParameterClashError(ParameterError):
    """A parameter name collides with an existing attribute of the type."""


class UnknownConvertorError(ConfigurationError):
    """A type id has no registered convertor."""

    def __init__(self, message: str, type_id: str) -> None:
        super().__init__(message)
        self.type_id = type_id


class DuplicateRegistrationError(ConfigurationError):
    """The same id was registered twice on one command type."""


class SealedSchemaError(ConfigurationError):
    """A registration was attempted after the type's schema was built."""


class PerformNotImplementedError(ConfigurationError):
    """The command type does not override ``perform()``."""
