"""Error and Result — the outcome of one command execution.

INVARIANT: ``Command.execute()`` always returns a Result. Input problems
travel in ``Result.errors``; only configuration errors are raised.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, computed_field


class Error(BaseModel):
    """One validation or execution problem."""

    model_config = {"frozen": True}

    message: str
    code: str | None = None

    def __str__(self) -> str:
        return self.message


class Result(BaseModel):
    """Value returned by ``perform()`` plus the errors of the same call.

    Attributes:
        value: Return value of the work, or None when it did not run.
        errors: Errors recorded during validation and execution, in order.
    """

    model_config = {"frozen": True}

    value: Any = None
    errors: tuple[Error, ...] = ()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def success(self) -> bool:
        return not self.errors

    @computed_field  # type: ignore[prop-decorator]
    @property
    def failed(self) -> bool:
        return not self.success

    @computed_field  # type: ignore[prop-decorator]
    @property
    def error_codes(self) -> list[str | None]:
        return [error.code for error in self.errors]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def error_messages(self) -> list[str]:
        return [error.message for error in self.errors]
