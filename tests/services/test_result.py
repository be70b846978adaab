"""Tests for Result and Error."""

import json

import pytest
from pydantic import ValidationError

from commandeer.services.result import Error, Result


class TestError:
    def test_construction(self) -> None:
        error = Error(message="Not found", code="missing")
        assert error.message == "Not found"
        assert error.code == "missing"
        assert str(error) == "Not found"

    def test_code_optional(self) -> None:
        assert Error(message="bad").code is None

    def test_frozen(self) -> None:
        error = Error(message="bad")
        with pytest.raises(ValidationError):
            error.message = "worse"  # type: ignore[misc]


class TestResult:
    def test_success(self) -> None:
        result = Result(value=10)
        assert result.success is True
        assert result.failed is False
        assert result.errors == ()
        assert result.error_codes == []
        assert result.error_messages == []

    def test_failure(self) -> None:
        result = Result(
            errors=(Error(message="first", code="a"), Error(message="second")),
        )
        assert result.value is None
        assert result.success is False
        assert result.failed is True
        assert result.error_codes == ["a", None]
        assert result.error_messages == ["first", "second"]

    def test_equality(self) -> None:
        errors = (Error(message="first"),)
        assert Result(value=1, errors=errors) == Result(value=1, errors=errors)
        assert Result(value=1) != Result(value=2)

    def test_frozen(self) -> None:
        result = Result(value=1)
        with pytest.raises(ValidationError):
            result.value = 2  # type: ignore[misc]

    def test_json_serialization_includes_derived_fields(self) -> None:
        result = Result(value={"total": 3}, errors=(Error(message="oops", code="x"),))
        parsed = json.loads(result.model_dump_json())
        assert parsed["value"] == {"total": 3}
        assert parsed["errors"] == [{"message": "oops", "code": "x"}]
        assert parsed["success"] is False
        assert parsed["failed"] is True
        assert parsed["error_codes"] == ["x"]
        assert parsed["error_messages"] == ["oops"]
