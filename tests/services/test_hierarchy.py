"""Tests for inheritance of parameters, convertors, and validators."""

from __future__ import annotations

from typing import Any

from commandeer import Command, optional, required
from commandeer.domain.convertors import StringConvertor


class UpperConvertor(StringConvertor):
    def convert(self, value: Any) -> str:
        return super().convert(value).upper()


class TitleConvertor(StringConvertor):
    def convert(self, value: Any) -> str:
        return super().convert(value).title()


def _reject_short(name, value, error, raw):
    if len(value) < 3:
        error(f"'{name}' is too short.", "too_short")


class Base(Command):
    code = required(type="shout")
    note = optional(default="base")

    def perform(self) -> str:
        return self.code


Base.add_convertor("shout", UpperConvertor)
Base.add_validator("short", _reject_short)


class Child(Base):
    extra = optional(type="integer", default=0)
    note = optional(default="child")


Child.add_convertor("shout", TitleConvertor)


class TestInheritance:
    def test_parameters_inherited(self) -> None:
        command = Child(code="abc")
        assert command.parameter_names == ["code", "note", "extra"]
        assert command.required_parameter_names == ["code"]

    def test_redeclared_parameter_overrides(self) -> None:
        assert Child().get("note") == "child"
        assert Base().get("note") == "base"

    def test_convertor_override_applies_to_subclass_only(self) -> None:
        assert Base(code="hello there").execute().value == "HELLO THERE"
        assert Child(code="hello there").execute().value == "Hello There"

    def test_builtin_convertors_reach_grandchildren(self) -> None:
        assert Child(code="x", extra="7").get("extra") == 7

    def test_inherited_validator(self) -> None:
        class Grandchild(Child):
            label = required(validations=["short"])

        result = Grandchild(code="abc", label="ab").execute()
        assert result.error_codes == ["too_short"]

    def test_validator_on_subclass_not_seen_by_parent(self) -> None:
        class Parent(Command):
            label = required()

            def perform(self) -> str:
                return self.label

        class Strict(Parent):
            pass

        Strict.validates("label", _reject_short)
        assert Parent(label="ab").execute().success is True
        assert Strict(label="ab").execute().failed is True

    def test_sibling_registrations_are_independent(self) -> None:
        class Root(Command):
            kind = required(type="flavour")

        class Sweet(Root):
            pass

        class Sour(Root):
            pass

        Sweet.add_convertor("flavour", UpperConvertor)
        Sour.add_convertor("flavour", TitleConvertor)
        assert Sweet(kind="lemon drop").get("kind") == "LEMON DROP"
        assert Sour(kind="lemon drop").get("kind") == "Lemon Drop"
        assert Root(kind="x").has_convertor("flavour") is False
