"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, commandeer.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class CommandsConfig(BaseModel):
    """[commands] section.

    ``aliases`` maps short names to ``package.module:ClassName`` targets::

        [commands.aliases]
        add = "myapp.commands:AddNumbers"
    """

    model_config = {"frozen": True}

    aliases: dict[str, str] = Field(default_factory=dict)

    @field_validator("aliases")
    @classmethod
    def _targets_have_class(cls, aliases: dict[str, str]) -> dict[str, str]:
        for alias, target in aliases.items():
            if ":" not in target:
                msg = f"Alias '{alias}' must point at 'module:ClassName', got {target!r}"
                raise ValueError(msg)
        return aliases
