"""Definition models."""

import re
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

IDENTIFIER_PATTERN = re.compile(r"[a-z0-9-]+")


def is_valid_identifier(value: str) -> bool:
    return IDENTIFIER_PATTERN.fullmatch(value) is not None


class Kind(str, Enum):
    """Kind of invokable definition."""

    COMMAND = "command"
    AGENT = "agent"

    def __str__(self) -> str:
        return self.value


class Definition(BaseModel):
    """Loaded command or agent definition."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    identifier: str
    kind: Kind
    description: str
    body: str
    model_hint: str | None = None
    color_hint: str | None = None
    argument_hint: str | None = None
    tools: tuple[str, ...] = ()
    category: str | None = None
    source_path: Path | None = None
    takes_arguments: bool = False

    @field_validator("identifier")
    @classmethod
    def identifier_charset(cls, v: str) -> str:
        if not is_valid_identifier(v):
            raise ValueError(
                "identifier must be non-empty and use only lowercase letters, "
                "digits and hyphens"
            )
        return v

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("description must not be empty")
        return v.strip()

    @model_validator(mode="after")
    def kind_specific_fields(self) -> "Definition":
        """Agent-only and command-only metadata stay with their kind."""
        if self.kind is Kind.COMMAND:
            if self.color_hint is not None:
                raise ValueError("color is only allowed on agents")
            if self.tools:
                raise ValueError("tools are only allowed on agents")
        elif self.argument_hint is not None:
            raise ValueError("argument-hint is only allowed on commands")
        return self

    @property
    def key(self) -> tuple[Kind, str]:
        return (self.kind, self.identifier)


class ManifestEntry(BaseModel):
    """One expected definition listed by the manifest."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Kind
    identifier: str
    source: Path | None = Field(default=None)

    @field_validator("identifier")
    @classmethod
    def identifier_charset(cls, v: str) -> str:
        if not is_valid_identifier(v):
            raise ValueError(f"invalid identifier: {v!r}")
        return v

    @property
    def key(self) -> tuple[Kind, str]:
        return (self.kind, self.identifier)
