"""Validated front-matter model for instruction documents.

Lint rules inspect the raw mapping so they can report every problem;
this model is the strict view used once a document is known to be sound.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from instrctl.domain.globs import parse_apply_to


class InstructionFrontmatter(BaseModel):
    """``description`` + ``applyTo`` front-matter of one document."""

    model_config = {"frozen": True, "extra": "ignore", "populate_by_name": True}

    description: str
    apply_to: str = Field(alias="applyTo")

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, value: str) -> str:
        value = str(value).strip()
        if not value:
            msg = "description must not be empty"
            raise ValueError(msg)
        return value

    @field_validator("apply_to", mode="before")
    @classmethod
    def _apply_to_string(cls, value: Any) -> Any:
        if isinstance(value, list):
            value = ",".join(str(item) for item in value)
        if isinstance(value, str):
            if not parse_apply_to(value):
                msg = "applyTo must name at least one glob pattern"
                raise ValueError(msg)
            return str(value).strip()
        return value

    @property
    def globs(self) -> list[str]:
        """The parsed ``applyTo`` glob patterns."""
        return parse_apply_to(self.apply_to)
