"""Pydantic models for CLI configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from resmeta.config.constants import DEFAULT_INDENT, OUTPUT_FORMATS


class CLIConfig(BaseModel):
    """Root configuration model."""

    default_format: str = "table"
    origin_name: str | None = Field(
        default=None, description="Source system stamped into origin annotations",
    )
    indent: int = Field(
        default=DEFAULT_INDENT, ge=0, le=8, description="Indent used when writing JSON files",
    )

    @field_validator("default_format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v not in OUTPUT_FORMATS:
            raise ValueError(f"Format must be one of: {', '.join(OUTPUT_FORMATS)}")
        return v
