# src/tradejournal/export/settings.py
"""Settings for the report exporter."""
from typing import Literal

from pydantic import BaseModel, Field, field_validator

ExportFormat = Literal["csv", "json"]


class ExportSettings(BaseModel):
    """Configuration settings for exporting analytics reports.

    Attributes:
        enabled: Whether reports are written to disk.
        output_dir: Directory for exported files.
        formats: Formats to write.
        float_precision: Decimal places for floats in CSV output.
    """

    enabled: bool = True
    output_dir: str = "data/reports"
    formats: list[ExportFormat] = Field(default_factory=lambda: ["csv", "json"])
    float_precision: int = Field(default=4, ge=0, le=12)

    @field_validator("formats")
    @classmethod
    def validate_formats(cls, v: list[str]) -> list[str]:
        """Validate that at least one format is requested, without repeats."""
        if not v:
            raise ValueError("At least one export format is required")
        return list(dict.fromkeys(v))
