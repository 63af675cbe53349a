"""Pydantic models describing exported footprint reports."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SchemaVersionLiteral = Literal["0.1.0"]
CURRENT_REPORT_SCHEMA_VERSION: SchemaVersionLiteral = "0.1.0"


class TipRecord(BaseModel):
    """Suggested action included in a report."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    title: str = Field(..., min_length=1)
    description: str
    impact: str


class TranscriptTurn(BaseModel):
    """One transcript entry as exported."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    speaker: Literal["bot", "user"]
    content: str
    timestamp: datetime


class FootprintReport(BaseModel):
    """Immutable, versioned record of a finished questionnaire."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: SchemaVersionLiteral = Field(
        default=CURRENT_REPORT_SCHEMA_VERSION,
        description="Semantic version of the report schema.",
    )
    kind: Literal["individual", "company"] = Field(
        ..., description="Who the footprint was calculated for."
    )
    answers: dict[str, float | str | None] = Field(
        ..., description="Answer record as collected."
    )
    components: dict[str, float] = Field(
        ..., description="Per-category emissions in tons CO2/year."
    )
    total_tons: float = Field(
        ..., ge=0.0, description="Annual footprint in tons CO2/year."
    )
    global_average_tons: float = Field(..., gt=0.0)
    band: Literal["success", "info", "warning"] = Field(
        ..., description="Benchmark band relative to the global average."
    )
    band_message: str
    tips: list[TipRecord] = Field(default_factory=list)
    share_url: str
    transcript: list[TranscriptTurn] = Field(default_factory=list)
