"""Pydantic models for the adapter stdin/stdout protocol."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat

from leb.models.constants import (
    MAX_ITERATIONS,
    MAX_WARMUP,
    MIN_ITERATIONS,
    MIN_WARMUP,
    Lang,
)

SEMVER_PATTERN = r"^[0-9]+\.[0-9]+\.[0-9]+$"


class AdapterInput(BaseModel):
    """Request written to an adapter's stdin as a single JSON document."""

    model_config = ConfigDict(frozen=True)

    template: str = Field(
        ..., min_length=1, description="Template source code to benchmark"
    )
    data: dict[str, Any] = Field(
        default_factory=dict, description="Template variables passed to render()"
    )
    iterations: int = Field(
        ...,
        ge=MIN_ITERATIONS,
        le=MAX_ITERATIONS,
        description="Number of measurement iterations",
    )
    warmup: int = Field(
        ...,
        ge=MIN_WARMUP,
        le=MAX_WARMUP,
        description="Number of warmup iterations (not measured)",
    )


class RawTimings(BaseModel):
    """Per-iteration timing measurements in milliseconds."""

    parse_ms: list[NonNegativeFloat] = Field(
        ..., min_length=1, description="Parse time for each iteration"
    )
    render_ms: list[NonNegativeFloat] = Field(
        ..., min_length=1, description="Render time for each iteration"
    )


class AdapterOutput(BaseModel):
    """Response read from an adapter's stdout."""

    library: str = Field(
        ..., min_length=1, description="Library identifier (e.g., keepsuit/php-liquid)"
    )
    version: str = Field(
        ..., pattern=SEMVER_PATTERN, description="Library version (semver)"
    )
    lang: Lang = Field(..., description="Programming language")
    runtime_version: str | None = Field(
        None, description="Runtime version (e.g., 8.3.0)"
    )
    timings: RawTimings = Field(..., description="Raw timing measurements")
    rendered_output: str | None = Field(
        None, description="Rendered template output, used for snapshot verification"
    )
