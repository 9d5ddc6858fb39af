"""Pydantic models for leb.config.json."""

from pydantic import BaseModel, ConfigDict, Field

from leb.models.adapter_models import SEMVER_PATTERN
from leb.models.constants import RuntimeName

RUNTIME_VERSION_PATTERN = r"^[0-9]+\.[0-9]+(\.[0-9]+)?$"
LIBRARY_NAME_PATTERN = r"^[a-z][a-z0-9-]*$"


class VersionedExclusion(BaseModel):
    """Exclude a scenario for one library version only."""

    scenario: str = Field(..., min_length=1, description="Scenario path to exclude")
    version: str = Field(
        ..., pattern=SEMVER_PATTERN, description="Library version it applies to"
    )


# A bare string excludes the scenario for every version
ScenarioExclusion = str | VersionedExclusion


class BaselineConfig(BaseModel):
    """Library used as the performance baseline in comparison tables."""

    library: str = Field(..., description="Library name (must match a library)")
    version: str = Field(..., pattern=SEMVER_PATTERN, description="Baseline version")


class LibraryConfig(BaseModel):
    """A benchmarked library and the versions/scenarios it covers."""

    model_config = ConfigDict(populate_by_name=True)

    lang: RuntimeName = Field(..., description="Programming language")
    name: str = Field(
        ...,
        pattern=LIBRARY_NAME_PATTERN,
        description="Short name, matches the adapter name",
    )
    package: str = Field(..., description="Package name for the package manager")
    versions: list[str] = Field(
        default_factory=list, description="Versions to benchmark"
    )
    exclude_scenarios: list[ScenarioExclusion] = Field(
        default_factory=list,
        alias="excludeScenarios",
        description="Scenarios this library does not support",
    )


class LebConfig(BaseModel):
    """Root of leb.config.json."""

    model_config = ConfigDict(populate_by_name=True)

    schema_ref: str | None = Field(None, alias="$schema")
    runtimes: dict[str, str] = Field(
        ..., description="Runtime version per language (e.g., php: '8.3')"
    )
    baseline: BaselineConfig
    libraries: list[LibraryConfig] = Field(..., description="Target libraries")
