"""Pydantic models for the adapter protocol and benchmark results."""

from leb.models.adapter_models import AdapterInput, AdapterOutput, RawTimings
from leb.models.constants import (
    AdapterName,
    Lang,
    OutputFormat,
    RuntimeName,
    Scale,
    VerifyStatus,
)
from leb.models.result_models import (
    BenchResult,
    PhaseMetrics,
    RunSummary,
    TimingMetrics,
    VerifyResult,
)

__all__ = [
    "AdapterInput",
    "AdapterName",
    "AdapterOutput",
    "BenchResult",
    "Lang",
    "OutputFormat",
    "PhaseMetrics",
    "RawTimings",
    "RunSummary",
    "RuntimeName",
    "Scale",
    "TimingMetrics",
    "VerifyResult",
    "VerifyStatus",
]
