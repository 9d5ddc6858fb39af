"""Constants for leb models and commands."""

from enum import StrEnum


class Lang(StrEnum):
    """Languages an adapter may report in its output."""

    PHP = "php"
    RUBY = "ruby"
    GO = "go"
    RUST = "rust"
    JAVASCRIPT = "javascript"


class RuntimeName(StrEnum):
    """Runtimes that have adapters implemented."""

    PHP = "php"
    RUBY = "ruby"


class AdapterName(StrEnum):
    """Benchmark adapter names."""

    KEEPSUIT = "keepsuit"
    KALIMATAS = "kalimatas"
    SHOPIFY = "shopify"


class Scale(StrEnum):
    """Data-volume tiers for fixture data."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    XXL = "2xl"


class VerifyStatus(StrEnum):
    """Outcome of comparing rendered output with a snapshot."""

    PASS = "pass"
    FAIL = "fail"
    MISSING = "missing"


class OutputFormat(StrEnum):
    """Result output formats."""

    JSON = "json"
    TABLE = "table"


# Bounds accepted by adapters (mirrored in AdapterInput)
MIN_ITERATIONS = 1
MAX_ITERATIONS = 10_000
MIN_WARMUP = 0
MAX_WARMUP = 1_000

DEFAULT_ITERATIONS = 100
DEFAULT_WARMUP = 10
DEFAULT_SCALE = Scale.MEDIUM
DEFAULT_TIMEOUT_MS = 300_000

# Scenario category that holds include-only templates
PARTIALS_CATEGORY = "partials"
