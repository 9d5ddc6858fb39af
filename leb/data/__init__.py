"""Per-scale benchmark data."""

from leb.data.loader import (
    SCALE_LIMITS,
    DataLoader,
    DataLoadError,
    apply_scale_limits,
    default_data_dir,
)

__all__ = [
    "SCALE_LIMITS",
    "DataLoadError",
    "DataLoader",
    "apply_scale_limits",
    "default_data_dir",
]
