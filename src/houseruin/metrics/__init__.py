"""Histogram and risk summaries for simulated batches."""

from houseruin.metrics.histogram import (
    DEFAULT_FALLBACK_WIDTH,
    Histogram,
    HistogramBin,
    NoData,
    build_histogram,
)
from houseruin.metrics.risk import (
    expected_final_value,
    final_value_percentiles,
    surviving_mean,
    theoretical_ruin_probability,
)

__all__ = [
    "DEFAULT_FALLBACK_WIDTH",
    "Histogram",
    "HistogramBin",
    "NoData",
    "build_histogram",
    "expected_final_value",
    "final_value_percentiles",
    "surviving_mean",
    "theoretical_ruin_probability",
]
