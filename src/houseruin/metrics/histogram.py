"""Equal-width histogram of surviving final bankrolls.

Ruined trials are excluded before binning. The builder reports an explicit
``NoData`` result when nothing survives instead of fabricating empty bins.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray

from houseruin.exceptions import InvalidConfigurationError, require_integer

logger = logging.getLogger(__name__)

# Width used when every surviving bankroll is identical. Display only; it has
# no effect on ruin statistics.
DEFAULT_FALLBACK_WIDTH = 100.0


class HistogramBin(NamedTuple):
    """One histogram bin covering [lower, upper)."""

    lower: float
    upper: float
    count: int


class NoData(NamedTuple):
    """Returned instead of a histogram when no trial survived."""

    reason: str


@dataclass(frozen=True, slots=True)
class Histogram:
    """Binned distribution of surviving final bankrolls.

    Attributes:
        bins: Contiguous bins in ascending order.
        bin_width: Width of every bin (the fallback width for zero-range data).
        min_value: Smallest surviving bankroll.
        max_value: Largest surviving bankroll.
        max_count: Largest single bin count, used to scale bar charts.
    """

    bins: tuple[HistogramBin, ...]
    bin_width: float
    min_value: float
    max_value: float
    max_count: int

    @property
    def total(self) -> int:
        """Number of values binned (equals the number of survivors)."""
        return sum(b.count for b in self.bins)

    @property
    def counts(self) -> NDArray[np.int64]:
        return np.array([b.count for b in self.bins], dtype=np.int64)

    def fractions(self) -> NDArray[np.float64]:
        """Share of survivors in each bin.

        Returns:
            NDArray of shape (n_bins,) summing to 1.
        """
        return self.counts / float(self.total)


def build_histogram(
    final_bankrolls: Sequence[float] | NDArray[np.float64],
    bet_amount: float,
    bin_count: int,
    fallback_width: float = DEFAULT_FALLBACK_WIDTH,
) -> Histogram | NoData:
    """Partition surviving final bankrolls into ``bin_count`` equal-width bins.

    Values below ``bet_amount`` belong to ruined trials and are dropped.
    Bin i covers [min + i * width, min + (i + 1) * width). The maximum value
    always lands in the last bin so floating point error at the upper edge
    cannot exclude it. When all survivors are identical the range is zero,
    ``fallback_width`` is used instead and every value goes to the first bin.

    Args:
        final_bankrolls: Final bankrolls of a batch (ruined trials included
            or not; they are filtered either way).
        bet_amount: Ruin threshold of the batch.
        bin_count: Number of bins (at least 1).
        fallback_width: Bin width used for zero-range data.

    Returns:
        Histogram with exactly ``bin_count`` bins whose counts sum to the
        number of survivors, or NoData when there are no survivors.

    Raises:
        InvalidConfigurationError: If bin_count, bet_amount or fallback_width
            is not positive, or the input holds NaN or infinite values.

    Example:
        >>> hist = build_histogram([0.0, 100.0, 150.0, 200.0], 25.0, 2)
        >>> [b.count for b in hist.bins]
        [1, 2]
    """
    require_integer(bin_count, "bin_count")
    if bin_count < 1:
        raise InvalidConfigurationError("bin_count must be positive")
    if bet_amount <= 0:
        raise InvalidConfigurationError("bet_amount must be positive")
    if not fallback_width > 0 or not np.isfinite(fallback_width):
        raise InvalidConfigurationError("fallback_width must be positive")

    values = np.asarray(final_bankrolls, dtype=np.float64).ravel()
    if not np.all(np.isfinite(values)):
        raise InvalidConfigurationError("final_bankrolls must be finite")

    survivors = values[values >= bet_amount]
    if survivors.size == 0:
        return NoData(reason="No surviving runs to chart.")

    min_value = float(survivors.min())
    max_value = float(survivors.max())
    bin_width = (max_value - min_value) / bin_count

    if bin_width == 0:
        logger.debug(
            "Zero-range data at %.2f, using fallback bin width %.2f",
            min_value,
            fallback_width,
        )
        bin_width = fallback_width
        indices = np.zeros(survivors.size, dtype=np.intp)
        last_upper = min_value + bin_count * bin_width
    else:
        indices = np.floor((survivors - min_value) / bin_width).astype(np.intp)
        np.clip(indices, 0, bin_count - 1, out=indices)
        indices[survivors == max_value] = bin_count - 1
        last_upper = max_value

    counts = np.bincount(indices, minlength=bin_count)

    bins = tuple(
        HistogramBin(
            lower=min_value + i * bin_width,
            upper=last_upper if i == bin_count - 1 else min_value + (i + 1) * bin_width,
            count=int(counts[i]),
        )
        for i in range(bin_count)
    )

    return Histogram(
        bins=bins,
        bin_width=bin_width,
        min_value=min_value,
        max_value=max_value,
        max_count=int(counts.max()),
    )
