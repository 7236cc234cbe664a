"""Tests for the surviving bankroll histogram."""

import numpy as np
import pytest

from houseruin.exceptions import InvalidConfigurationError
from houseruin.metrics.histogram import (
    DEFAULT_FALLBACK_WIDTH,
    Histogram,
    NoData,
    build_histogram,
)


class TestBuildHistogram:
    """Tests for build_histogram binning."""

    def test_exact_bin_count_and_total(self) -> None:
        """Histogram has bin_count bins whose counts sum to the survivors."""
        rng = np.random.default_rng(42)
        survivors = rng.uniform(25.0, 3000.0, size=500)
        ruined = rng.uniform(0.0, 24.9, size=120)
        values = np.concatenate([survivors, ruined])

        hist = build_histogram(values, bet_amount=25.0, bin_count=15)

        assert isinstance(hist, Histogram)
        assert len(hist.bins) == 15
        assert hist.total == 500

    def test_known_layout(self) -> None:
        """The maximum value is placed in the last bin."""
        hist = build_histogram([100.0, 200.0, 300.0, 400.0], bet_amount=25.0, bin_count=3)

        assert isinstance(hist, Histogram)
        assert [b.count for b in hist.bins] == [1, 1, 2]
        assert hist.bin_width == pytest.approx(100.0)
        assert hist.max_count == 2

    def test_bins_are_contiguous_and_cover_range(self) -> None:
        """Bins tile [min, max] without gaps or overlaps."""
        values = [25.0, 37.5, 112.25, 480.0, 925.0, 1010.0]
        hist = build_histogram(values, bet_amount=25.0, bin_count=7)

        assert isinstance(hist, Histogram)
        assert hist.bins[0].lower == 25.0
        assert hist.bins[-1].upper == 1010.0
        for left, right in zip(hist.bins[:-1], hist.bins[1:]):
            assert left.upper == right.lower
            assert left.lower < left.upper

    def test_identical_values_use_fallback_width(self) -> None:
        """Zero-range data does not divide by zero and lands in one bin."""
        hist = build_histogram([100.0] * 10, bet_amount=25.0, bin_count=15)

        assert isinstance(hist, Histogram)
        assert len(hist.bins) == 15
        assert hist.total == 10
        assert hist.bin_width == DEFAULT_FALLBACK_WIDTH
        # Zero-range data goes to the first bin, whose bounds contain the value.
        assert hist.bins[0].count == 10
        assert hist.max_count == 10
        bounds = [edge for b in hist.bins for edge in (b.lower, b.upper)]
        assert all(np.isfinite(bounds))
        assert hist.bins[0].lower <= 100.0 < hist.bins[0].upper

    def test_custom_fallback_width(self) -> None:
        """The fallback width can be overridden."""
        hist = build_histogram([40.0, 40.0], bet_amount=25.0, bin_count=2, fallback_width=5.0)

        assert isinstance(hist, Histogram)
        assert hist.bin_width == 5.0
        assert hist.bins[1].upper == 50.0

    def test_no_survivors_returns_no_data(self) -> None:
        """All-ruined input reports NoData instead of raising."""
        result = build_histogram([0.0, 10.0, 24.99], bet_amount=25.0, bin_count=15)

        assert isinstance(result, NoData)
        assert "No surviving runs" in result.reason

    def test_empty_input_returns_no_data(self) -> None:
        """Empty input reports NoData."""
        assert isinstance(build_histogram([], bet_amount=25.0, bin_count=5), NoData)

    def test_value_equal_to_bet_survives(self) -> None:
        """A bankroll exactly equal to the bet is counted."""
        hist = build_histogram([25.0, 24.0], bet_amount=25.0, bin_count=4)

        assert isinstance(hist, Histogram)
        assert hist.total == 1

    def test_single_bin(self) -> None:
        """With one bin every survivor lands in it."""
        hist = build_histogram([30.0, 60.0, 90.0], bet_amount=25.0, bin_count=1)

        assert isinstance(hist, Histogram)
        assert [b.count for b in hist.bins] == [3]

    def test_fractions_sum_to_one(self) -> None:
        """Per-bin shares of survivors sum to 1."""
        hist = build_histogram([100.0, 200.0, 300.0, 400.0], bet_amount=25.0, bin_count=3)

        assert isinstance(hist, Histogram)
        np.testing.assert_array_almost_equal(hist.fractions(), [0.25, 0.25, 0.5])
        assert hist.fractions().sum() == pytest.approx(1.0)

    @pytest.mark.parametrize("bin_count", [0, -1])
    def test_invalid_bin_count_raises(self, bin_count: int) -> None:
        """bin_count < 1 is rejected."""
        with pytest.raises(InvalidConfigurationError, match="bin_count must be positive"):
            build_histogram([100.0], bet_amount=25.0, bin_count=bin_count)

    @pytest.mark.parametrize("bin_count", [2.5, 3.0, True])
    def test_non_integer_bin_count_raises(self, bin_count: object) -> None:
        """bin_count must be a whole number; bools do not count."""
        with pytest.raises(InvalidConfigurationError, match="bin_count must be an integer"):
            build_histogram([100.0, 200.0], bet_amount=25.0, bin_count=bin_count)  # type: ignore[arg-type]

    def test_invalid_bet_amount_raises(self) -> None:
        """A non-positive bet amount is rejected."""
        with pytest.raises(InvalidConfigurationError, match="bet_amount must be positive"):
            build_histogram([100.0], bet_amount=0.0, bin_count=3)

    def test_invalid_fallback_width_raises(self) -> None:
        """A non-positive fallback width is rejected."""
        with pytest.raises(InvalidConfigurationError, match="fallback_width"):
            build_histogram([100.0], bet_amount=25.0, bin_count=3, fallback_width=0.0)

    def test_non_finite_values_raise(self) -> None:
        """NaN and infinite bankrolls are rejected."""
        with pytest.raises(InvalidConfigurationError, match="finite"):
            build_histogram([100.0, float("nan")], bet_amount=25.0, bin_count=3)
        with pytest.raises(InvalidConfigurationError, match="finite"):
            build_histogram([100.0, float("inf")], bet_amount=25.0, bin_count=3)
