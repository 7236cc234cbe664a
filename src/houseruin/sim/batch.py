"""Batch aggregation of independent ruin trials.

A batch runs the trial generator a fixed number of times for one set of
parameters and summarizes how many trials ended in ruin. Trials share no
mutable state, so a batch can optionally be fanned out over a process pool.
"""

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from functools import cached_property

import numpy as np
from numpy.typing import NDArray

from houseruin.exceptions import InvalidConfigurationError, require_integer
from houseruin.sim.seeding import SeedSource, TimeSeedSource
from houseruin.sim.trial import SimulationParameters, TrialOutcome, simulate_trial

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchResult:
    """Outcomes of one batch plus their ruin summary.

    Attributes:
        params: Parameters every trial in the batch was run with.
        outcomes: One outcome per trial, in trial index order.
        ruin_count: Number of ruined trials.
        ruin_probability: ruin_count / number of trials.
    """

    params: SimulationParameters
    outcomes: tuple[TrialOutcome, ...]
    ruin_count: int
    ruin_probability: float

    @classmethod
    def from_outcomes(
        cls,
        params: SimulationParameters,
        outcomes: tuple[TrialOutcome, ...],
    ) -> "BatchResult":
        """Summarize a complete set of outcomes."""
        if not outcomes:
            raise InvalidConfigurationError("a batch needs at least one outcome")
        ruin_count = sum(1 for outcome in outcomes if outcome.ruined)
        return cls(
            params=params,
            outcomes=outcomes,
            ruin_count=ruin_count,
            ruin_probability=ruin_count / len(outcomes),
        )

    @property
    def trial_count(self) -> int:
        return len(self.outcomes)

    @property
    def survivor_count(self) -> int:
        return self.trial_count - self.ruin_count

    @cached_property
    def final_bankrolls(self) -> NDArray[np.float64]:
        """Final bankroll of every trial, in trial index order."""
        return np.array(
            [outcome.final_bankroll for outcome in self.outcomes], dtype=np.float64
        )

    @cached_property
    def surviving_bankrolls(self) -> NDArray[np.float64]:
        """Final bankrolls of the trials that were not ruined."""
        return np.array(
            [outcome.final_bankroll for outcome in self.outcomes if not outcome.ruined],
            dtype=np.float64,
        )


def _run_trial_range(
    params: SimulationParameters,
    start: int,
    stop: int,
    seed_source: SeedSource,
) -> list[TrialOutcome]:
    return [
        simulate_trial(params, trial_index=index, seed_source=seed_source)
        for index in range(start, stop)
    ]


def _chunk_bounds(trial_count: int, n_chunks: int) -> list[tuple[int, int]]:
    """Split [0, trial_count) into at most n_chunks contiguous ranges."""
    edges = np.linspace(0, trial_count, n_chunks + 1).astype(int)
    return [
        (int(lo), int(hi)) for lo, hi in zip(edges[:-1], edges[1:]) if hi > lo
    ]


def run_batch(
    params: SimulationParameters,
    trial_count: int,
    seed_source: SeedSource | None = None,
    max_workers: int | None = None,
) -> BatchResult:
    """Run ``trial_count`` independent trials and summarize their ruin rate.

    Args:
        params: Simulation parameters shared by all trials.
        trial_count: Number of trials to run (at least 1).
        seed_source: Source of per-trial random streams. Defaults to a
            time-based source created for this batch.
        max_workers: When greater than 1, trials are split into contiguous
            index ranges and run on a process pool. Outcomes are reassembled
            in trial index order, so a fixed seed source gives the same
            result as a serial run.

    Returns:
        BatchResult with exactly ``trial_count`` outcomes.

    Raises:
        InvalidConfigurationError: If trial_count or max_workers is not
            positive.

    Example:
        >>> params = SimulationParameters(500.0, 25.0, 5 / 9, 100)
        >>> result = run_batch(params, trial_count=1000)
        >>> result.trial_count
        1000
    """
    require_integer(trial_count, "trial_count")
    if trial_count < 1:
        raise InvalidConfigurationError("trial_count must be positive")
    if max_workers is not None:
        require_integer(max_workers, "max_workers")
    if max_workers is not None and max_workers < 1:
        raise InvalidConfigurationError("max_workers must be positive")

    if seed_source is None:
        seed_source = TimeSeedSource()

    logger.debug(
        "Running %d trials: bankroll=%.2f bet=%.2f p=%.5f rounds=%d",
        trial_count,
        params.starting_bankroll,
        params.bet_amount,
        params.edge_probability,
        params.rounds_per_trial,
    )

    if max_workers is None or max_workers == 1 or trial_count == 1:
        outcomes = _run_trial_range(params, 0, trial_count, seed_source)
    else:
        bounds = _chunk_bounds(trial_count, max_workers)
        logger.debug("Fanning out %d chunks to %d workers", len(bounds), max_workers)
        outcomes = []
        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            futures = [
                executor.submit(_run_trial_range, params, lo, hi, seed_source)
                for lo, hi in bounds
            ]
            # Futures are consumed in submission order, which is index order.
            for future in futures:
                outcomes.extend(future.result())

    result = BatchResult.from_outcomes(params, tuple(outcomes))
    logger.info(
        "Batch finished: bankroll=%.2f ruined %d/%d (%.5f%%)",
        params.starting_bankroll,
        result.ruin_count,
        result.trial_count,
        result.ruin_probability * 100.0,
    )
    return result
