"""Descriptive risk summaries for simulated batches.

This module provides functions for summarizing a batch of ruin trials:
expected final bankroll, the mean of the survivors, percentiles of the
final bankroll, and the classical infinite-horizon ruin probability used as
a reference value next to the empirical frequency.
"""

import math
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from houseruin.sim.batch import BatchResult
from houseruin.sim.trial import SimulationParameters


def expected_final_value(result: BatchResult) -> float:
    """Calculate the mean final bankroll across all trials.

    Args:
        result: A completed batch.

    Returns:
        Mean final bankroll, ruined trials included.
    """
    return float(np.mean(result.final_bankrolls))


def surviving_mean(result: BatchResult) -> float:
    """Calculate the mean final bankroll of the surviving trials.

    Returns:
        Mean surviving bankroll, or 0.0 if every trial was ruined.
    """
    survivors = result.surviving_bankrolls
    if survivors.size == 0:
        return 0.0
    return float(np.mean(survivors))


def final_value_percentiles(
    result: BatchResult,
    percentiles: Sequence[float] = (5.0, 50.0, 95.0),
) -> dict[float, float]:
    """Calculate percentiles of the final bankroll across all trials.

    Args:
        result: A completed batch.
        percentiles: Percentiles between 0 and 100.

    Returns:
        Mapping of each requested percentile to its final bankroll value.

    Raises:
        ValueError: If a percentile is outside [0, 100].
    """
    if any(not 0.0 <= p <= 100.0 for p in percentiles):
        raise ValueError("percentiles must be between 0 and 100")

    values: NDArray[np.float64] = np.percentile(
        result.final_bankrolls, list(percentiles)
    )
    return {float(p): float(v) for p, v in zip(percentiles, values)}


def losses_to_ruin(params: SimulationParameters) -> int:
    """Net number of lost rounds that takes the bankroll below the bet.

    Returns:
        Smallest k with starting_bankroll - k * bet_amount < bet_amount,
        or 0 when the starting bankroll is already below the bet.
    """
    return _losses_from(params.starting_bankroll, params.bet_amount)


def _losses_from(bankroll: float, bet_amount: float) -> int:
    if bankroll < bet_amount:
        return 0
    return math.floor((bankroll - bet_amount) / bet_amount) + 1


def theoretical_ruin_probability(params: SimulationParameters) -> float:
    """Classical gambler's ruin probability over an unlimited number of rounds.

    The house bankroll is a random walk that steps up with probability p
    and down with probability q = 1 - p. Ruin after k net losses happens
    with probability (q / p) ** k when p > q, and with certainty otherwise.
    A finite trial of at least one round can only be ruined less often, so
    this is an upper reference for the empirical frequency.

    A bankroll already below the bet still plays its first round: a loss
    ruins it, a win lifts it to starting_bankroll + bet_amount, from where
    the walk continues. Ruin then has probability q + p * R(start + bet).

    Args:
        params: Simulation parameters.

    Returns:
        Probability of eventual ruin between 0 and 1.

    Example:
        >>> params = SimulationParameters(500.0, 25.0, 5 / 9, 100)
        >>> round(theoretical_ruin_probability(params), 8)
        0.01152922
    """
    p = params.edge_probability
    q = 1.0 - p
    if q == 0.0:
        return 0.0
    if p <= q:
        return 1.0

    ratio = q / p
    k = losses_to_ruin(params)
    if k == 0:
        recovered = _losses_from(
            params.starting_bankroll + params.bet_amount, params.bet_amount
        )
        return float(q + p * ratio**recovered)

    return float(ratio**k)
