"""Single-trial ruin simulation.

A trial models one house lifetime: a run of fixed-size even-money bets in
which the house wins each round with ``edge_probability``. The trial ends
early as soon as the bankroll can no longer cover a payout.
"""

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from houseruin.exceptions import InvalidConfigurationError, require_integer
from houseruin.sim.seeding import SeedSource, TimeSeedSource

# Rounds drawn per vectorized block; a ruined trial stops drawing after the
# block in which ruin occurred.
_ROUND_BLOCK = 4096


@dataclass(frozen=True, slots=True)
class SimulationParameters:
    """Parameters shared read-only by every trial in a batch.

    Attributes:
        starting_bankroll: House capital at the start of each trial.
        bet_amount: Fixed stake of every round; also the ruin threshold.
        edge_probability: Probability (0.0 to 1.0) that the house wins a round.
        rounds_per_trial: Maximum number of rounds in one trial.
    """

    starting_bankroll: float
    bet_amount: float
    edge_probability: float
    rounds_per_trial: int

    def __post_init__(self) -> None:
        """Validate simulation parameters."""
        if not math.isfinite(self.starting_bankroll) or self.starting_bankroll <= 0:
            raise InvalidConfigurationError("starting_bankroll must be positive")
        if not math.isfinite(self.bet_amount) or self.bet_amount <= 0:
            raise InvalidConfigurationError("bet_amount must be positive")
        if not 0.0 <= self.edge_probability <= 1.0:
            raise InvalidConfigurationError("edge_probability must be between 0 and 1")
        require_integer(self.rounds_per_trial, "rounds_per_trial")
        if self.rounds_per_trial < 0:
            raise InvalidConfigurationError("rounds_per_trial cannot be negative")

    @property
    def house_edge(self) -> float:
        """Expected house profit per round as a fraction of the bet.

        Returns:
            2 * edge_probability - 1 (e.g. 1/9 for a 5/9 win probability).
        """
        return 2.0 * self.edge_probability - 1.0


@dataclass(frozen=True, slots=True)
class TrialOutcome:
    """Result of one trial.

    Attributes:
        final_bankroll: Bankroll when the trial stopped.
        ruined: True iff final_bankroll is below the bet amount.
        rounds_played: Rounds actually played before the trial stopped.
    """

    final_bankroll: float
    ruined: bool
    rounds_played: int

    @classmethod
    def from_final(
        cls, final_bankroll: float, bet_amount: float, rounds_played: int
    ) -> "TrialOutcome":
        """Build an outcome, deriving the ruin flag from the bet amount."""
        return cls(
            final_bankroll=final_bankroll,
            ruined=final_bankroll < bet_amount,
            rounds_played=rounds_played,
        )


def simulate_trial(
    params: SimulationParameters,
    trial_index: int = 0,
    rng: np.random.Generator | None = None,
    seed_source: SeedSource | None = None,
) -> TrialOutcome:
    """Simulate one trial of fixed-size bets until ruin or the round limit.

    Each round draws u uniformly from [0, 1). If u < edge_probability the
    house wins and the bankroll grows by bet_amount, otherwise it shrinks
    by bet_amount. After every round the bankroll is checked against the
    bet: once the house can no longer cover a payout it is ruined and the
    trial stops with that bankroll.

    Args:
        params: Simulation parameters.
        trial_index: Index of the trial in its batch. Only used to select
            the random stream from ``seed_source``.
        rng: Explicit random stream. Takes precedence over ``seed_source``.
        seed_source: Source of per-trial streams. Defaults to a fresh
            time-based source when neither ``rng`` nor this is given.

    Returns:
        The trial's outcome.

    Example:
        >>> params = SimulationParameters(
        ...     starting_bankroll=500.0,
        ...     bet_amount=25.0,
        ...     edge_probability=0.0,
        ...     rounds_per_trial=100,
        ... )
        >>> simulate_trial(params, rng=np.random.default_rng(42))
        TrialOutcome(final_bankroll=0.0, ruined=True, rounds_played=20)
    """
    if rng is None:
        source = seed_source if seed_source is not None else TimeSeedSource()
        rng = source.generator_for(trial_index)

    bankroll = float(params.starting_bankroll)
    bet = params.bet_amount
    rounds_played = 0

    while rounds_played < params.rounds_per_trial:
        block = min(_ROUND_BLOCK, params.rounds_per_trial - rounds_played)
        draws: NDArray[np.float64] = rng.random(block)
        steps = np.where(draws < params.edge_probability, bet, -bet)

        # Accumulate from the running bankroll so every partial sum matches
        # round-by-round addition exactly.
        path = np.cumsum(np.concatenate(([bankroll], steps)))[1:]

        below = np.flatnonzero(path < bet)
        if below.size > 0:
            first = int(below[0])
            return TrialOutcome(
                final_bankroll=float(path[first]),
                ruined=True,
                rounds_played=rounds_played + first + 1,
            )

        bankroll = float(path[-1])
        rounds_played += block

    return TrialOutcome.from_final(bankroll, bet, rounds_played)
