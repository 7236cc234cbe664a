"""Scenario configuration for ruin simulations."""

from dataclasses import dataclass

from houseruin.exceptions import InvalidConfigurationError, require_integer
from houseruin.sim.seeding import FixedSeedSource, SeedSource, TimeSeedSource
from houseruin.sim.trial import SimulationParameters

# Starting bankrolls swept by the bankroll comparison run.
BANKROLL_SWEEP: tuple[float, ...] = (
    500.0,
    1000.0,
    2500.0,
    5000.0,
    7500.0,
    10000.0,
    15000.0,
    20000.0,
)


@dataclass(frozen=True, slots=True)
class ScenarioConfig:
    """Configuration for a set of batches sharing everything but the bankroll.

    Attributes:
        edge_probability: Probability that the house wins a single bet.
        bet_amount: Fixed amount of every bet.
        rounds_per_trial: Number of bets in one trial (one casino lifetime).
        trial_count: Number of trials simulated per starting bankroll.
        histogram_bins: Number of bins in the final bankroll histogram.
        starting_bankrolls: Starting bankrolls to test, one batch each.
        seed: Base seed for reproducible runs (None for time-based seeding).
        max_workers: Worker processes per batch (None runs serially).
    """

    edge_probability: float = 5.0 / 9.0
    bet_amount: float = 25.0
    rounds_per_trial: int = 100
    trial_count: int = 10_000
    histogram_bins: int = 15
    starting_bankrolls: tuple[float, ...] = (500.0,)
    seed: int | None = None
    max_workers: int | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not 0.0 <= self.edge_probability <= 1.0:
            raise InvalidConfigurationError("edge_probability must be between 0 and 1")
        if self.bet_amount <= 0:
            raise InvalidConfigurationError("bet_amount must be positive")
        for name in ("rounds_per_trial", "trial_count", "histogram_bins"):
            require_integer(getattr(self, name), name)
        if self.rounds_per_trial < 0:
            raise InvalidConfigurationError("rounds_per_trial cannot be negative")
        if self.trial_count < 1:
            raise InvalidConfigurationError("trial_count must be positive")
        if self.histogram_bins < 1:
            raise InvalidConfigurationError("histogram_bins must be positive")
        if not self.starting_bankrolls:
            raise InvalidConfigurationError("starting_bankrolls cannot be empty")
        if any(b <= 0 for b in self.starting_bankrolls):
            raise InvalidConfigurationError("starting_bankrolls must be positive")
        if self.seed is not None:
            require_integer(self.seed, "seed")
        if self.seed is not None and self.seed < 0:
            raise InvalidConfigurationError("seed cannot be negative")
        if self.max_workers is not None:
            require_integer(self.max_workers, "max_workers")
        if self.max_workers is not None and self.max_workers < 1:
            raise InvalidConfigurationError("max_workers must be positive")

    def parameters_for(self, starting_bankroll: float) -> SimulationParameters:
        """Build the per-trial parameters for one starting bankroll."""
        return SimulationParameters(
            starting_bankroll=starting_bankroll,
            bet_amount=self.bet_amount,
            edge_probability=self.edge_probability,
            rounds_per_trial=self.rounds_per_trial,
        )

    def seed_source(self) -> SeedSource:
        """Return a fixed seed source if a seed is set, else a time-based one."""
        if self.seed is not None:
            return FixedSeedSource(self.seed)
        return TimeSeedSource()
