"""Houseruin: Monte Carlo gambler's ruin simulation for a house with an edge."""

from houseruin.exceptions import InvalidConfigurationError
from houseruin.metrics.histogram import Histogram, NoData, build_histogram
from houseruin.metrics.risk import theoretical_ruin_probability
from houseruin.sim.batch import BatchResult, run_batch
from houseruin.sim.seeding import FixedSeedSource, TimeSeedSource
from houseruin.sim.trial import SimulationParameters, TrialOutcome, simulate_trial

__version__ = "0.1.0"
__all__ = [
    "BatchResult",
    "FixedSeedSource",
    "Histogram",
    "InvalidConfigurationError",
    "NoData",
    "SimulationParameters",
    "TimeSeedSource",
    "TrialOutcome",
    "build_histogram",
    "run_batch",
    "simulate_trial",
    "theoretical_ruin_probability",
]
