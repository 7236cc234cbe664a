"""Simulation module for ruin trials and batches."""

from houseruin.sim.batch import BatchResult, run_batch
from houseruin.sim.seeding import FixedSeedSource, SeedSource, TimeSeedSource
from houseruin.sim.trial import SimulationParameters, TrialOutcome, simulate_trial

__all__ = [
    "BatchResult",
    "FixedSeedSource",
    "SeedSource",
    "SimulationParameters",
    "TimeSeedSource",
    "TrialOutcome",
    "run_batch",
    "simulate_trial",
]
