"""Seed sources that hand out one independent random stream per trial.

Every trial draws from its own ``numpy.random.Generator``. The stream is
derived from a base seed combined with the trial index through
``numpy.random.SeedSequence``, so streams differ across trials without the
index ever influencing outcome probabilities.
"""

import time
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

import numpy as np

from houseruin.exceptions import InvalidConfigurationError, require_integer


@runtime_checkable
class SeedSource(Protocol):
    """Anything that can produce the random stream for a given trial."""

    def generator_for(self, trial_index: int) -> np.random.Generator:
        """Return a fresh generator for ``trial_index``."""
        ...


def _generator(base_seed: int, trial_index: int) -> np.random.Generator:
    require_integer(trial_index, "trial_index")
    if trial_index < 0:
        raise InvalidConfigurationError("trial_index cannot be negative")
    sequence = np.random.SeedSequence([base_seed, trial_index])
    return np.random.default_rng(sequence)


@dataclass(frozen=True, slots=True)
class FixedSeedSource:
    """Reproducible seed source for tests and repeatable runs.

    Attributes:
        seed: Non-negative base seed shared by all trials of a run.
    """

    seed: int

    def __post_init__(self) -> None:
        """Validate the base seed."""
        require_integer(self.seed, "seed")
        if self.seed < 0:
            raise InvalidConfigurationError("seed cannot be negative")

    def generator_for(self, trial_index: int) -> np.random.Generator:
        return _generator(self.seed, trial_index)


@dataclass(frozen=True, slots=True)
class TimeSeedSource:
    """Seed source keyed on the wall clock at construction time.

    The base is captured once, so a single run stays internally consistent
    (and can be shipped to worker processes) while separate runs differ.

    Attributes:
        base_seed: Nanosecond timestamp taken when the source was created.
    """

    base_seed: int = field(default_factory=time.time_ns)

    def generator_for(self, trial_index: int) -> np.random.Generator:
        return _generator(self.base_seed, trial_index)
