"""Random time-interval generation for arrivals and service."""

import math
from typing import Dict, Optional, Sequence

import numpy as np


class IntervalGenerator:
    """Base class for time-interval generators.

    The engine asks for an inter-arrival interval with the arrival rate and
    for a service time with the service rate. Subclasses implement
    ``sample``; the per-kind hooks delegate to it unless overridden.
    """

    def sample(self, rate: float) -> float:
        """Draw one interval for the given rate.

        Args:
            rate: Events per unit time (must be positive)

        Returns:
            Non-negative interval length
        """
        raise NotImplementedError

    def sample_arrival(self, rate: float) -> float:
        """Draw the interval until the next arrival."""
        return self.sample(rate)

    def sample_service(self, rate: float) -> float:
        """Draw the service time of one process."""
        return self.sample(rate)


def _check_rate(rate: float) -> None:
    if not rate > 0 or not math.isfinite(rate):
        raise ValueError(f"Rate must be a positive finite number, got {rate}")


class ExponentialIntervalGenerator(IntervalGenerator):
    """Exponentially distributed intervals with mean ``1/rate``.

    Uses inverse transform sampling: a uniform draw ``u`` strictly inside
    (0, 1) maps to ``-ln(u) / rate``, which is always finite and positive.
    """

    def __init__(self, seed: Optional[int] = None,
                 rng: Optional[np.random.Generator] = None):
        """Initialize generator.

        Args:
            seed: Seed for a new random generator
            rng: Existing generator to draw from (takes precedence over seed)
        """
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def sample(self, rate: float) -> float:
        _check_rate(rate)

        # random() is in [0, 1); redraw the single value that would give inf
        u = self.rng.random()
        while u == 0.0:
            u = self.rng.random()

        return -math.log(u) / rate


class MeanIntervalGenerator(IntervalGenerator):
    """Deterministic generator that always returns the mean ``1/rate``."""

    def sample(self, rate: float) -> float:
        _check_rate(rate)
        return 1.0 / rate


class SequenceIntervalGenerator(IntervalGenerator):
    """Replays fixed interval sequences, cycling when exhausted.

    Arrival and service intervals come from separate sequences so a run
    is exactly reproducible regardless of how draws interleave.
    """

    def __init__(self, arrival_intervals: Sequence[float],
                 service_times: Sequence[float]):
        if not arrival_intervals or not service_times:
            raise ValueError("Interval sequences must not be empty")
        for value in list(arrival_intervals) + list(service_times):
            if not value > 0 or not math.isfinite(value):
                raise ValueError(f"Intervals must be positive and finite, got {value}")

        self.arrival_intervals = list(arrival_intervals)
        self.service_times = list(service_times)
        self._arrival_index = 0
        self._service_index = 0

    def sample(self, rate: float) -> float:
        raise TypeError("SequenceIntervalGenerator only supports per-kind sampling")

    def sample_arrival(self, rate: float) -> float:
        value = self.arrival_intervals[self._arrival_index % len(self.arrival_intervals)]
        self._arrival_index += 1
        return value

    def sample_service(self, rate: float) -> float:
        value = self.service_times[self._service_index % len(self.service_times)]
        self._service_index += 1
        return value


def build_interval_generator(config: Dict) -> IntervalGenerator:
    """Create the interval generator named by the workload configuration.

    Args:
        config: Nested configuration dictionary

    Returns:
        Interval generator instance

    Raises:
        ValueError: If the distribution name is unknown
    """
    distribution = (config.get('workload') or {}).get('distribution', 'exponential')
    seed = (config.get('simulation') or {}).get('random_seed')

    if distribution == 'exponential':
        return ExponentialIntervalGenerator(seed=seed)
    elif distribution == 'deterministic':
        return MeanIntervalGenerator()
    else:
        raise ValueError(f"Unknown interval distribution: {distribution}")
