"""Validated run parameters for a single-server simulation."""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

DEFAULT_TARGET_COMPLETIONS = 10000
DEFAULT_PERCENTILES = [50, 90, 95, 99]
DISTRIBUTIONS = ('exponential', 'deterministic')


@dataclass
class SimulationConfig:
    """Configuration for one simulation run.

    Built from the nested configuration dictionary loaded from YAML
    (``simulation``, ``workload`` and ``metrics`` sections). Construction
    validates every value so that a bad configuration is rejected before
    the event loop starts.
    """

    # Workload
    arrival_rate: float
    service_rate: float
    distribution: str = 'exponential'

    # Run control
    target_completions: int = DEFAULT_TARGET_COMPLETIONS
    random_seed: Optional[int] = None
    check_invariants: bool = True
    show_progress: bool = False

    # Metrics
    percentiles: List[float] = field(default_factory=lambda: list(DEFAULT_PERCENTILES))
    record_trace: bool = False

    def __post_init__(self):
        """Validate configuration values."""
        self.arrival_rate = _positive_rate('arrival_rate', self.arrival_rate)
        self.service_rate = _positive_rate('service_rate', self.service_rate)

        if self.distribution not in DISTRIBUTIONS:
            raise ValueError(
                f"Unknown interval distribution: {self.distribution!r}, "
                f"expected one of {DISTRIBUTIONS}"
            )

        if isinstance(self.target_completions, bool) or not isinstance(self.target_completions, int):
            raise ValueError(
                f"target_completions must be an integer, got {self.target_completions!r}"
            )
        if self.target_completions <= 0:
            raise ValueError(
                f"target_completions must be positive, got {self.target_completions}"
            )

        for p in self.percentiles:
            try:
                value = float(p)
            except (TypeError, ValueError):
                raise ValueError(f"Percentile must be a number, got {p!r}")
            if not 0 <= value <= 100:
                raise ValueError(f"Percentile must be within [0, 100], got {p}")

    @classmethod
    def from_dict(cls, config: Dict) -> "SimulationConfig":
        """Create configuration from a nested configuration dictionary.

        Args:
            config: Dictionary with ``simulation``, ``workload`` and
                ``metrics`` sections

        Returns:
            Validated configuration

        Raises:
            ValueError: If a required value is missing or invalid
        """
        simulation = config.get('simulation') or {}
        workload = config.get('workload') or {}
        metrics = config.get('metrics') or {}

        for key in ('arrival_rate', 'service_rate'):
            if workload.get(key) is None:
                raise ValueError(f"Missing required workload parameter: {key}")

        return cls(
            arrival_rate=workload['arrival_rate'],
            service_rate=workload['service_rate'],
            distribution=workload.get('distribution', 'exponential'),
            target_completions=simulation.get('target_completions', DEFAULT_TARGET_COMPLETIONS),
            random_seed=simulation.get('random_seed'),
            check_invariants=simulation.get('check_invariants', True),
            show_progress=simulation.get('show_progress', False),
            percentiles=list(metrics.get('percentiles', DEFAULT_PERCENTILES)),
            record_trace=metrics.get('record_trace', False),
        )

    def to_dict(self) -> Dict:
        """Convert back to the nested dictionary layout."""
        return {
            'simulation': {
                'target_completions': self.target_completions,
                'random_seed': self.random_seed,
                'check_invariants': self.check_invariants,
                'show_progress': self.show_progress,
            },
            'workload': {
                'arrival_rate': self.arrival_rate,
                'service_rate': self.service_rate,
                'distribution': self.distribution,
            },
            'metrics': {
                'percentiles': list(self.percentiles),
                'record_trace': self.record_trace,
            },
        }


def _positive_rate(name: str, value) -> float:
    try:
        rate = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number, got {value!r}")

    if not math.isfinite(rate) or rate <= 0:
        raise ValueError(f"{name} must be a positive finite number, got {value!r}")
    return rate
