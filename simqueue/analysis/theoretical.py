"""Analytic M/M/1 results for comparison with simulation output."""

from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional

from ..utils.logger import setup_logger

logger = setup_logger("Theoretical")


@dataclass
class TheoreticalMetrics:
    """Steady-state M/M/1 performance metrics."""

    is_applicable: bool
    traffic_intensity: float
    utilization: Optional[float] = None
    throughput: Optional[float] = None
    mean_number_in_system: Optional[float] = None
    mean_queue_length: Optional[float] = None
    mean_time_in_system: Optional[float] = None
    mean_wait_time: Optional[float] = None
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return asdict(self)


def calculate_mm1_metrics(arrival_rate: float, service_rate: float) -> TheoreticalMetrics:
    """Calculate steady-state metrics of an M/M/1 queue.

    With rho = lambda / mu < 1:
        L  = rho / (1 - rho)
        Lq = rho^2 / (1 - rho)
        W  = 1 / (mu - lambda)
        Wq = rho / (mu - lambda)

    Args:
        arrival_rate: Mean arrivals per unit time (lambda)
        service_rate: Mean service completions per unit time (mu)

    Returns:
        TheoreticalMetrics; ``is_applicable`` is False when the queue has no
        steady state (rho >= 1)

    Raises:
        ValueError: If a rate is not positive
    """
    if arrival_rate <= 0:
        raise ValueError(f"Arrival rate must be positive, got {arrival_rate}")
    if service_rate <= 0:
        raise ValueError(f"Service rate must be positive, got {service_rate}")

    rho = arrival_rate / service_rate

    if rho >= 1:
        logger.warning(f"Unstable system (rho={rho:.4f} >= 1), no steady state exists")
        return TheoreticalMetrics(
            is_applicable=False,
            traffic_intensity=rho,
            warnings=[
                f"Traffic intensity rho={rho:.4f} >= 1: the ready queue grows "
                "without bound and simulated averages depend on run length."
            ],
        )

    metrics = TheoreticalMetrics(
        is_applicable=True,
        traffic_intensity=rho,
        utilization=rho,
        throughput=arrival_rate,
        mean_number_in_system=rho / (1 - rho),
        mean_queue_length=rho ** 2 / (1 - rho),
        mean_time_in_system=1.0 / (service_rate - arrival_rate),
        mean_wait_time=rho / (service_rate - arrival_rate),
    )

    logger.debug(
        f"M/M/1 theoretical: rho={rho:.4f}, L={metrics.mean_number_in_system:.4f}, "
        f"W={metrics.mean_time_in_system:.4f}"
    )
    return metrics
