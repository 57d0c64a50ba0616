"""SimQueue: single-server discrete event queue simulator."""

from .core.simulator import Simulator, SimulationState
from .core.event_queue import Event, EventType, EventQueue
from .core.ready_queue import ReadyProcess, ReadyQueue
from .core.metrics_collector import MetricsCollector
from .core.simulation_config import SimulationConfig
from .workload.interval_generator import (
    IntervalGenerator,
    ExponentialIntervalGenerator,
    MeanIntervalGenerator,
    SequenceIntervalGenerator,
)
from .utils.logger import setup_logger

__version__ = "0.1.0"
__all__ = [
    "Simulator",
    "SimulationState",
    "Event",
    "EventType",
    "EventQueue",
    "ReadyProcess",
    "ReadyQueue",
    "MetricsCollector",
    "SimulationConfig",
    "IntervalGenerator",
    "ExponentialIntervalGenerator",
    "MeanIntervalGenerator",
    "SequenceIntervalGenerator",
    "setup_logger",
]
