"""Core simulation components."""

from .simulator import Simulator, SimulationState
from .event_queue import Event, EventType, EventQueue
from .ready_queue import ReadyProcess, ReadyQueue
from .metrics_collector import MetricsCollector
from .simulation_config import SimulationConfig

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
]
