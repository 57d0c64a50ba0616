"""Main simulator class orchestrating the discrete event simulation."""

import time
from dataclasses import dataclass
from typing import Dict, Optional, Union

from tqdm import tqdm

from .event_queue import Event, EventType, EventQueue
from .ready_queue import ReadyQueue
from .metrics_collector import MetricsCollector
from .simulation_config import SimulationConfig
from ..analysis.theoretical import calculate_mm1_metrics
from ..workload.interval_generator import IntervalGenerator, build_interval_generator
from ..utils.logger import setup_logger


@dataclass
class ServiceSlot:
    """The process currently occupying the server."""
    process_id: int
    arrival_time: float
    service_start: float
    departure_time: float


@dataclass
class SimulationState:
    """Mutable state of one simulation run.

    Attributes:
        clock: Current simulated time
        server_busy: Whether a process occupies the server
        next_process_id: Id of the most recently scheduled arrival
        total_service_time: Sum of service times of processes that
            entered service
        total_ready_queue_time: Ready queue length summed after every
            processed event
        completed_count: Number of departed processes
        arrived_count: Number of processed arrivals
        in_service: Process on the server, if any
    """
    clock: float = 0.0
    server_busy: bool = False
    next_process_id: int = 1
    total_service_time: float = 0.0
    total_ready_queue_time: float = 0.0
    completed_count: int = 0
    arrived_count: int = 0
    in_service: Optional[ServiceSlot] = None


class Simulator:
    """Discrete event simulator for a single-server queue.

    Processes arrive at random, take the server when it is idle and
    otherwise wait in a FIFO ready queue. The run ends once the
    configured number of processes have departed.
    """

    def __init__(self, config: Union[Dict, SimulationConfig],
                 interval_generator: Optional[IntervalGenerator] = None):
        """Initialize simulator.

        Args:
            config: Simulation configuration dictionary or validated config
            interval_generator: Source of inter-arrival and service times;
                built from the configuration when omitted

        Raises:
            ValueError: If the configuration is invalid
        """
        if not isinstance(config, SimulationConfig):
            config = SimulationConfig.from_dict(config)
        self.config = config
        self.logger = setup_logger(self.__class__.__name__)

        self.interval_generator = (
            interval_generator if interval_generator is not None
            else build_interval_generator(config.to_dict())
        )

        self.event_queue = EventQueue()
        self.ready_queue = ReadyQueue()
        self.metrics_collector = MetricsCollector(
            percentiles=config.percentiles,
            record_trace=config.record_trace,
        )
        self.state = SimulationState()

        self._handlers = {
            EventType.ARRIVAL: self._handle_arrival,
            EventType.DEPARTURE: self._handle_departure,
        }

        self._initialize()

        self.logger.info("Simulator initialized")
        self.logger.info(
            f"Arrival rate: {config.arrival_rate}, service rate: {config.service_rate}, "
            f"target completions: {config.target_completions}"
        )

    @property
    def finished(self) -> bool:
        """Whether the completion target has been reached."""
        return self.state.completed_count >= self.config.target_completions

    def run(self) -> Dict:
        """Run the simulation until the completion target is reached.

        Returns:
            Dictionary containing simulation results and metrics
        """
        start_time = time.time()
        self.logger.info("Starting simulation...")

        with tqdm(total=self.config.target_completions,
                  initial=self.state.completed_count,
                  desc="Completed processes",
                  disable=not self.config.show_progress) as progress:
            while not self.finished:
                event = self.step()
                if event.event_type == EventType.DEPARTURE:
                    progress.update(1)

        results = self._finalize()

        elapsed_time = time.time() - start_time
        self.logger.info(f"Simulation completed in {elapsed_time:.2f}s")

        return results

    def step(self) -> Event:
        """Process the earliest pending event.

        Returns:
            The processed event

        Raises:
            IndexError: If no event is pending
            RuntimeError: If the event lies in the past or a state
                invariant is violated
        """
        event = self.event_queue.pop()

        if event.time < self.state.clock:
            raise RuntimeError(
                f"Event at t={event.time} precedes current clock t={self.state.clock}"
            )
        self.state.clock = event.time

        self.logger.debug(
            f"t={event.time:.6f} {event.event_type.value} process={event.process_id}"
        )
        self._handlers[event.event_type](event)

        if event.event_type == EventType.DEPARTURE:
            self.state.completed_count += 1

        self.state.total_ready_queue_time += len(self.ready_queue)
        self.metrics_collector.record_step(
            self.state.clock, len(self.ready_queue), self.state.server_busy
        )

        if self.config.check_invariants:
            self.check_invariants()

        return event

    def check_invariants(self) -> None:
        """Verify consistency between the state and both queues.

        Raises:
            RuntimeError: If any invariant is violated
        """
        state = self.state

        if state.server_busy != (state.in_service is not None):
            raise RuntimeError(
                f"Server busy flag ({state.server_busy}) disagrees with "
                f"in-service process ({state.in_service})"
            )

        in_service = 1 if state.server_busy else 0
        accounted = state.completed_count + len(self.ready_queue) + in_service
        if state.arrived_count != accounted:
            raise RuntimeError(
                f"Process conservation violated: {state.arrived_count} arrived, "
                f"{state.completed_count} departed, {len(self.ready_queue)} waiting, "
                f"{in_service} in service"
            )

        if not state.server_busy and not self.ready_queue.is_empty():
            raise RuntimeError("Processes are waiting while the server is idle")

        if self.event_queue.is_empty() and not self.finished:
            raise RuntimeError("Event queue drained before the completion target")

    def _initialize(self) -> None:
        """Schedule the first arrival at time zero."""
        self.event_queue.insert(EventType.ARRIVAL, 0.0, self.state.next_process_id)

    def _start_service(self, process_id: int, arrival_time: float,
                       service_time: float) -> None:
        """Put a process on the server and schedule its departure."""
        state = self.state
        state.server_busy = True
        state.total_service_time += service_time
        state.in_service = ServiceSlot(
            process_id=process_id,
            arrival_time=arrival_time,
            service_start=state.clock,
            departure_time=state.clock + service_time,
        )
        self.event_queue.insert(EventType.DEPARTURE, state.in_service.departure_time, process_id)

    def _handle_arrival(self, event: Event) -> None:
        """Handle process arrival."""
        state = self.state
        state.arrived_count += 1

        # Service time is drawn on arrival whether or not the server is free
        service_time = self.interval_generator.sample_service(self.config.service_rate)

        if not state.server_busy:
            self._start_service(event.process_id, state.clock, service_time)
        else:
            self.ready_queue.push_back(event.process_id, service_time, state.clock)

        # Keep exactly one future arrival pending
        interval = self.interval_generator.sample_arrival(self.config.arrival_rate)
        state.next_process_id += 1
        self.event_queue.insert(EventType.ARRIVAL, state.clock + interval, state.next_process_id)

    def _handle_departure(self, event: Event) -> None:
        """Handle process departure."""
        state = self.state
        departing = state.in_service

        if departing is None or departing.process_id != event.process_id:
            raise RuntimeError(
                f"Departure of process {event.process_id} but server holds {departing}"
            )

        self.metrics_collector.record_completion(
            departing.process_id,
            departing.arrival_time,
            departing.service_start,
            state.clock,
        )

        if self.ready_queue.is_empty():
            state.server_busy = False
            state.in_service = None
        else:
            process = self.ready_queue.pop_front()
            self._start_service(process.process_id, process.arrival_time, process.service_time)

    def _finalize(self) -> Dict:
        """Finalize simulation and compute results.

        Returns:
            Dictionary containing all results and metrics
        """
        self.logger.info("Finalizing simulation...")

        discarded = len(self.event_queue)
        if discarded:
            self.logger.debug(f"Discarding {discarded} pending events:\n{self.event_queue.dump()}")
        self.event_queue.clear()

        metrics = self.metrics_collector.compute_metrics(self.state)

        theoretical = calculate_mm1_metrics(self.config.arrival_rate, self.config.service_rate)

        results = {
            'arrival_rate': self.config.arrival_rate,
            'service_rate': self.config.service_rate,
            'target_completions': self.config.target_completions,
            'ready_queue_remaining': len(self.ready_queue),
            'discarded_events': discarded,
            **metrics,
            'theoretical': theoretical.to_dict(),
        }

        return results
