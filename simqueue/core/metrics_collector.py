"""Metrics collection and aggregation."""

import math

import numpy as np
from typing import Dict, List, Optional
from collections import defaultdict

from ..utils.logger import setup_logger


class MetricsCollector:
    """Collect and aggregate simulation metrics.

    Tracks per-process timings (turnaround, time spent in the ready
    queue) and, when tracing is enabled, the queue length and server
    status after every processed event. Run-wide totals live on the
    simulation state and are combined with these samples in
    ``compute_metrics``.
    """

    def __init__(self, percentiles: Optional[List[float]] = None,
                 record_trace: bool = False):
        """Initialize metrics collector.

        Args:
            percentiles: Percentiles to report for distribution metrics
            record_trace: Keep the per-event timeline and per-process records
        """
        self.logger = setup_logger(self.__class__.__name__)

        self.percentiles = list(percentiles) if percentiles is not None else [50, 90, 95, 99]
        self.record_trace = record_trace

        # Per-process samples
        self.turnaround_times = []
        self.wait_times = []
        self.service_times = []

        # Trace (time-series)
        self.timeline = defaultdict(list)
        self.process_records = []

    def record_completion(self, process_id: int, arrival_time: float,
                          service_start: float, departure_time: float) -> None:
        """Record timings for a departed process.

        Args:
            process_id: Process identifier
            arrival_time: Time the process arrived
            service_start: Time the process reached the server
            departure_time: Time the process left
        """
        self.turnaround_times.append(departure_time - arrival_time)
        self.wait_times.append(service_start - arrival_time)
        self.service_times.append(departure_time - service_start)

        if self.record_trace:
            self.process_records.append({
                'process_id': process_id,
                'arrival_time': arrival_time,
                'service_start': service_start,
                'departure_time': departure_time,
            })

    def record_step(self, timestamp: float, queue_length: int, server_busy: bool) -> None:
        """Record system status after an event has been processed."""
        if not self.record_trace:
            return

        self.timeline['timestamps'].append(timestamp)
        self.timeline['queue_length'].append(queue_length)
        self.timeline['server_busy'].append(int(server_busy))

    def compute_metrics(self, state) -> Dict:
        """Compute aggregate metrics at the end of a run.

        Args:
            state: Final simulation state

        Returns:
            Dictionary of computed metrics

        Raises:
            ValueError: If no simulated time has elapsed
        """
        clock = state.clock
        if clock <= 0:
            raise ValueError(f"Cannot compute rates over non-positive simulated time: {clock}")

        # Service already charged for the process in service but not yet elapsed
        unfinished = 0.0
        if state.in_service is not None:
            unfinished = max(0.0, state.in_service.departure_time - clock)
        busy_time = state.total_service_time - unfinished

        results = {
            'completed_processes': state.completed_count,
            'arrived_processes': state.arrived_count,
            'simulated_time': clock,
            'total_service_time': state.total_service_time,
            'total_ready_queue_time': state.total_ready_queue_time,
            'throughput': state.completed_count / clock,
            'raw_utilization': state.total_service_time / clock,
            'utilization': min(1.0, max(0.0, busy_time / clock)),
            'mean_ready_queue_length': state.total_ready_queue_time / clock,
        }

        if self.turnaround_times:
            results.update(self._compute_distribution_metrics(
                'turnaround_time', self.turnaround_times
            ))

        if self.wait_times:
            results.update(self._compute_distribution_metrics(
                'wait_time', self.wait_times
            ))

        if self.service_times:
            results.update(self._compute_distribution_metrics(
                'service_time', self.service_times
            ))

        self.logger.debug(
            f"Computed metrics from {len(self.turnaround_times)} process samples "
            f"over {clock:.4f} time units"
        )

        return results

    def _compute_distribution_metrics(self, name: str, values: List[float]) -> Dict:
        """Compute distribution statistics for a metric.

        Args:
            name: Metric name
            values: List of values

        Returns:
            Dictionary with mean, median, and percentiles
        """
        if not values:
            return {}

        results = {
            f'mean_{name}': float(np.mean(values)),
            f'median_{name}': float(np.median(values)),
            f'std_{name}': float(np.std(values)),
        }

        for p in self.percentiles:
            results[f'p{p}_{name}'] = float(np.percentile(values, p))

        return results

    def get_trace(self) -> Dict:
        """Get the recorded timeline and per-process records."""
        return {
            'timeline': dict(self.timeline),
            'processes': list(self.process_records),
        }

    @staticmethod
    def get_summary(results: Dict) -> str:
        """Get human-readable report of a finished run.

        Args:
            results: Results dictionary from ``Simulator.run``

        Returns:
            Formatted string with key metrics
        """
        summary = [
            "=== Simulation Results ===",
            f"Completed Processes: {results['completed_processes']}",
            f"Simulated Time: {results['simulated_time']:.4f}",
            f"Total Throughput: {results['throughput']:.4f} processes/unit time",
            f"Server Utilization: {results['utilization'] * 100:.2f}%",
            f"Average Number of Processes in the Ready Queue: "
            f"{results['mean_ready_queue_length']:.4f}",
        ]

        # Raw value also counts service not yet elapsed at the final clock
        raw = results.get('raw_utilization')
        if raw is not None and not math.isclose(raw, results['utilization']):
            summary.insert(5, f"Raw Utilization (total service / clock): {raw * 100:.2f}%")

        if 'mean_turnaround_time' in results:
            summary.append(
                f"Average Turnaround Time: {results['mean_turnaround_time']:.4f}"
            )
        if 'mean_wait_time' in results:
            summary.append(
                f"Average Ready Queue Wait: {results['mean_wait_time']:.4f}"
            )

        theoretical = results.get('theoretical')
        if theoretical and theoretical.get('is_applicable'):
            summary.extend([
                "--- M/M/1 analytic reference ---",
                f"Utilization (rho): {theoretical['utilization'] * 100:.2f}%",
                f"Mean Queue Length (Lq): {theoretical['mean_queue_length']:.4f}",
                f"Mean Turnaround (W): {theoretical['mean_time_in_system']:.4f}",
            ])

        return "\n".join(summary)
