"""Visualization utilities for simulation results."""

import matplotlib.pyplot as plt
import seaborn as sns
from pathlib import Path
from typing import Dict, Optional

sns.set_style("whitegrid")
sns.set_palette("husl")


def plot_results(results: Dict, output_dir: Path, trace: Optional[Dict] = None) -> None:
    """Generate all visualization plots.

    Args:
        results: Results dictionary from simulation
        output_dir: Directory to save plots
        trace: Recorded trace from ``MetricsCollector.get_trace`` (optional)
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    plot_summary(results, output_dir / "summary.png")

    if trace and trace.get('timeline'):
        plot_queue_timeline(trace, output_dir / "queue_timeline.png")

    if trace and trace.get('processes'):
        plot_turnaround_distribution(trace, output_dir / "turnaround_distribution.png")


def plot_summary(results: Dict, output_path: Path) -> None:
    """Plot simulated metrics next to the analytic M/M/1 values.

    Args:
        results: Results dictionary
        output_path: Output file path
    """
    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))

    theoretical = results.get('theoretical') or {}
    labels = ['Utilization', 'Mean Queue Length', 'Mean Turnaround']
    simulated = [
        results.get('utilization', 0),
        results.get('mean_ready_queue_length', 0),
        results.get('mean_turnaround_time', 0),
    ]

    x = range(len(labels))
    ax1.bar([i - 0.2 for i in x], simulated, width=0.4, label='Simulated', color='steelblue')
    if theoretical.get('is_applicable'):
        analytic = [
            theoretical['utilization'],
            theoretical['mean_queue_length'],
            theoretical['mean_time_in_system'],
        ]
        ax1.bar([i + 0.2 for i in x], analytic, width=0.4, label='M/M/1', color='coral')
    ax1.set_xticks(list(x))
    ax1.set_xticklabels(labels)
    ax1.set_title('Simulated vs. Analytic')
    ax1.legend()
    ax1.grid(axis='y', alpha=0.3)

    metrics_text = [
        f"Arrival rate: {results.get('arrival_rate', 0):.4f}",
        f"Service rate: {results.get('service_rate', 0):.4f}",
        f"Completed: {results.get('completed_processes', 0)}",
        f"Throughput: {results.get('throughput', 0):.4f}",
        f"Utilization: {results.get('utilization', 0):.2%}",
        f"Mean Ready Queue: {results.get('mean_ready_queue_length', 0):.4f}",
    ]
    ax2.text(0.1, 0.5, '\n'.join(metrics_text), fontsize=12,
             verticalalignment='center', family='monospace')
    ax2.axis('off')
    ax2.set_title('Summary Metrics')

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)


def plot_queue_timeline(trace: Dict, output_path: Path) -> None:
    """Plot ready queue length and server status over simulated time.

    Args:
        trace: Trace dictionary with a ``timeline`` section
        output_path: Output file path
    """
    timeline = trace.get('timeline') or {}
    if not timeline.get('timestamps'):
        return

    timestamps = timeline['timestamps']

    fig, axes = plt.subplots(2, 1, figsize=(12, 8), sharex=True)

    ax = axes[0]
    ax.step(timestamps, timeline['queue_length'], where='post', linewidth=1)
    ax.set_ylabel('Processes')
    ax.set_title('Ready Queue Length')
    ax.grid(alpha=0.3)

    ax = axes[1]
    ax.step(timestamps, timeline['server_busy'], where='post', linewidth=1, color='coral')
    ax.set_xlabel('Simulated time')
    ax.set_ylabel('Busy')
    ax.set_title('Server Status')
    ax.set_ylim([-0.1, 1.1])
    ax.grid(alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)


def plot_turnaround_distribution(trace: Dict, output_path: Path) -> None:
    """Plot histograms of per-process turnaround and wait times.

    Args:
        trace: Trace dictionary with a ``processes`` section
        output_path: Output file path
    """
    processes = trace.get('processes') or []
    if not processes:
        return

    turnaround = [p['departure_time'] - p['arrival_time'] for p in processes]
    wait = [p['service_start'] - p['arrival_time'] for p in processes]

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))

    sns.histplot(turnaround, ax=ax1, color='steelblue', kde=len(set(turnaround)) > 1)
    ax1.set_xlabel('Turnaround time')
    ax1.set_title('Turnaround Time Distribution')

    sns.histplot(wait, ax=ax2, color='lightgreen')
    ax2.set_xlabel('Ready queue wait')
    ax2.set_title('Ready Queue Wait Distribution')

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
