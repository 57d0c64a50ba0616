"""Basic simulation example."""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from simqueue.core.simulator import Simulator
from simqueue.core.metrics_collector import MetricsCollector
from simqueue.utils.logger import setup_logger
from configs import load_default_config, merge_configs


def main():
    """Run a basic simulation and sweep the arrival rate."""
    logger = setup_logger("BasicSimulation")

    logger.info("=== Basic Single-Server Queue Simulation ===")

    config = merge_configs(load_default_config(), {
        'simulation': {'target_completions': 10000, 'random_seed': 7},
        'workload': {'arrival_rate': 0.8, 'service_rate': 1.0},
    })

    logger.info(f"Arrival rate: {config['workload']['arrival_rate']}")
    logger.info(f"Service rate: {config['workload']['service_rate']}")

    simulator = Simulator(config)
    results = simulator.run()
    print(MetricsCollector.get_summary(results))

    # Utilization and queue length as load increases
    logger.info("\n=== Load sweep ===")
    for arrival_rate in (0.2, 0.4, 0.6, 0.8, 0.9):
        config['workload']['arrival_rate'] = arrival_rate
        results = Simulator(config).run()
        logger.info(
            f"lambda={arrival_rate:.1f}  utilization={results['utilization']:.2%}  "
            f"Lq={results['mean_ready_queue_length']:.3f}  "
            f"W={results['mean_turnaround_time']:.3f}"
        )

    logger.info("\nSimulation complete!")


if __name__ == "__main__":
    main()
