"""Main entry point for the SimQueue simulator."""

import argparse
import sys
from pathlib import Path

from simqueue.core.simulator import Simulator
from simqueue.core.simulation_config import SimulationConfig
from simqueue.core.metrics_collector import MetricsCollector
from simqueue.utils.logger import setup_logger
from simqueue.utils.io import save_results, save_trace
from simqueue.utils.visualization import plot_results
from configs import load_config, load_default_config, merge_configs


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="SimQueue: single-server discrete event queue simulator"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file (defaults to the bundled default.yaml)",
    )
    parser.add_argument(
        "--arrival-rate",
        type=float,
        default=None,
        help="Mean arrivals per unit time",
    )
    parser.add_argument(
        "--service-rate",
        type=float,
        default=None,
        help="Mean service completions per unit time",
    )
    parser.add_argument(
        "--target-completions",
        type=int,
        default=None,
        help="Number of departed processes that ends the run",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible runs",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory to save results",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Record and save the per-event timeline and per-process records",
    )
    parser.add_argument(
        "--visualize",
        action="store_true",
        help="Generate visualization plots",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def prompt_rate(name: str, input_fn=None) -> float:
    """Ask for a rate on the console until a positive number is entered.

    Raises:
        ValueError: If input ends before a valid rate is read
    """
    if input_fn is None:
        input_fn = input
    while True:
        try:
            raw = input_fn(f"Enter the avg {name}:\n")
        except EOFError:
            raise ValueError(f"No {name} given: input ended before a value was entered")
        try:
            value = float(raw)
        except ValueError:
            print(f"Invalid number: {raw!r}")
            continue
        if value > 0:
            return value
        print(f"The {name} must be positive")


def build_config(args, input_fn=None) -> SimulationConfig:
    """Combine config file, command line overrides and prompts.

    Raises:
        ValueError: If the resulting configuration is invalid
    """
    if args.config:
        config = merge_configs(load_default_config(), load_config(args.config))
    else:
        config = load_default_config()

    overrides = {
        'simulation': {
            'target_completions': args.target_completions,
            'random_seed': args.seed,
            'show_progress': True if args.progress else None,
        },
        'workload': {
            'arrival_rate': args.arrival_rate,
            'service_rate': args.service_rate,
        },
        'metrics': {
            'record_trace': True if (args.trace or args.visualize) else None,
        },
    }
    config = merge_configs(config, overrides)

    workload = config.setdefault('workload', {})
    if workload.get('arrival_rate') is None:
        workload['arrival_rate'] = prompt_rate("arrival rate", input_fn)
    if workload.get('service_rate') is None:
        workload['service_rate'] = prompt_rate("service rate", input_fn)

    return SimulationConfig.from_dict(config)


def main(argv=None):
    """Main function."""
    args = parse_args(argv)

    # Setup logging
    log_level = "DEBUG" if args.verbose else "INFO"
    logger = setup_logger("SimQueue", level=log_level)

    logger.info("=== SimQueue: Single-Server Queue Simulator ===")

    try:
        config = build_config(args)
    except (OSError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    try:
        simulator = Simulator(config)
        results = simulator.run()

        print(MetricsCollector.get_summary(results))

        if args.output_dir:
            output_dir = Path(args.output_dir)
            results_file = save_results(results, output_dir / "results.yaml")
            logger.info(f"Results saved to {results_file}")

            trace = simulator.metrics_collector.get_trace()
            if args.trace:
                written = save_trace(trace, output_dir)
                logger.info(f"Trace saved to {', '.join(str(p) for p in written.values())}")

            if args.visualize:
                logger.info("Generating visualization plots...")
                plot_results(results, output_dir, trace)
                logger.info(f"Plots saved to {output_dir}")
        elif args.trace or args.visualize:
            logger.warning("--trace and --visualize need --output-dir; nothing written")

        logger.info("Simulation completed successfully!")
        return 0

    except Exception as e:
        logger.error(f"Simulation failed: {str(e)}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
