"""Main entry point for the devsim simulator."""

import argparse
import sys
from pathlib import Path

from configs import DEFAULT_CONFIG_PATH, load_config, merge_configs
from devsim.scenario import build_simulator
from devsim.utils.io import save_yaml
from devsim.utils.logger import setup_logger
from devsim.utils.visualization import plot_trace


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="devsim: DEVS discrete event simulator"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=str(DEFAULT_CONFIG_PATH),
        help="Path to scenario configuration file",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory to save the trace and summary",
    )
    parser.add_argument(
        "--visualize",
        action="store_true",
        help="Plot the trace (requires --output-dir)",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Abort the run after this many simulation steps",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Main function."""
    args = parse_args(argv)

    log_level = "DEBUG" if args.verbose else "INFO"
    logger = setup_logger("devsim", level=log_level)

    logger.info(f"Loading scenario from {args.config}")

    try:
        overrides = {'simulation': {'log_level': log_level}}
        if args.max_steps is not None:
            overrides['simulation']['max_steps'] = args.max_steps
        config = merge_configs(load_config(args.config), overrides)

        simulator = build_simulator(config)
        trace = simulator.simulate()

        sys.stdout.write(trace.format())

        summary = {
            **trace.summary(),
            'steps': simulator.steps,
            'events_processed': simulator.events_processed,
            'confluent_events': simulator.confluent_events,
            'final_time': simulator.current_time,
        }
        logger.info(f"Outputs: {summary['num_outputs']}, steps: {summary['steps']}")

        if args.output_dir:
            output_dir = Path(args.output_dir)
            save_yaml(trace.to_records(), output_dir / "trace.yaml")
            save_yaml(summary, output_dir / "summary.yaml")
            logger.info(f"Results saved to {output_dir}")

            if args.visualize:
                plot_trace(trace, output_dir / "trace.png")
                logger.info(f"Plot saved to {output_dir / 'trace.png'}")
        elif args.visualize:
            logger.warning("--visualize needs --output-dir, skipping plot")

        return 0

    except Exception as e:
        logger.error(f"Simulation failed: {str(e)}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
