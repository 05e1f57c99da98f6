"""Basic simulation example: a press feeding a drill."""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from devsim.core.simulator import Simulator
from devsim.models import Drill, Press
from devsim.utils.logger import setup_logger


def main():
    """Run a basic simulation."""
    logger = setup_logger("BasicSimulation")

    logger.info("=== Press -> Drill ===")

    simulator = Simulator()
    press = simulator.add_model(Press())
    drill = simulator.add_model(Drill(completion="1 part completed"))

    simulator.add_coupling(press, drill)
    simulator.route_input_to(press)
    simulator.take_output_from(drill)

    simulator.add_input("12", 1.5)
    simulator.add_input("2", 2.7)

    trace = simulator.simulate()

    logger.info("\n=== Trace ===")
    for record in trace:
        logger.info(str(record))

    summary = trace.summary()
    logger.info(f"\nOutputs: {summary['num_outputs']}")
    if 'mean_gap' in summary:
        logger.info(f"Mean gap between outputs: {summary['mean_gap']:.2f}")
    logger.info(f"Confluent events: {simulator.confluent_events}")


if __name__ == "__main__":
    main()
