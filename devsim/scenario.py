"""Build a simulator from a scenario configuration."""

from typing import Dict, Mapping, Optional

from .core.exceptions import ConfigurationError
from .core.simulator import Simulator
from .models import MODEL_TYPES


def build_simulator(config: Dict, model_types: Optional[Mapping[str, type]] = None) -> Simulator:
    """Create a configured simulator from a scenario dictionary.

    Expected sections: 'models' (list of {name, type, **params}),
    'couplings' (list of {source, destination}), 'input' and 'output'
    (model names), 'inputs' (list of {time, payload}) and an optional
    'simulation' section passed to the Simulator.

    Args:
        config: Scenario configuration
        model_types: Mapping from type name to model class, defaults to
            the bundled example models

    Returns:
        Simulator ready to run

    Raises:
        ConfigurationError: If the scenario is incomplete or inconsistent
    """
    model_types = MODEL_TYPES if model_types is None else model_types
    simulator = Simulator(config)

    handles = {}
    for model_spec in config.get('models') or []:
        if not isinstance(model_spec, dict):
            raise ConfigurationError(f"Model entry must be a mapping: {model_spec!r}")
        params = dict(model_spec)
        name = params.pop('name', None)
        type_name = params.pop('type', None)
        if not name or not type_name:
            raise ConfigurationError(f"Model entry needs 'name' and 'type': {model_spec!r}")
        if name in handles:
            raise ConfigurationError(f"Duplicate model name {name!r}")
        if type_name not in model_types:
            raise ConfigurationError(
                f"Unknown model type {type_name!r}, expected one of {sorted(model_types)}"
            )
        try:
            model = model_types[type_name](name=name, **params)
        except TypeError as e:
            raise ConfigurationError(f"Bad parameters for model {name!r}: {e}") from e
        handles[name] = simulator.add_model(model)

    def lookup(name):
        if name not in handles:
            raise ConfigurationError(f"Unknown model {name!r} in scenario")
        return handles[name]

    for coupling in config.get('couplings') or []:
        if not isinstance(coupling, dict) or 'source' not in coupling or 'destination' not in coupling:
            raise ConfigurationError(
                f"Coupling entry needs 'source' and 'destination': {coupling!r}"
            )
        simulator.add_coupling(lookup(coupling['source']), lookup(coupling['destination']))

    if config.get('input') is not None:
        simulator.route_input_to(lookup(config['input']))
    if config.get('output') is not None:
        simulator.take_output_from(lookup(config['output']))

    for entry in config.get('inputs') or []:
        if not isinstance(entry, dict) or 'time' not in entry or 'payload' not in entry:
            raise ConfigurationError(f"Input entry needs 'time' and 'payload': {entry!r}")
        try:
            input_time = float(entry['time'])
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Input time must be a number: {entry!r}") from e
        simulator.add_input(entry['payload'], input_time)

    simulator.logger.info(
        f"Scenario loaded: models={list(handles)}, entry={config.get('input')}, "
        f"exit={config.get('output')}"
    )
    return simulator
