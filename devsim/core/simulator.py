"""Main simulator class orchestrating the discrete event simulation."""

import math
import time
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from .atomic_model import AtomicModel
from .coupling import SYSTEM_INPUT, SYSTEM_OUTPUT, Boundary, CouplingTable, ModelHandle
from .event_queue import Event, EventKind, EventQueue
from .exceptions import (
    ConfigurationError,
    MalformedPayload,
    OrderingViolation,
    SimulationLimitExceeded,
)
from .trace import Trace
from ..utils.logger import setup_logger

ModelRef = Union[ModelHandle, AtomicModel]


class SimulatorState(Enum):
    """Lifecycle of a simulator."""
    IDLE = "idle"
    RUNNING = "running"
    HALTED = "halted"


class Simulator:
    """DEVS simulator for a network of atomic models.

    The simulator owns everything a run needs:
    - registered models, addressed by the handle returned from add_model()
    - the coupling table routing outputs between models
    - the exogenous input schedule
    - the event queue and the output trace

    A simulator runs once. Models keep their state after a run, so a second
    run needs freshly built models and a new simulator.
    """

    def __init__(self, config: Optional[Dict] = None):
        """Initialize simulator.

        Args:
            config: Optional configuration dictionary. Reads the
                'simulation' section: max_steps, check_invariants, log_level.
        """
        self.config = config or {}
        sim_config = self.config.get('simulation') or {}
        self.logger = setup_logger(
            self.__class__.__name__, level=sim_config.get('log_level', 'INFO')
        )

        self.max_steps: Optional[int] = sim_config.get('max_steps')
        self.check_invariants: bool = bool(sim_config.get('check_invariants', False))

        # Configuration
        self.couplings = CouplingTable()
        self._models: List[AtomicModel] = []
        self._inputs: Dict[float, Any] = {}

        # Run state
        self.state = SimulatorState.IDLE
        self.current_time = 0.0
        self.event_queue = EventQueue(check_invariants=self.check_invariants)
        self.trace = Trace()
        self._outputs: List[Optional[Any]] = []

        # Statistics
        self.steps = 0
        self.events_processed = 0
        self.confluent_events = 0

        self._transition_handlers = {
            EventKind.INTERNAL: self._apply_internal,
            EventKind.EXTERNAL: self._apply_external,
            EventKind.CONFLUENT: self._apply_confluent,
        }

    # Configuration

    def add_model(self, model: AtomicModel) -> ModelHandle:
        """Register a model.

        Args:
            model: Model to register

        Returns:
            Handle identifying the model in couplings and events
        """
        self._check_configurable()
        if not isinstance(model, AtomicModel):
            raise ConfigurationError(f"{model!r} is not an AtomicModel")
        if any(existing is model for existing in self._models):
            raise ConfigurationError(f"Model {model.name!r} is already registered")

        self._models.append(model)
        handle = len(self._models) - 1
        self.logger.debug(f"Registered model {model.name!r} as handle {handle}")
        return handle

    def add_coupling(self, source: ModelRef, destination: ModelRef) -> None:
        """Route the output of ``source`` to ``destination`` as an input."""
        self._check_configurable()
        self.couplings.add(self._resolve(source), self._resolve(destination))

    def route_input_to(self, model: ModelRef) -> None:
        """Designate the model receiving exogenous inputs."""
        self._check_configurable()
        self.couplings.add(SYSTEM_INPUT, self._resolve(model))

    def take_output_from(self, model: ModelRef) -> None:
        """Designate the model whose output forms the trace."""
        self._check_configurable()
        self.couplings.add(self._resolve(model), SYSTEM_OUTPUT)

    def add_input(self, payload: Any, time: float) -> None:
        """Schedule an exogenous input for the entry point.

        A second input at the same time replaces the first.

        Args:
            payload: Value delivered to the entry-point model
            time: Absolute simulation time
        """
        self._check_configurable()
        if not math.isfinite(time):
            raise ConfigurationError(f"Input time must be finite, got {time}")
        self._inputs[float(time)] = payload

    def get_model(self, handle: ModelHandle) -> AtomicModel:
        return self._models[handle]

    def handle_of(self, model: AtomicModel) -> ModelHandle:
        for handle, existing in enumerate(self._models):
            if existing is model:
                return handle
        raise ConfigurationError(f"Model {model.name!r} is not registered")

    @property
    def models(self) -> List[AtomicModel]:
        return list(self._models)

    # Running

    def simulate(self) -> Trace:
        """Run the simulation until no events remain.

        Returns:
            Trace of outputs reaching the exit point

        Raises:
            ConfigurationError: If the network is incomplete or the
                simulator already ran
        """
        if self.state is not SimulatorState.IDLE:
            raise ConfigurationError(f"Simulator cannot run again (state: {self.state.value})")

        self.couplings.validate(range(len(self._models)))
        self.couplings.freeze()

        start_time = time.time()
        self.state = SimulatorState.RUNNING
        self.logger.info(
            f"Starting simulation: {len(self._models)} models, {len(self._inputs)} inputs"
        )

        try:
            self._initialize()
            while not self.event_queue.is_empty():
                self._step()
        except MalformedPayload as e:
            self.logger.error(f"Run aborted at t={self.current_time}: {e}")
            raise
        finally:
            self.state = SimulatorState.HALTED

        elapsed_time = time.time() - start_time
        self.logger.info(
            f"Simulation completed in {elapsed_time:.3f}s: {self.steps} steps, "
            f"{self.events_processed} events ({self.confluent_events} confluent), "
            f"{len(self.trace)} outputs, final time {self.current_time}"
        )
        return self.trace

    def _initialize(self) -> None:
        """Seed the queue with the exogenous inputs."""
        self.event_queue.clear()
        self.trace = Trace()
        self._outputs = [None] * len(self._models)

        entry_point = self.couplings.entry_point
        for input_time in sorted(self._inputs):
            self.event_queue.schedule_external(self._inputs[input_time], input_time, entry_point)

    def _step(self) -> None:
        """Process every event at the next simulation time."""
        r = self.event_queue.time_advance()
        imminent = self.event_queue.get_next_events()

        self.current_time = r
        self.steps += 1
        if self.max_steps is not None and self.steps > self.max_steps:
            raise SimulationLimitExceeded(
                f"Step limit of {self.max_steps} reached at t={r}"
            )
        self.logger.debug(f"Step {self.steps} at t={r}: {len(imminent)} imminent events")

        self._outputs = [None] * len(self._models)

        # Outputs reflect the state before any transition
        for event in imminent:
            if event.kind is not EventKind.EXTERNAL:
                self._outputs[event.model] = self._models[event.model].output()

        for handle, output in enumerate(self._outputs):
            if output is not None and output != "":
                self._route(handle, output, r)

        for event in imminent:
            self._transition_handlers[event.kind](self._models[event.model], event, r)
            self.events_processed += 1

        for event in imminent:
            self._reschedule(event.model, r)

    def _route(self, source: ModelHandle, output: Any, r: float) -> None:
        destination = self.couplings.destination(source)

        if destination is SYSTEM_OUTPUT:
            self.trace.append(r, output)
        elif destination is None:
            self.logger.debug(
                f"Dropping output {output!r} of uncoupled model {self._models[source].name!r}"
            )
        else:
            self.event_queue.schedule_external(output, r, destination)

    def _apply_internal(self, model: AtomicModel, event: Event, r: float) -> None:
        model.internal_transition(r)

    def _apply_external(self, model: AtomicModel, event: Event, r: float) -> None:
        model.external_transition(event.inputs, r)

    def _apply_confluent(self, model: AtomicModel, event: Event, r: float) -> None:
        self.confluent_events += 1
        model.confluent_transition(event.inputs, r)

    def _reschedule(self, handle: ModelHandle, r: float) -> None:
        model = self._models[handle]
        next_time = model.next_internal_event_time()

        if next_time == math.inf:
            return
        if not next_time >= r:
            raise OrderingViolation(
                f"Model {model.name!r} scheduled an event at {next_time}, before t={r}"
            )
        self.event_queue.schedule_internal(next_time, handle)

    # Helpers

    def _check_configurable(self) -> None:
        if self.state is not SimulatorState.IDLE:
            raise ConfigurationError("Simulator cannot be reconfigured once a run has started")

    def _resolve(self, model: Union[ModelRef, Boundary]) -> Union[ModelHandle, Boundary]:
        if isinstance(model, AtomicModel):
            return self.handle_of(model)
        return model

    def __repr__(self) -> str:
        return (
            f"Simulator(state={self.state.value}, models={len(self._models)}, "
            f"time={self.current_time}, pending={len(self.event_queue)})"
        )
