"""Core simulation components."""

from .sim_time import SimTime
from .event_queue import ConfluentEvent, Event, EventKind, EventQueue, ExternalEvent, InternalEvent
from .atomic_model import AtomicModel
from .coupling import SYSTEM_INPUT, SYSTEM_OUTPUT, CouplingTable, ModelHandle
from .simulator import Simulator, SimulatorState
from .trace import Trace, TraceRecord
from .exceptions import (
    ConfigurationError,
    DevsError,
    MalformedPayload,
    OrderingViolation,
    SimulationLimitExceeded,
)

__all__ = [
    "SimTime",
    "Event",
    "EventKind",
    "InternalEvent",
    "ExternalEvent",
    "ConfluentEvent",
    "EventQueue",
    "AtomicModel",
    "CouplingTable",
    "ModelHandle",
    "SYSTEM_INPUT",
    "SYSTEM_OUTPUT",
    "Simulator",
    "SimulatorState",
    "Trace",
    "TraceRecord",
    "DevsError",
    "ConfigurationError",
    "MalformedPayload",
    "OrderingViolation",
    "SimulationLimitExceeded",
]
