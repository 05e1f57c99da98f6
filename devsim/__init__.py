"""devsim: DEVS discrete event simulation kernel."""

from .core.simulator import Simulator
from .core.event_queue import Event, EventKind, EventQueue
from .core.atomic_model import AtomicModel
from .core.trace import Trace, TraceRecord
from .core.exceptions import ConfigurationError, MalformedPayload, OrderingViolation
from .scenario import build_simulator
from .utils.logger import setup_logger

__version__ = "0.1.0"
__all__ = [
    "Simulator",
    "Event",
    "EventKind",
    "EventQueue",
    "AtomicModel",
    "Trace",
    "TraceRecord",
    "ConfigurationError",
    "MalformedPayload",
    "OrderingViolation",
    "build_simulator",
    "setup_logger",
]
