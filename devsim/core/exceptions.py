"""Exceptions raised by the simulation kernel and its models."""


class DevsError(Exception):
    """Base class for all simulator errors."""


class ConfigurationError(DevsError, ValueError):
    """The coupling network or input schedule is unusable.

    Raised before any event is processed: missing entry or exit point,
    couplings naming unregistered models, or changes after a run started.
    """


class MalformedPayload(DevsError, ValueError):
    """A model received a payload it cannot interpret."""

    def __init__(self, model_name: str, payload):
        self.model_name = model_name
        self.payload = payload
        super().__init__(f"{model_name}: cannot interpret payload {payload!r}")


class OrderingViolation(DevsError, AssertionError):
    """An event queue or clock invariant was broken.

    Never expected from a correct kernel; treated as fatal.
    """


class SimulationLimitExceeded(DevsError):
    """The run hit its configured step limit before the queue drained."""
