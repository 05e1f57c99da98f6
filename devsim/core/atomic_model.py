# devsim/core/atomic_model.py
"""
Abstract base class for atomic models driven by the simulator.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple


class AtomicModel(ABC):
    """A simulated entity with private state.

    The simulator only talks to models through these five methods. For a
    model with an imminent internal or confluent event, ``output`` is called
    before the transition and must reflect the state before it.
    """

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def output(self) -> Optional[Any]:
        """Return the payload emitted at the coming internal event, or None."""
        pass

    @abstractmethod
    def internal_transition(self, time: float) -> None:
        """Apply the autonomous state change scheduled for ``time``."""
        pass

    @abstractmethod
    def external_transition(self, inputs: Tuple[Any, ...], time: float) -> None:
        """Apply the state change caused by inputs received at ``time``."""
        pass

    @abstractmethod
    def confluent_transition(self, inputs: Tuple[Any, ...], time: float) -> None:
        """Resolve an internal event and received inputs at the same ``time``."""
        pass

    @abstractmethod
    def next_internal_event_time(self) -> float:
        """Absolute time of the next internal event, or math.inf if none."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
