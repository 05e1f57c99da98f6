"""Part-processing machines used as example atomic models."""

import math
from typing import Any, Tuple

from ..core.atomic_model import AtomicModel
from ..core.exceptions import MalformedPayload


class Machine(AtomicModel):
    """Machine that completes one part per processing cycle.

    Inputs are part counts (ints, or strings holding ints). While parts are
    waiting the machine completes one every ``cycle_time`` and emits
    ``completion``. Inputs arriving mid-cycle do not restart the cycle.
    """

    def __init__(self, name: str, cycle_time: float, completion: Any = "1"):
        super().__init__(name)
        if cycle_time <= 0:
            raise ValueError(f"cycle_time must be positive, got {cycle_time}")
        self.cycle_time = cycle_time
        self.completion = completion
        self.parts = 0
        self._next_internal = math.inf

    def output(self) -> Any:
        return self.completion

    def internal_transition(self, time: float) -> None:
        self.parts -= 1
        self._next_internal = time + self.cycle_time if self.parts > 0 else math.inf

    def external_transition(self, inputs: Tuple[Any, ...], time: float) -> None:
        was_idle = self.parts == 0
        self.parts += self._count(inputs)

        if self.parts == 0:
            self._next_internal = math.inf
        elif was_idle:
            self._next_internal = time + self.cycle_time

    def confluent_transition(self, inputs: Tuple[Any, ...], time: float) -> None:
        # Finish the current part first, then accept the new ones
        self.internal_transition(time)
        self.external_transition(inputs, time)

    def next_internal_event_time(self) -> float:
        return self._next_internal

    def _count(self, inputs: Tuple[Any, ...]) -> int:
        total = 0
        for payload in inputs:
            try:
                count = int(payload)
            except (TypeError, ValueError):
                raise MalformedPayload(self.name, payload) from None
            if isinstance(payload, float) and payload != count:
                raise MalformedPayload(self.name, payload)
            if count < 0:
                raise MalformedPayload(self.name, payload)
            total += count
        return total

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, parts={self.parts}, cycle_time={self.cycle_time})"


class Press(Machine):
    """Machine with a one-unit cycle."""

    def __init__(self, name: str = "press", completion: Any = "1"):
        super().__init__(name, cycle_time=1, completion=completion)


class Drill(Machine):
    """Machine with a two-unit cycle."""

    def __init__(self, name: str = "drill", completion: Any = "1"):
        super().__init__(name, cycle_time=2, completion=completion)
