"""Simulation time with a tie-break counter."""

from dataclasses import dataclass
from functools import total_ordering


@total_ordering
@dataclass(frozen=True, eq=False)
class SimTime:
    """A point in simulation time.

    Ordered by ``real`` and then by ``counter``. The counter only separates
    events that share the same real time, which gives a total order over
    the event queue.

    Equality is exact on both fields. Times that must be recognised as
    simultaneous have to be produced by the same exact arithmetic.

    Attributes:
        real: Simulation time
        counter: Tie-break index among events at the same real time
    """
    real: float
    counter: int = 0

    def __eq__(self, other) -> bool:
        if not isinstance(other, SimTime):
            return NotImplemented
        return self.real == other.real and self.counter == other.counter

    def __lt__(self, other) -> bool:
        if not isinstance(other, SimTime):
            return NotImplemented
        if self.real == other.real:
            return self.counter < other.counter
        return self.real < other.real

    def __hash__(self) -> int:
        return hash((self.real, self.counter))

    def __str__(self) -> str:
        if self.counter:
            return f"{self.real}#{self.counter}"
        return str(self.real)
