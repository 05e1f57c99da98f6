"""Event queue implementation for discrete event simulation."""

import bisect
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Iterator, List, Optional, Tuple, Union

from .coupling import ModelHandle
from .exceptions import OrderingViolation
from .sim_time import SimTime


class EventKind(Enum):
    """Kinds of pending events."""
    # Autonomous transition of a model
    INTERNAL = "internal"
    # Input delivered to a model
    EXTERNAL = "external"
    # Autonomous transition and delivered input at the same instant
    CONFLUENT = "confluent"


@dataclass(frozen=True)
class InternalEvent:
    """Scheduled autonomous transition.

    Attributes:
        time: Event timestamp
        model: Handle of the target model
    """
    time: SimTime
    model: ModelHandle

    kind: ClassVar[EventKind] = EventKind.INTERNAL


@dataclass(frozen=True)
class ExternalEvent:
    """Input delivery.

    Attributes:
        time: Event timestamp
        model: Handle of the target model
        inputs: Payloads delivered at this instant, in arrival order
    """
    time: SimTime
    model: ModelHandle
    inputs: Tuple[Any, ...]

    kind: ClassVar[EventKind] = EventKind.EXTERNAL


@dataclass(frozen=True)
class ConfluentEvent:
    """Autonomous transition colliding with an input delivery.

    Attributes:
        time: Event timestamp
        model: Handle of the target model
        inputs: Payloads delivered at this instant, in arrival order
    """
    time: SimTime
    model: ModelHandle
    inputs: Tuple[Any, ...]

    kind: ClassVar[EventKind] = EventKind.CONFLUENT


Event = Union[InternalEvent, ExternalEvent, ConfluentEvent]


def _real_time(event: Event) -> float:
    return event.time.real


class EventQueue:
    """Ordered queue of pending events with collision handling.

    Events are kept sorted by SimTime. Among events sharing a real time the
    counters strictly increase in queue order, and each model has at most one
    pending event per real time: a second arrival for the same model and
    time is merged into the existing entry instead of being appended.
    """

    def __init__(self, check_invariants: bool = False):
        """Initialize empty event queue.

        Args:
            check_invariants: Verify ordering after every insertion
        """
        self._queue: List[Event] = []
        self.check_invariants = check_invariants

    def schedule_internal(self, r: float, model: ModelHandle) -> None:
        """Schedule an autonomous transition for a model.

        A pending input delivery for the same model at ``r`` becomes a
        confluent event. If the model already has an internal or confluent
        event at ``r`` nothing changes.

        Args:
            r: Real simulation time
            model: Target model handle
        """
        lo, hi = self._span(r)
        index = self._find(lo, hi, model)

        if index is not None:
            existing = self._queue[index]
            if existing.kind is EventKind.EXTERNAL:
                self._queue[index] = ConfluentEvent(existing.time, model, existing.inputs)
        else:
            self._queue.insert(hi, InternalEvent(self._next_time(r, lo, hi), model))

        self._verify()

    def schedule_external(self, payload: Any, r: float, model: ModelHandle) -> None:
        """Schedule delivery of a payload to a model.

        A pending internal event for the same model at ``r`` becomes a
        confluent event carrying ``payload``. A pending delivery (external
        or confluent) at ``r`` receives ``payload`` as an additional input.

        Args:
            payload: Value to deliver
            r: Real simulation time
            model: Target model handle
        """
        lo, hi = self._span(r)
        index = self._find(lo, hi, model)

        if index is None:
            self._queue.insert(
                hi, ExternalEvent(self._next_time(r, lo, hi), model, (payload,))
            )
        else:
            existing = self._queue[index]
            if existing.kind is EventKind.INTERNAL:
                merged = ConfluentEvent(existing.time, model, (payload,))
            else:
                merged = type(existing)(existing.time, model, existing.inputs + (payload,))
            self._queue[index] = merged

        self._verify()

    def get_next_events(self) -> List[Event]:
        """Remove and return the imminent events.

        Returns:
            Every event at the minimal real time, in queue order. Empty if
            the queue is empty.
        """
        if not self._queue:
            return []

        _, hi = self._span(self._queue[0].time.real)
        imminent = self._queue[:hi]
        del self._queue[:hi]
        return imminent

    def time_advance(self) -> Optional[float]:
        """Return the minimal real time in the queue without removing anything.

        Returns:
            Next real time, or None if queue is empty
        """
        return self._queue[0].time.real if self._queue else None

    def peek(self) -> Optional[Event]:
        """Return the next event without removing it.

        Returns:
            Next event, or None if queue is empty
        """
        return self._queue[0] if self._queue else None

    def is_empty(self) -> bool:
        """Check if queue is empty.

        Returns:
            True if queue is empty
        """
        return len(self._queue) == 0

    def clear(self) -> None:
        """Remove all events from queue."""
        self._queue.clear()

    def verify(self) -> None:
        """Check the ordering invariants of the queue.

        Raises:
            OrderingViolation: If entries are out of order or a model has
                two pending events at the same real time
        """
        seen = set()
        for previous, current in zip(self._queue, self._queue[1:]):
            if not previous.time < current.time:
                raise OrderingViolation(
                    f"Queue out of order: {previous.time} before {current.time}"
                )
        for event in self._queue:
            key = (event.model, event.time.real)
            if key in seen:
                raise OrderingViolation(
                    f"Model {event.model} has two pending events at {event.time.real}"
                )
            seen.add(key)

    def _verify(self) -> None:
        if self.check_invariants:
            self.verify()

    def _span(self, r: float) -> Tuple[int, int]:
        """Index range of the entries whose real time equals ``r``."""
        if not math.isfinite(r):
            raise OrderingViolation(f"Cannot schedule an event at time {r}")
        lo = bisect.bisect_left(self._queue, r, key=_real_time)
        hi = bisect.bisect_right(self._queue, r, lo=lo, key=_real_time)
        return lo, hi

    def _find(self, lo: int, hi: int, model: ModelHandle) -> Optional[int]:
        for index in range(lo, hi):
            if self._queue[index].model == model:
                return index
        return None

    def _next_time(self, r: float, lo: int, hi: int) -> SimTime:
        # New entries go after everything already pending at r
        if hi > lo:
            return SimTime(r, self._queue[hi - 1].time.counter + 1)
        return SimTime(r, 0)

    def __iter__(self) -> Iterator[Event]:
        """Iterate over a snapshot of pending events in queue order."""
        return iter(tuple(self._queue))

    def __len__(self) -> int:
        """Get number of events in queue."""
        return len(self._queue)

    def __repr__(self) -> str:
        """String representation of event queue."""
        return f"EventQueue(size={len(self._queue)}, next={self.peek()})"
