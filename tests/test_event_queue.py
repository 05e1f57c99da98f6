"""Tests for simulation time and the event queue."""

import random
import unittest

from devsim.core.event_queue import (
    ConfluentEvent,
    EventKind,
    EventQueue,
    ExternalEvent,
    InternalEvent,
)
from devsim.core.exceptions import OrderingViolation
from devsim.core.sim_time import SimTime


class TestSimTime(unittest.TestCase):
    """Test cases for SimTime ordering."""

    def test_ordering(self):
        """Real time dominates, counter breaks ties."""
        self.assertLess(SimTime(1.0, 5), SimTime(2.0, 0))
        self.assertLess(SimTime(1.0, 0), SimTime(1.0, 1))
        self.assertGreater(SimTime(1.0, 2), SimTime(1.0, 1))
        self.assertEqual(sorted([SimTime(2.0), SimTime(1.0, 1), SimTime(1.0)]),
                         [SimTime(1.0), SimTime(1.0, 1), SimTime(2.0)])

    def test_exact_equality(self):
        """Equality has no tolerance."""
        self.assertEqual(SimTime(1.5, 0), SimTime(1.5, 0))
        self.assertNotEqual(SimTime(1.5, 0), SimTime(1.5, 1))
        self.assertNotEqual(SimTime(0.1 + 0.2), SimTime(0.3))
        self.assertEqual(hash(SimTime(2.0, 3)), hash(SimTime(2.0, 3)))


class TestEventQueue(unittest.TestCase):
    """Test cases for EventQueue."""

    def setUp(self):
        """Set up test fixtures."""
        self.queue = EventQueue(check_invariants=True)

    def test_empty_queue(self):
        """Test empty queue behavior."""
        self.assertTrue(self.queue.is_empty())
        self.assertEqual(len(self.queue), 0)
        self.assertIsNone(self.queue.peek())
        self.assertIsNone(self.queue.time_advance())
        self.assertEqual(self.queue.get_next_events(), [])

    def test_time_ordering(self):
        """Events come out in real time order."""
        self.queue.schedule_internal(3.0, 0)
        self.queue.schedule_internal(1.0, 1)
        self.queue.schedule_external("x", 2.0, 2)

        self.assertEqual(self.queue.time_advance(), 1.0)
        times = [event.time.real for event in self.queue]
        self.assertEqual(times, [1.0, 2.0, 3.0])
        self.assertTrue(all(event.time.counter == 0 for event in self.queue))

    def test_counter_assignment_at_same_time(self):
        """Events for different models at one real time get increasing counters."""
        self.queue.schedule_internal(1.0, 0)
        self.queue.schedule_external("a", 1.0, 1)
        self.queue.schedule_internal(1.0, 2)

        events = list(self.queue)
        self.assertEqual([e.model for e in events], [0, 1, 2])
        self.assertEqual([e.time for e in events],
                         [SimTime(1.0, 0), SimTime(1.0, 1), SimTime(1.0, 2)])

    def test_insert_between_and_at_end(self):
        """New real times are inserted in sorted position with counter 0."""
        self.queue.schedule_internal(1.0, 0)
        self.queue.schedule_internal(3.0, 0)
        self.queue.schedule_internal(2.0, 1)
        self.queue.schedule_internal(4.0, 1)
        self.queue.schedule_internal(0.5, 2)

        self.assertEqual([e.time for e in self.queue],
                         [SimTime(0.5), SimTime(1.0), SimTime(2.0), SimTime(3.0), SimTime(4.0)])

    def test_internal_after_external_becomes_confluent(self):
        """A pending delivery plus an internal event merge into one confluent event."""
        self.queue.schedule_external("a", 1.0, 1)
        self.queue.schedule_external("5", 1.0, 0)
        self.queue.schedule_internal(1.0, 0)

        events = list(self.queue)
        self.assertEqual(len(events), 2)
        merged = events[1]
        self.assertIsInstance(merged, ConfluentEvent)
        self.assertEqual(merged.kind, EventKind.CONFLUENT)
        self.assertEqual(merged.inputs, ("5",))
        self.assertEqual(merged.time, SimTime(1.0, 1))

    def test_external_after_internal_becomes_confluent(self):
        """The symmetric collision carries the new payload and keeps the counter."""
        self.queue.schedule_internal(2.0, 3)
        self.queue.schedule_internal(2.0, 4)
        self.queue.schedule_external("7", 2.0, 4)

        events = list(self.queue)
        self.assertEqual(len(events), 2)
        self.assertIsInstance(events[0], InternalEvent)
        self.assertEqual(events[1], ConfluentEvent(SimTime(2.0, 1), 4, ("7",)))

    def test_duplicate_internal_is_ignored(self):
        """A model keeps a single internal event per real time."""
        self.queue.schedule_internal(1.0, 0)
        self.queue.schedule_internal(1.0, 0)
        self.assertEqual(len(self.queue), 1)

        self.queue.schedule_external("1", 1.0, 0)
        self.queue.schedule_internal(1.0, 0)
        self.assertEqual(len(self.queue), 1)
        self.assertIsInstance(self.queue.peek(), ConfluentEvent)

    def test_simultaneous_deliveries_share_one_event(self):
        """Two deliveries to one model at one time collect into a single input bag."""
        self.queue.schedule_external("1", 1.0, 0)
        self.queue.schedule_external("2", 1.0, 0)

        self.assertEqual(len(self.queue), 1)
        self.assertEqual(self.queue.peek(), ExternalEvent(SimTime(1.0), 0, ("1", "2")))

        self.queue.schedule_internal(1.0, 0)
        self.queue.schedule_external("3", 1.0, 0)
        self.assertEqual(self.queue.peek(), ConfluentEvent(SimTime(1.0), 0, ("1", "2", "3")))

    def test_same_model_different_times_not_merged(self):
        """Merging only happens at exactly the same real time."""
        self.queue.schedule_internal(1.0, 0)
        self.queue.schedule_external("1", 1.0000001, 0)

        kinds = [e.kind for e in self.queue]
        self.assertEqual(kinds, [EventKind.INTERNAL, EventKind.EXTERNAL])

    def test_get_next_events(self):
        """The imminent set is every event at the minimal real time."""
        self.queue.schedule_internal(2.0, 0)
        self.queue.schedule_internal(1.0, 1)
        self.queue.schedule_external("x", 1.0, 2)
        self.queue.schedule_internal(1.0, 3)

        imminent = self.queue.get_next_events()
        self.assertEqual([e.model for e in imminent], [1, 2, 3])
        self.assertEqual([e.kind for e in imminent],
                         [EventKind.INTERNAL, EventKind.EXTERNAL, EventKind.INTERNAL])
        self.assertEqual(len(self.queue), 1)
        self.assertEqual(self.queue.time_advance(), 2.0)

        self.assertEqual([e.model for e in self.queue.get_next_events()], [0])
        self.assertTrue(self.queue.is_empty())

    def test_rescheduling_at_extracted_time(self):
        """Events can be added at a time whose earlier entries were already extracted."""
        self.queue.schedule_internal(1.0, 0)
        self.queue.schedule_internal(1.0, 1)
        self.queue.get_next_events()

        self.queue.schedule_external("1", 1.0, 1)
        self.assertEqual(self.queue.peek().time, SimTime(1.0, 0))

    def test_non_finite_time_rejected(self):
        """Infinite or NaN times never enter the queue."""
        with self.assertRaises(OrderingViolation):
            self.queue.schedule_internal(float("inf"), 0)
        with self.assertRaises(OrderingViolation):
            self.queue.schedule_external("1", float("nan"), 0)

    def test_random_schedules_keep_invariants(self):
        """Arbitrary interleavings keep the queue sorted and merged."""
        rng = random.Random(1234)
        times = [0.5, 1.0, 1.5, 2.0, 2.5]
        queue = EventQueue(check_invariants=True)

        for _ in range(2000):
            op = rng.random()
            r = rng.choice(times)
            model = rng.randrange(6)
            if op < 0.45:
                queue.schedule_internal(r, model)
            elif op < 0.9:
                queue.schedule_external(str(rng.randrange(3)), r, model)
            else:
                imminent = queue.get_next_events()
                self.assertEqual(len({e.time.real for e in imminent}), min(1, len(imminent)))

            events = list(queue)
            for previous, current in zip(events, events[1:]):
                self.assertLessEqual(previous.time.real, current.time.real)
                if previous.time.real == current.time.real:
                    self.assertLess(previous.time.counter, current.time.counter)
            keys = [(e.model, e.time.real) for e in events]
            self.assertEqual(len(keys), len(set(keys)))

    def test_verify_detects_disorder(self):
        """verify() flags a corrupted queue."""
        queue = EventQueue()
        queue._queue = [InternalEvent(SimTime(2.0), 0), InternalEvent(SimTime(1.0), 1)]
        with self.assertRaises(OrderingViolation):
            queue.verify()

        queue._queue = [InternalEvent(SimTime(1.0, 0), 0), ExternalEvent(SimTime(1.0, 1), 0, ("1",))]
        with self.assertRaises(OrderingViolation):
            queue.verify()

    def test_clear(self):
        """clear() drops every pending event."""
        self.queue.schedule_internal(1.0, 0)
        self.queue.clear()
        self.assertTrue(self.queue.is_empty())


if __name__ == '__main__':
    unittest.main()
