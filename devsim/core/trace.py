"""Output trace of a simulation run."""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List

import numpy as np


@dataclass(frozen=True)
class TraceRecord:
    """One output reaching the exit point.

    Attributes:
        time: Simulation time of the output
        payload: Value emitted by the exit-point model
    """
    time: float
    payload: Any

    def __str__(self) -> str:
        return f"{self.time} - {self.payload}"


class Trace:
    """Append-only sequence of outputs, in simulation time order."""

    def __init__(self):
        self._records: List[TraceRecord] = []

    def append(self, time: float, payload: Any) -> None:
        """Record an output.

        Args:
            time: Simulation time of the output
            payload: Emitted value
        """
        self._records.append(TraceRecord(time, payload))

    def times(self) -> List[float]:
        return [record.time for record in self._records]

    def payloads(self) -> List[Any]:
        return [record.payload for record in self._records]

    def format(self) -> str:
        """Render one ``"<time> - <payload>"`` line per record."""
        return "".join(f"{record}\n" for record in self._records)

    def to_records(self) -> List[Dict[str, Any]]:
        """Plain dictionaries suitable for YAML or JSON output."""
        return [{'time': record.time, 'payload': record.payload} for record in self._records]

    def summary(self) -> Dict[str, Any]:
        """Compute aggregate statistics over the trace.

        Returns:
            Dictionary with output count, first/last output time and
            inter-output gap statistics (gaps only with two or more outputs)
        """
        results: Dict[str, Any] = {'num_outputs': len(self._records)}
        if not self._records:
            return results

        times = np.array(self.times(), dtype=float)
        results['first_output_time'] = float(times[0])
        results['last_output_time'] = float(times[-1])

        if len(times) > 1:
            gaps = np.diff(times)
            results['mean_gap'] = float(np.mean(gaps))
            results['min_gap'] = float(np.min(gaps))
            results['max_gap'] = float(np.max(gaps))

        return results

    def __iter__(self) -> Iterator[TraceRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index):
        return self._records[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Trace):
            return NotImplemented
        return self._records == other._records

    def __repr__(self) -> str:
        return f"Trace(records={len(self._records)})"
