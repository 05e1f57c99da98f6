"""Routing table connecting model outputs to destinations."""

from enum import Enum
from typing import Collection, Dict, Optional, Union

from .exceptions import ConfigurationError

# Index assigned to a model when it is registered with a simulator
ModelHandle = int


class Boundary(Enum):
    """Edges of the coupling network."""
    SYSTEM_INPUT = "system_input"
    SYSTEM_OUTPUT = "system_output"


SYSTEM_INPUT = Boundary.SYSTEM_INPUT
SYSTEM_OUTPUT = Boundary.SYSTEM_OUTPUT

Source = Union[ModelHandle, Boundary]
Destination = Union[ModelHandle, Boundary]


class CouplingTable:
    """One-destination-per-source routing table.

    Each model routes its output to at most one destination: another model
    or SYSTEM_OUTPUT. The SYSTEM_INPUT entry names the model that receives
    exogenous inputs. The table is frozen when a run starts.
    """

    def __init__(self):
        self._routes: Dict[Source, Destination] = {}
        self._frozen = False

    def add(self, source: Source, destination: Destination) -> None:
        """Route the output of ``source`` to ``destination``.

        Raises:
            ConfigurationError: If the table is frozen, the source already
                has a destination, or a second exit point is designated
        """
        if self._frozen:
            raise ConfigurationError("Couplings cannot change once a run has started")
        if source is SYSTEM_OUTPUT or destination is SYSTEM_INPUT:
            raise ConfigurationError(f"Invalid coupling {source!r} -> {destination!r}")
        if source == destination:
            raise ConfigurationError(f"Model {source} cannot be coupled to itself")
        if source in self._routes:
            raise ConfigurationError(
                f"{source!r} is already coupled to {self._routes[source]!r}"
            )
        if destination is SYSTEM_OUTPUT and self.exit_point is not None:
            raise ConfigurationError(
                f"Exit point already set to model {self.exit_point}"
            )
        self._routes[source] = destination

    def destination(self, source: Source) -> Optional[Destination]:
        """Return where ``source`` routes its output, or None."""
        return self._routes.get(source)

    @property
    def entry_point(self) -> Optional[ModelHandle]:
        """Model receiving exogenous inputs."""
        return self._routes.get(SYSTEM_INPUT)

    @property
    def exit_point(self) -> Optional[ModelHandle]:
        """Model whose output reaches the trace."""
        for source, destination in self._routes.items():
            if destination is SYSTEM_OUTPUT:
                return source
        return None

    def validate(self, registered: Collection[ModelHandle]) -> None:
        """Check the table against the set of registered models.

        Raises:
            ConfigurationError: If the entry or exit point is missing or a
                coupling names an unregistered model
        """
        if self.entry_point is None:
            raise ConfigurationError("No entry point: call route_input_to() first")
        if self.exit_point is None:
            raise ConfigurationError("No exit point: call take_output_from() first")

        for source, destination in self._routes.items():
            for end in (source, destination):
                if not isinstance(end, Boundary) and end not in registered:
                    raise ConfigurationError(
                        f"Coupling {source!r} -> {destination!r} references "
                        f"unregistered model {end!r}"
                    )

    def freeze(self) -> None:
        self._frozen = True

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        return f"CouplingTable(entry={self.entry_point}, exit={self.exit_point}, routes={len(self._routes)})"
