"""
Telemetry Source Interface

Abstract supplier of circuit snapshots and breach history.
Storage-agnostic - implementations can read files, databases, APIs, etc.

DESIGN RULES:
- Read-only, the engine never writes telemetry back
- Lookups return None for unknown ids instead of raising
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from schemas.circuit import BreachEvent, CircuitFilters, CircuitRow
from telemetry.filters import filter_circuits


class TelemetrySource(ABC):
    """
    Abstract base for telemetry access.

    Implementations:
    - InMemoryTelemetrySource (literal data, tests)
    - FileTelemetrySource (JSON document)
    """

    @abstractmethod
    def list_circuits(
        self,
        vendor_id: Optional[str] = None,
        filters: Optional[CircuitFilters] = None,
    ) -> List[CircuitRow]:
        pass

    @abstractmethod
    def get_circuit(self, circuit_id: str) -> Optional[CircuitRow]:
        pass

    @abstractmethod
    def list_breach_events(
        self,
        circuit_id: Optional[str] = None,
        vendor_id: Optional[str] = None,
    ) -> List[BreachEvent]:
        """Breach events, newest first."""
        pass


class InMemoryTelemetrySource(TelemetrySource):
    """Telemetry held in process memory."""

    def __init__(
        self,
        circuits: Optional[Iterable[CircuitRow]] = None,
        breach_events: Optional[Iterable[BreachEvent]] = None,
    ):
        self._circuits: List[CircuitRow] = list(circuits or [])
        # ISO-8601 UTC timestamps order lexically
        self._events: List[BreachEvent] = sorted(
            breach_events or [], key=lambda e: e.timestamp, reverse=True
        )

    def list_circuits(
        self,
        vendor_id: Optional[str] = None,
        filters: Optional[CircuitFilters] = None,
    ) -> List[CircuitRow]:
        return filter_circuits(self._circuits, vendor_id=vendor_id, filters=filters)

    def get_circuit(self, circuit_id: str) -> Optional[CircuitRow]:
        for circuit in self._circuits:
            if circuit.circuit_id == circuit_id:
                return circuit
        return None

    def list_breach_events(
        self,
        circuit_id: Optional[str] = None,
        vendor_id: Optional[str] = None,
    ) -> List[BreachEvent]:
        events = self._events
        if circuit_id is not None:
            events = [e for e in events if e.circuit_id == circuit_id]
        if vendor_id is not None:
            events = [e for e in events if e.vendor_id == vendor_id]
        return list(events)
