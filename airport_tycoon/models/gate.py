"""Gate model."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel

from ..config import GATE_TYPES, GATES_PER_TERMINAL
from ..utils import terminal_gate_name
from .flight import Flight


class GateType(str, Enum):
    """Gate sizes."""

    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"


class Gate(BaseModel):
    """Represents a gate that processes at most one flight at a time.

    The gate owns the processing relationship: ``assigned_flight`` is set for exactly
    as long as ``is_processing`` is True.
    """

    id: str
    name: str
    type: GateType = GateType.SMALL
    capacity: int
    assigned_flight: Optional[Flight] = None
    is_processing: bool = False
    processing_start_time: Optional[float] = None
    processing_duration: float = 0.0

    def is_available(self) -> bool:
        """Check if the gate can accept a flight."""
        return self.assigned_flight is None and not self.is_processing

    def assign_flight(self, flight: Flight, now: float, duration: float) -> bool:
        """
        Start processing a flight.

        Args:
            flight: Flight to process
            now: Current logical time in seconds
            duration: Processing duration in seconds

        Returns:
            False if the gate is already occupied
        """
        if not self.is_available():
            return False

        self.assigned_flight = flight
        self.is_processing = True
        self.processing_start_time = now
        self.processing_duration = duration
        flight.assigned_gate_id = self.id
        return True

    def elapsed(self, now: float) -> float:
        if not self.is_processing or self.processing_start_time is None:
            return 0.0
        return max(0.0, now - self.processing_start_time)

    def is_complete(self, now: float) -> bool:
        """Check if processing has run for its full duration."""
        if not self.is_processing or self.processing_start_time is None:
            return False
        return self.elapsed(now) >= self.processing_duration

    def progress(self, now: float) -> float:
        """Get processing progress in [0, 1]."""
        if not self.is_processing or self.processing_start_time is None:
            return 0.0
        if self.processing_duration <= 0:
            return 1.0
        return min(self.elapsed(now) / self.processing_duration, 1.0)

    def complete_flight(self) -> Optional[Flight]:
        """Clear the gate and hand back the flight it was processing."""
        flight = self.assigned_flight
        self.assigned_flight = None
        self.is_processing = False
        self.processing_start_time = None
        self.processing_duration = 0.0
        return flight


def build_gate(number: int, gate_type: GateType = GateType.SMALL) -> Gate:
    """Create the n-th gate of the airport (1-based) with its terminal name."""
    return Gate(
        id=f"G{number}",
        name=terminal_gate_name(number, GATES_PER_TERMINAL),
        type=gate_type,
        capacity=GATE_TYPES[gate_type.value]["capacity"],
    )
