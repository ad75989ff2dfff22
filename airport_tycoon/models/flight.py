"""Flight model."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel


class FlightType(str, Enum):
    """Flight categories, each with its own passenger range, revenue and processing time."""

    DOMESTIC = "DOMESTIC"
    INTERNATIONAL = "INTERNATIONAL"
    CARGO = "CARGO"
    VIP = "VIP"


class Flight(BaseModel):
    """Represents an incoming flight waiting for (or occupying) a gate."""

    id: str
    flight_number: str
    type: FlightType
    is_emergency: bool = False
    is_vip: bool = False
    passengers: int
    base_revenue: int
    processing_time: float  # seconds
    airline: str
    created_at: float  # logical clock, seconds
    assigned_gate_id: Optional[str] = None
    waiting_time: float = 0.0

    @property
    def is_assigned(self) -> bool:
        """Whether a gate is currently processing this flight."""
        return self.assigned_gate_id is not None

    def accrue_waiting(self, delta_time: float) -> None:
        """Accumulate waiting time while unassigned."""
        if self.is_assigned or delta_time <= 0:
            return
        self.waiting_time += delta_time

    class Config:
        json_schema_extra = {
            "example": {
                "id": "f-0001",
                "flight_number": "LH456",
                "type": "DOMESTIC",
                "is_emergency": False,
                "is_vip": False,
                "passengers": 96,
                "base_revenue": 8000,
                "processing_time": 15.0,
                "airline": "SkyWings",
                "created_at": 12.5,
                "assigned_gate_id": None,
                "waiting_time": 0.0,
            }
        }
