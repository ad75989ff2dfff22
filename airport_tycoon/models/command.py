"""Command result models."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel


class RejectReason(str, Enum):
    """Why a player command was refused."""

    UNKNOWN_FLIGHT = "unknown_flight"
    FLIGHT_ALREADY_ASSIGNED = "flight_already_assigned"
    UNKNOWN_GATE = "unknown_gate"
    GATE_OCCUPIED = "gate_occupied"
    UNKNOWN_UPGRADE = "unknown_upgrade"
    ALREADY_PURCHASED = "already_purchased"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    NOT_RUNNING = "not_running"


class CommandResult(BaseModel):
    """Outcome of a player command. Failures carry a reason for the caller to surface."""

    success: bool
    reason: Optional[RejectReason] = None
    message: str = ""
    match: Optional[str] = None  # match quality for assignments

    @classmethod
    def ok(cls, message: str = "", match: Optional[str] = None) -> "CommandResult":
        return cls(success=True, message=message, match=match)

    @classmethod
    def rejected(cls, reason: RejectReason, message: str = "") -> "CommandResult":
        return cls(success=False, reason=reason, message=message)

    def __bool__(self) -> bool:
        return self.success
