"""Alert model."""

from enum import Enum
from pydantic import BaseModel


class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"


class Alert(BaseModel):
    """Short-lived notification shown to the player."""

    id: str
    title: str
    message: str
    severity: Severity = Severity.INFO
    created_at: float  # logical clock, seconds
