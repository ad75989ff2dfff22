"""Fire-and-forget notifications for feedback collaborators (audio, UI effects, journals)."""

import logging
from collections import deque
from enum import Enum
from typing import Any, Callable, Deque, Dict, List, Optional
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class NotificationKind(str, Enum):
    FLIGHT_ASSIGNED = "flightAssigned"
    FLIGHT_COMPLETE = "flightComplete"
    EMERGENCY_ARRIVAL = "emergencyArrival"
    UPGRADE_PURCHASED = "upgradePurchased"
    WARNING_RAISED = "warningRaised"
    COMMAND_REJECTED = "commandRejected"
    GAME_OVER = "gameOver"


class Notification(BaseModel):
    """One feedback event, stamped with the logical time and day it happened."""

    kind: NotificationKind
    time: float
    day: int
    data: Dict[str, Any] = Field(default_factory=dict)


Listener = Callable[[Notification], None]


class Notifier:
    """Fans notifications out to listeners and keeps a short history.

    A failing listener is logged and skipped; it never reaches the engine.
    """

    def __init__(self, history_size: int = 200):
        self._listeners: List[Listener] = []
        self.history: Deque[Notification] = deque(maxlen=history_size)

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(
        self,
        kind: NotificationKind,
        time: float,
        day: int,
        data: Optional[Dict[str, Any]] = None,
    ) -> Notification:
        notification = Notification(kind=kind, time=time, day=day, data=data or {})
        self.history.append(notification)

        for listener in list(self._listeners):
            try:
                listener(notification)
            except Exception as e:
                logger.warning(f"Notification listener failed for {kind.value}: {e}")

        return notification

    def recent(self, limit: Optional[int] = None) -> List[Notification]:
        items = list(self.history)
        if limit is not None and limit > 0:
            items = items[-limit:]
        return items
