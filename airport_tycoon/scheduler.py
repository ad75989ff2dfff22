"""Scheduler for the self-renewing game timers.

Timers are entries in a priority queue keyed by logical fire time. Nothing runs on its own:
the engine drains due entries from ``tick``. Every entry is stamped with the session
generation it was created for, so a stale entry can be recognised and dropped even if it
survives a reset.
"""

import heapq
import itertools
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .config import (
    AIRLINES,
    DIFFICULTY_STEP_PER_DAY,
    DOMESTIC_THRESHOLD,
    EMERGENCY_CHANCE,
    FLIGHT_NUMBER_PREFIXES,
    FLIGHT_TYPES,
    INTERNATIONAL_THRESHOLD,
    MAX_FLIGHT_INTERVAL,
    MIN_FLIGHT_INTERVAL,
    VIP_THRESHOLD,
)
from .models.flight import Flight, FlightType
from .utils import generate_flight_number, random_element, random_int

logger = logging.getLogger(__name__)


class EventKind(str, Enum):
    ARRIVAL = "ARRIVAL"
    DAY = "DAY"
    WEATHER = "WEATHER"
    ALERT_EXPIRY = "ALERT_EXPIRY"


@dataclass(order=True)
class ScheduledEvent:
    """A deferred timer callback waiting in the queue."""

    fire_time: float
    seq: int
    kind: EventKind = field(compare=False)
    generation: int = field(compare=False)
    payload: Optional[str] = field(default=None, compare=False)  # alert id for expiries
    rearm: bool = field(default=True, compare=False)


def next_arrival_interval(day: int, rng: random.Random) -> int:
    """
    Draw the delay before the next arrival, in milliseconds.

    The upper bound shrinks by one second per day but never drops below the floor.

    Args:
        day: Current game day
        rng: Random source

    Returns:
        Interval in [MIN_FLIGHT_INTERVAL, max(MIN_FLIGHT_INTERVAL, MAX_FLIGHT_INTERVAL - day*1000)]
    """
    ceiling = MAX_FLIGHT_INTERVAL - day * DIFFICULTY_STEP_PER_DAY
    return random_int(rng, MIN_FLIGHT_INTERVAL, max(MIN_FLIGHT_INTERVAL, ceiling))


class Scheduler:
    """Priority queue of timer events drained by an explicit driver."""

    def __init__(self, generation: int = 0):
        self.generation = generation
        self._queue: List[ScheduledEvent] = []
        self._seq = itertools.count()

    def __len__(self) -> int:
        return len(self._queue)

    def schedule(
        self,
        fire_time: float,
        kind: EventKind,
        payload: Optional[str] = None,
        rearm: bool = True,
    ) -> ScheduledEvent:
        """Queue an event for the current generation."""
        event = ScheduledEvent(
            fire_time=fire_time,
            seq=next(self._seq),
            kind=kind,
            generation=self.generation,
            payload=payload,
            rearm=rearm,
        )
        heapq.heappush(self._queue, event)
        logger.debug(f"Scheduled {kind.value} at t={fire_time:.2f} (gen {self.generation})")
        return event

    def next_fire_time(self) -> Optional[float]:
        return self._queue[0].fire_time if self._queue else None

    def pop_due(self, now: float) -> Optional[ScheduledEvent]:
        """
        Pop the earliest event with fire_time <= now.

        Events from an older generation are discarded on the way.

        Args:
            now: Current logical time in seconds

        Returns:
            The next due event, or None when nothing is due
        """
        while self._queue and self._queue[0].fire_time <= now:
            event = heapq.heappop(self._queue)
            if event.generation != self.generation:
                logger.debug(f"Dropping stale {event.kind.value} event from generation {event.generation}")
                continue
            return event
        return None

    def pending(self, kind: Optional[EventKind] = None) -> List[ScheduledEvent]:
        """Queued events in fire order, optionally filtered by kind."""
        events = sorted(self._queue)
        if kind is None:
            return events
        return [e for e in events if e.kind == kind]

    def cancel_all(self) -> None:
        """Invalidate every outstanding event by moving to a new generation."""
        self.generation += 1
        self._queue.clear()
        logger.debug(f"Scheduler cancelled, now at generation {self.generation}")


def choose_flight_type(roll: float) -> Tuple[FlightType, bool]:
    """
    Map a uniform roll in [0, 1) to a flight type and emergency flag.

    The first 5% are emergencies (always International), the next 10% VIP, then Domestic
    up to 70%, International up to 90% and Cargo for the rest.
    """
    if roll < EMERGENCY_CHANCE:
        return FlightType.INTERNATIONAL, True
    if roll < VIP_THRESHOLD:
        return FlightType.VIP, False
    if roll < DOMESTIC_THRESHOLD:
        return FlightType.DOMESTIC, False
    if roll < INTERNATIONAL_THRESHOLD:
        return FlightType.INTERNATIONAL, False
    return FlightType.CARGO, False


def create_flight(rng: random.Random, flight_id: str, now: float) -> Flight:
    """Generate one arriving flight using the type distribution and type config."""
    flight_type, is_emergency = choose_flight_type(rng.random())
    type_config = FLIGHT_TYPES[flight_type.value]

    return Flight(
        id=flight_id,
        flight_number=generate_flight_number(rng, FLIGHT_NUMBER_PREFIXES),
        type=flight_type,
        is_emergency=is_emergency,
        is_vip=flight_type == FlightType.VIP,
        passengers=random_int(
            rng, int(type_config["min_passengers"]), int(type_config["max_passengers"])
        ),
        base_revenue=int(type_config["base_revenue"]),
        processing_time=float(type_config["processing_time"]),
        airline=random_element(rng, AIRLINES),
        created_at=now,
    )
