"""Game engine: owns one session and applies commands and ticks to it."""

import itertools
import logging
import random
from typing import List, Optional

from . import economy, lifecycle
from .allocation import MatchQuality, assign, weather_delay_factor
from .config import (
    ALERT_TTL,
    DAY_DURATION,
    INITIAL_SECOND_ARRIVAL_DELAY,
    STARTING_CASH,
    STARTING_GATES,
    STARTING_REPUTATION,
    STARTING_SATISFACTION,
    UPGRADES,
    WEATHER,
    WEATHER_CHANGE_INTERVAL,
)
from .lifecycle import WarningKind
from .models.alert import Alert, Severity
from .models.command import CommandResult, RejectReason
from .models.flight import Flight
from .models.game_state import GameState, RunState, Weather
from .models.gate import build_gate
from .models.snapshot import FlightView, GameSnapshot, GateView, StatsView
from .models.upgrade import Upgrade
from .notifications import NotificationKind, Notifier
from .scheduler import EventKind, ScheduledEvent, Scheduler, create_flight, next_arrival_interval
from .storage import HighScoreStore, SavedGate, SaveData
from .utils import format_currency

logger = logging.getLogger(__name__)


def default_upgrades() -> List[Upgrade]:
    """Build the built-in upgrade catalogue."""
    return [Upgrade(**definition) for definition in UPGRADES]


class GameEngine:
    """Runs one session at a time.

    The engine is single-threaded: ``tick`` and the command methods must never run
    concurrently. Time only moves through ``tick(delta_time)``; timers are scheduler entries
    that fire while the clock is advanced.
    """

    def __init__(
        self,
        upgrades: Optional[List[Upgrade]] = None,
        store: Optional[HighScoreStore] = None,
        notifier: Optional[Notifier] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize engine with a fresh session in SETUP.

        Args:
            upgrades: Upgrade catalogue (built-in catalogue when omitted)
            store: High-score/save collaborator, optional
            notifier: Notification fan-out (a new one when omitted)
            rng: Random source; takes precedence over seed
            seed: Seed for a new random source
        """
        self.upgrade_catalogue = upgrades if upgrades is not None else default_upgrades()
        self.store = store
        self.notifier = notifier or Notifier()
        self.rng = rng or random.Random(seed)
        self.scheduler = Scheduler()
        self._flight_ids = itertools.count(1)
        self._alert_ids = itertools.count(1)
        self.state = self._create_state()

    def _create_state(self) -> GameState:
        return GameState(
            cash=STARTING_CASH,
            satisfaction=STARTING_SATISFACTION,
            reputation=STARTING_REPUTATION,
            gates=[build_gate(n) for n in range(1, STARTING_GATES + 1)],
            upgrades=[u.model_copy() for u in self.upgrade_catalogue],
            generation=self.scheduler.generation,
        )

    # ------------------------------------------------------------------
    # Lifecycle commands
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """
        Start the session: arm every timer and let the first flights arrive.

        Returns:
            False if the session was not in SETUP
        """
        if not lifecycle.transition(self.state, RunState.RUNNING):
            return False

        now = self.state.clock
        self._schedule_next_arrival(now)
        self.scheduler.schedule(now + DAY_DURATION, EventKind.DAY)
        self.scheduler.schedule(now + WEATHER_CHANGE_INTERVAL, EventKind.WEATHER)

        # One flight right away and a second shortly after
        self._generate_flight(now)
        self.scheduler.schedule(now + INITIAL_SECOND_ARRIVAL_DELAY, EventKind.ARRIVAL, rearm=False)

        logger.info(f"Session started (generation {self.state.generation})")
        return True

    def toggle_pause(self) -> bool:
        """
        Pause a running session or resume a paused one.

        Returns:
            The new paused state (unchanged when the session is neither running nor paused)
        """
        if self.state.run_state == RunState.RUNNING:
            lifecycle.transition(self.state, RunState.PAUSED)
        elif self.state.run_state == RunState.PAUSED:
            lifecycle.transition(self.state, RunState.RUNNING)
        return self.state.run_state == RunState.PAUSED

    def reset(self) -> GameState:
        """Discard the session and every pending timer, leaving a fresh one in SETUP."""
        self.scheduler.cancel_all()
        self.state = self._create_state()
        logger.info(f"Session reset (generation {self.state.generation})")
        return self.state

    def start_new_game(self) -> GameState:
        self.reset()
        self.start()
        return self.state

    # ------------------------------------------------------------------
    # Player commands
    # ------------------------------------------------------------------

    def _accepts_commands(self) -> bool:
        return self.state.run_state in (RunState.RUNNING, RunState.PAUSED)

    def _reject(self, result: CommandResult, command: str) -> CommandResult:
        logger.debug(f"{command} rejected: {result.reason.value} - {result.message}")
        self._notify(
            NotificationKind.COMMAND_REJECTED,
            {"command": command, "reason": result.reason.value, "message": result.message},
        )
        return result

    def assign_flight_to_gate(self, flight_id: str, gate_id: str) -> CommandResult:
        """
        Assign a waiting flight to a free gate.

        Args:
            flight_id: Pending flight id
            gate_id: Gate id

        Returns:
            CommandResult; a rejection leaves the session untouched
        """
        if not self._accepts_commands():
            return self._reject(
                CommandResult.rejected(RejectReason.NOT_RUNNING, "No game in progress"), "assign"
            )

        result = assign(self.state, flight_id, gate_id)
        if not result.success:
            return self._reject(result, "assign")

        flight = self.state.get_flight(flight_id)
        gate = self.state.get_gate(gate_id)
        match = MatchQuality(result.match)

        if match == MatchQuality.POOR:
            economy.apply_assignment_penalty(self.state, match)
            self.add_alert(
                "Poor Gate Match",
                f"{flight.flight_number} exceeds gate capacity!",
                Severity.WARNING,
            )
        elif match == MatchQuality.PERFECT:
            self.add_alert(
                "Perfect Match!",
                f"{flight.flight_number} is optimally assigned",
                Severity.SUCCESS,
            )

        self._notify(
            NotificationKind.FLIGHT_ASSIGNED,
            {"flight_id": flight.id, "gate_id": gate.id, "match": match.value},
        )
        return result

    def purchase_upgrade(self, upgrade_id: str) -> CommandResult:
        """
        Buy an upgrade from the catalogue.

        Args:
            upgrade_id: Upgrade id

        Returns:
            CommandResult; a rejection leaves cash and the purchased flag untouched
        """
        if not self._accepts_commands():
            return self._reject(
                CommandResult.rejected(RejectReason.NOT_RUNNING, "No game in progress"), "purchase"
            )

        result = economy.purchase_upgrade(self.state, upgrade_id)
        if not result.success:
            return self._reject(result, "purchase")

        self.add_alert("Upgrade Purchased!", result.message, Severity.SUCCESS)
        self._notify(NotificationKind.UPGRADE_PURCHASED, {"upgrade_id": upgrade_id})
        return result

    # ------------------------------------------------------------------
    # Time
    # ------------------------------------------------------------------

    def tick(self, delta_time: float) -> None:
        """
        Advance the session clock and run everything that became due.

        Timers fire first. While running, flights then accrue waiting time, finished gates
        are settled, congestion decays satisfaction and the game-over conditions are checked,
        always in that order.

        Args:
            delta_time: Seconds since the previous tick (negative values count as zero)
        """
        if self.state.run_state in (RunState.SETUP, RunState.ENDED):
            return

        delta_time = max(0.0, delta_time)
        self.state.clock += delta_time
        self._drain_events()

        if not self.state.is_running:
            return

        economy.accrue_waiting(self.state, delta_time)
        self._settle_completed_gates()
        economy.apply_congestion_decay(self.state, delta_time)
        self._evaluate_session()

    def _drain_events(self) -> None:
        while True:
            event = self.scheduler.pop_due(self.state.clock)
            if event is None:
                break
            if event.generation != self.state.generation:
                continue

            if event.kind == EventKind.ARRIVAL:
                self._on_arrival(event)
            elif event.kind == EventKind.DAY:
                self._on_day(event)
            elif event.kind == EventKind.WEATHER:
                self._on_weather(event)
            elif event.kind == EventKind.ALERT_EXPIRY:
                self._on_alert_expiry(event)

    def _schedule_next_arrival(self, now: float) -> None:
        interval_ms = next_arrival_interval(self.state.day, self.rng)
        self.scheduler.schedule(now + interval_ms / 1000.0, EventKind.ARRIVAL)

    def _on_arrival(self, event: ScheduledEvent) -> None:
        if self.state.is_running:
            self._generate_flight(event.fire_time)
        if event.rearm:
            self._schedule_next_arrival(event.fire_time)

    def _on_day(self, event: ScheduledEvent) -> None:
        if self.state.is_running:
            self.state.day += 1
            cost = economy.charge_operating_cost(self.state)
            self.add_alert(
                f"Day {self.state.day} - Operational Costs",
                f"Expenses: -{format_currency(cost)} (staff, maintenance, utilities)",
                Severity.WARNING,
                at=event.fire_time,
            )
            self._notify(
                NotificationKind.WARNING_RAISED,
                {"warning": "operating_cost", "amount": cost},
            )
            logger.info(f"Day {self.state.day} started, operating cost {format_currency(cost)}")
        self.scheduler.schedule(event.fire_time + DAY_DURATION, EventKind.DAY)

    def _on_weather(self, event: ScheduledEvent) -> None:
        if self.state.is_running:
            self.set_weather(self.rng.choice(list(Weather)), at=event.fire_time)
        self.scheduler.schedule(event.fire_time + WEATHER_CHANGE_INTERVAL, EventKind.WEATHER)

    def _on_alert_expiry(self, event: ScheduledEvent) -> None:
        self.state.active_alerts = [a for a in self.state.active_alerts if a.id != event.payload]

    def _generate_flight(self, now: float) -> Flight:
        flight = create_flight(self.rng, f"F{next(self._flight_ids):05d}", now)
        self.state.pending_flights.append(flight)
        logger.debug(f"Flight {flight.flight_number} ({flight.type.value}) arrived at t={now:.2f}")

        if flight.is_emergency:
            self.add_alert(
                f"EMERGENCY: {flight.flight_number}",
                "Priority landing required!",
                Severity.DANGER,
                at=now,
            )
            self._notify(NotificationKind.EMERGENCY_ARRIVAL, {"flight_id": flight.id})
        return flight

    def set_weather(self, weather: Weather, at: Optional[float] = None) -> None:
        self.state.current_weather = weather
        if weather != Weather.CLEAR:
            self.add_alert(
                "Weather Change",
                f"{WEATHER[weather.value]['name']} - Delays expected",
                Severity.WARNING,
                at=at,
            )

    def _settle_completed_gates(self) -> None:
        for gate in self.state.gates:
            if not gate.is_complete(self.state.clock):
                continue
            record = economy.complete_flight(self.state, gate)
            if record is None:
                continue

            if record.match == MatchQuality.PERFECT:
                bonus = " (+20% Perfect Match!)"
            elif record.match == MatchQuality.POOR:
                bonus = " (-30% Poor Match)"
            else:
                bonus = ""
            self.add_alert(
                f"Flight {record.flight.flight_number} Completed!",
                f"Revenue: +{format_currency(record.revenue)}{bonus}",
                Severity.SUCCESS,
            )
            self._notify(
                NotificationKind.FLIGHT_COMPLETE,
                {
                    "flight_id": record.flight.id,
                    "gate_id": record.gate_id,
                    "match": record.match.value,
                    "revenue": record.revenue,
                    "reputation_delta": record.reputation_delta,
                },
            )

    def _evaluate_session(self) -> None:
        for warning in lifecycle.evaluate_warnings(self.state):
            if warning == WarningKind.LOW_CASH:
                self.add_alert(
                    "LOW FUNDS WARNING!",
                    f"Cash: {format_currency(self.state.cash)} - You need to complete flights "
                    "soon or face bankruptcy!",
                    Severity.DANGER,
                )
            else:
                self.add_alert(
                    "REPUTATION CRITICAL!",
                    f"Reputation: {self.state.reputation} - Improve satisfaction or your "
                    "airport will close!",
                    Severity.DANGER,
                )
            self._notify(NotificationKind.WARNING_RAISED, {"warning": warning.value})

        reason = lifecycle.check_game_over(self.state)
        if reason is not None:
            self.end_game(reason)

    def end_game(self, reason: str) -> Optional[int]:
        """
        End the session, cancel every timer and hand the score to the store.

        Args:
            reason: Human-readable reason shown on the game-over screen

        Returns:
            Final score, or None if the session could not end from its current state
        """
        if not lifecycle.transition(self.state, RunState.ENDED):
            return None

        self.scheduler.cancel_all()
        score = lifecycle.calculate_score(self.state)
        self.state.final_score = score
        self.state.end_reason = reason
        self.state.is_high_score = self._record_score(score)

        logger.info(f"Game over: {reason} Score {score}")
        self._notify(
            NotificationKind.GAME_OVER,
            {"reason": reason, "score": score, "is_high_score": self.state.is_high_score},
        )
        return score

    def _record_score(self, score: int) -> bool:
        if self.store is None:
            return False
        try:
            return self.store.save_high_score(score)
        except Exception as e:
            logger.warning(f"Score {score} not persisted: {e}")
            return False

    # ------------------------------------------------------------------
    # Alerts and notifications
    # ------------------------------------------------------------------

    def add_alert(
        self,
        title: str,
        message: str,
        severity: Severity = Severity.INFO,
        at: Optional[float] = None,
    ) -> Alert:
        """Show an alert and schedule its removal after the alert TTL."""
        created_at = self.state.clock if at is None else at
        alert = Alert(
            id=f"A{next(self._alert_ids):05d}",
            title=title,
            message=message,
            severity=severity,
            created_at=created_at,
        )
        self.state.active_alerts.append(alert)
        self.scheduler.schedule(
            created_at + ALERT_TTL, EventKind.ALERT_EXPIRY, payload=alert.id, rearm=False
        )
        return alert

    def _notify(self, kind: NotificationKind, data: dict) -> None:
        self.notifier.emit(kind, self.state.clock, self.state.day, data)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def snapshot(self) -> GameSnapshot:
        """Build a read-only view of the session for presentation collaborators."""
        state = self.state
        gates = []
        for gate in state.gates:
            occupant = gate.assigned_flight
            gates.append(
                GateView(
                    id=gate.id,
                    name=gate.name,
                    type=gate.type.value,
                    capacity=gate.capacity,
                    available=gate.is_available(),
                    occupant=occupant.flight_number if occupant else None,
                    occupant_id=occupant.id if occupant else None,
                    progress=gate.progress(state.clock),
                )
            )

        waiting = [
            FlightView(
                id=f.id,
                flight_number=f.flight_number,
                type=f.type.value,
                airline=f.airline,
                passengers=f.passengers,
                is_emergency=f.is_emergency,
                is_vip=f.is_vip,
                waiting_time=f.waiting_time,
            )
            for f in state.unassigned_flights()
        ]

        return GameSnapshot(
            run_state=state.run_state,
            clock=state.clock,
            weather=state.current_weather,
            weather_delay_factor=weather_delay_factor(state.current_weather),
            stats=StatsView(**state.stats()),
            gates=gates,
            waiting_flights=waiting,
            alerts=[a.model_copy() for a in state.active_alerts],
            upgrades=[u.model_copy() for u in state.upgrades],
            multipliers=state.multipliers.model_copy(),
            end_reason=state.end_reason,
            final_score=state.final_score,
            is_high_score=state.is_high_score,
        )

    def save_data(self) -> SaveData:
        state = self.state
        return SaveData(
            cash=state.cash,
            satisfaction=state.satisfaction,
            reputation=state.reputation,
            day=state.day,
            flights_completed=state.flights_completed,
            purchased_upgrade_ids=sorted(state.purchased_upgrade_ids),
            gates=[
                SavedGate(id=g.id, name=g.name, capacity=g.capacity, type=g.type.value)
                for g in state.gates
            ],
        )

    def save_game(self) -> bool:
        """Hand a save snapshot to the store. False when there is no store or it failed."""
        if self.store is None:
            return False
        try:
            return self.store.save_game(self.save_data())
        except Exception as e:
            logger.warning(f"Save not persisted: {e}")
            return False

    def high_score(self) -> int:
        if self.store is None:
            return 0
        try:
            return self.store.get_high_score()
        except Exception as e:
            logger.warning(f"High score unavailable: {e}")
            return 0
