"""Service hosting one game engine behind a lock, with a background tick driver."""

import logging
import threading
import time
from typing import Dict, List, Optional

from ..config import Config, GameConfigError
from ..data_loader import load_upgrades
from ..engine import GameEngine
from ..logger import EventJournal, generate_final_report, summarize_journal
from ..models.command import CommandResult
from ..models.snapshot import GameSnapshot
from ..notifications import Notification, NotificationKind, Notifier
from ..storage import FileHighScoreStore, HighScoreStore, RemoteHighScoreStore

logger = logging.getLogger(__name__)


def build_store(config: Config) -> HighScoreStore:
    if config.LEADERBOARD_URL:
        return RemoteHighScoreStore(config.LEADERBOARD_URL, timeout=config.LEADERBOARD_TIMEOUT)
    return FileHighScoreStore(config.HIGH_SCORE_FILE)


class GameService:
    """Serialises every engine call through one lock.

    Commands arrive from request threads while the driver loop ticks from a background
    task; the lock keeps them strictly one after another.
    """

    def __init__(self, config: Optional[Config] = None, engine: Optional[GameEngine] = None):
        """
        Initialize game service.

        Args:
            config: Runtime settings (read from the environment when omitted)
            engine: Pre-built engine, mainly for tests
        """
        self.config = config or Config()
        if self.config.TICK_INTERVAL <= 0:
            raise GameConfigError(f"TICK_INTERVAL must be positive, got {self.config.TICK_INTERVAL}")
        self._lock = threading.Lock()
        self.journal: Optional[EventJournal] = None

        if engine is None:
            notifier = Notifier()
            if self.config.EVENT_LOG_FILE:
                self.journal = EventJournal(self.config.EVENT_LOG_FILE)
                notifier.subscribe(self.journal)
            upgrades = load_upgrades(self.config.UPGRADES_CSV) if self.config.UPGRADES_CSV else None
            engine = GameEngine(
                upgrades=upgrades,
                store=build_store(self.config),
                notifier=notifier,
                seed=self.config.RANDOM_SEED,
            )
        self.engine = engine

        # Every notification of the current session, unbounded unlike the notifier history
        self._session_events: List[Dict] = []
        self.engine.notifier.subscribe(self._record_event)

    def start_new_game(self) -> int:
        """
        Reset and start a session.

        Returns:
            Generation of the new session, used to bind a driver loop to it
        """
        with self._lock:
            self._session_events = []
            self.engine.start_new_game()
            generation = self.engine.state.generation
        logger.info(f"New game started (generation {generation})")
        return generation

    def reset(self) -> None:
        with self._lock:
            self._session_events = []
            self.engine.reset()

    def toggle_pause(self) -> bool:
        with self._lock:
            return self.engine.toggle_pause()

    def assign_flight_to_gate(self, flight_id: str, gate_id: str) -> CommandResult:
        with self._lock:
            return self.engine.assign_flight_to_gate(flight_id, gate_id)

    def purchase_upgrade(self, upgrade_id: str) -> CommandResult:
        with self._lock:
            return self.engine.purchase_upgrade(upgrade_id)

    def tick(self, delta_time: float) -> None:
        with self._lock:
            self.engine.tick(delta_time)

    def snapshot(self) -> GameSnapshot:
        with self._lock:
            return self.engine.snapshot()

    def save_game(self) -> bool:
        with self._lock:
            return self.engine.save_game()

    def high_score(self) -> int:
        with self._lock:
            return self.engine.high_score()

    def recent_events(self, limit: Optional[int] = 50) -> List[Dict]:
        with self._lock:
            return [n.model_dump(mode="json") for n in self.engine.notifier.recent(limit)]

    def report(self) -> Dict:
        """Summary of every notification of the current session."""
        with self._lock:
            entries = list(self._session_events)
        return summarize_journal(entries)

    def _record_event(self, notification: Notification) -> None:
        self._session_events.append(notification.model_dump(mode="json"))
        if notification.kind == NotificationKind.GAME_OVER and self.config.REPORT_FILE:
            summary = generate_final_report(self._session_events, self.config.REPORT_FILE)
            logger.info(
                f"Session report written to {self.config.REPORT_FILE} "
                f"({summary['flights_completed']} flights, score {summary['final_score']})"
            )

    def run_game_loop(self, generation: int) -> None:
        """
        Drive the session with wall-clock deltas until it ends or is replaced.

        Args:
            generation: Session generation this loop belongs to
        """
        logger.info(f"Driver loop started for generation {generation}")
        last = time.monotonic()

        while True:
            time.sleep(self.config.TICK_INTERVAL)
            now = time.monotonic()
            delta_time = now - last
            last = now

            with self._lock:
                state = self.engine.state
                if state.generation != generation or state.is_ended:
                    break
                self.engine.tick(delta_time)

        logger.info(f"Driver loop stopped for generation {generation}")

    def close(self) -> None:
        if self.journal is not None:
            self.journal.close()
            self.journal = None
