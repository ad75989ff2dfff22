"""Tests for the game service and notification fan-out."""

import json
import pytest
from airport_tycoon.config import Config, GameConfigError
from airport_tycoon.models.game_state import RunState
from airport_tycoon.notifications import NotificationKind, Notifier
from airport_tycoon.services.game_service import GameService, build_store
from airport_tycoon.storage import FileHighScoreStore, RemoteHighScoreStore


@pytest.fixture
def config(tmp_path):
    return Config(
        AUTO_TICK=False,
        TICK_INTERVAL=0.001,
        RANDOM_SEED=3,
        EVENT_LOG_FILE=str(tmp_path / "events.jsonl"),
        HIGH_SCORE_FILE=str(tmp_path / "save.json"),
        REPORT_FILE=str(tmp_path / "report"),
    )


@pytest.fixture
def service(config):
    service = GameService(config=config)
    yield service
    service.close()


def test_rejects_non_positive_tick_interval(config):
    config.TICK_INTERVAL = 0

    with pytest.raises(GameConfigError):
        GameService(config=config)


def test_build_store(config):
    assert isinstance(build_store(config), FileHighScoreStore)

    config.LEADERBOARD_URL = "http://leaderboard.local"
    assert isinstance(build_store(config), RemoteHighScoreStore)


def test_start_new_game_returns_generation(service):
    first = service.start_new_game()
    second = service.start_new_game()

    assert second == first + 1
    assert service.snapshot().run_state == RunState.RUNNING


def test_driver_loop_stops_when_session_is_replaced(service):
    generation = service.start_new_game()
    service.start_new_game()

    service.run_game_loop(generation)

    assert service.snapshot().clock == 0.0


def test_driver_loop_stops_when_game_ends(service):
    generation = service.start_new_game()
    service.engine.state.reputation = 0

    service.run_game_loop(generation)

    assert service.snapshot().run_state == RunState.ENDED
    assert service.high_score() == service.snapshot().final_score


def test_journal_records_session_events(service):
    service.start_new_game()
    service.purchase_upgrade("lounge")
    service.close()

    lines = open(service.config.EVENT_LOG_FILE, encoding="utf-8").read().splitlines()
    assert any('"upgradePurchased"' in line for line in lines)


def test_notifier_history_and_unsubscribe():
    notifier = Notifier(history_size=3)
    received = []
    notifier.subscribe(received.append)

    for n in range(5):
        notifier.emit(NotificationKind.WARNING_RAISED, float(n), 1, {"n": n})
    notifier.unsubscribe(received.append)
    notifier.emit(NotificationKind.GAME_OVER, 9.0, 1)

    assert len(received) == 5
    assert [e.data.get("n") for e in notifier.recent()] == [3, 4, None]
    assert [e.kind for e in notifier.recent(1)] == [NotificationKind.GAME_OVER]


def test_report_covers_whole_session(service):
    service.start_new_game()
    for _ in range(250):
        service.assign_flight_to_gate("F99999", "G1")

    report = service.report()

    assert len(service.recent_events(limit=None)) == 200
    assert report["event_counts"]["commandRejected"] == 250
    assert report["total_events"] >= 250


def test_report_starts_over_with_each_session(service):
    service.start_new_game()
    service.purchase_upgrade("lounge")
    service.start_new_game()

    assert "upgradePurchased" not in service.report()["event_counts"]

    service.reset()
    assert service.report()["total_events"] == 0


def test_game_over_writes_session_report(service, tmp_path):
    service.start_new_game()
    service.purchase_upgrade("lounge")
    service.engine.state.reputation = 0
    service.tick(0.01)

    report = json.loads((tmp_path / "report.json").read_text(encoding="utf-8"))
    assert report["summary"]["final_score"] == service.snapshot().final_score
    assert report["summary"]["event_counts"]["upgradePurchased"] == 1
    assert (tmp_path / "report.txt").exists()
