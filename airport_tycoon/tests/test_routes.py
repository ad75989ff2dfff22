"""API tests against the routers with an isolated game service."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from airport_tycoon.config import Config
from airport_tycoon.routes import command_router, game_router, status_router
from airport_tycoon.services.game_service import GameService
from airport_tycoon.services.singleton import set_game_service


@pytest.fixture
def service(tmp_path):
    config = Config(
        AUTO_TICK=False,
        RANDOM_SEED=17,
        EVENT_LOG_FILE="",
        HIGH_SCORE_FILE=str(tmp_path / "save.json"),
        REPORT_FILE=str(tmp_path / "report"),
    )
    service = GameService(config=config)
    set_game_service(service)
    yield service
    set_game_service(None)
    service.close()


@pytest.fixture
def client(service):
    app = FastAPI()
    app.include_router(game_router)
    app.include_router(command_router)
    app.include_router(status_router)
    return TestClient(app)


def test_start_and_snapshot(client):
    response = client.post("/api/game/start")
    assert response.status_code == 200
    assert response.json()["run_state"] == "RUNNING"

    snapshot = client.get("/api/snapshot").json()
    assert snapshot["run_state"] == "RUNNING"
    assert snapshot["stats"]["cash"] == 80000
    assert len(snapshot["gates"]) == 3
    assert len(snapshot["waiting_flights"]) == 1
    assert snapshot["weather"] == "CLEAR"


def test_assign_flight(client):
    client.post("/api/game/start")
    flight_id = client.get("/api/snapshot").json()["waiting_flights"][0]["id"]

    first = client.post("/api/flights/assign", json={"flight_id": flight_id, "gate_id": "G1"})
    second = client.post("/api/flights/assign", json={"flight_id": flight_id, "gate_id": "G2"})

    assert first.json()["success"] is True
    assert first.json()["match"] in ("perfect", "good", "poor")
    assert second.status_code == 200
    assert second.json()["success"] is False
    assert second.json()["reason"] == "flight_already_assigned"

    gate = client.get("/api/snapshot").json()["gates"][0]
    assert gate["occupant_id"] == flight_id
    assert gate["available"] is False


def test_assign_requires_both_ids(client):
    response = client.post("/api/flights/assign", json={"flight_id": "F00001"})

    assert response.status_code == 422


def test_purchase_upgrade(client):
    client.post("/api/game/start")

    bought = client.post("/api/upgrades/terminal2/purchase").json()
    too_expensive = client.post("/api/upgrades/terminal3/purchase").json()

    assert bought["success"] is True
    assert too_expensive["reason"] == "insufficient_funds"
    snapshot = client.get("/api/snapshot").json()
    assert snapshot["stats"]["cash"] == 30000
    assert [g["name"] for g in snapshot["gates"]][-2:] == ["Gate B1", "Gate B2"]


def test_commands_before_start_are_rejected(client):
    response = client.post("/api/upgrades/lounge/purchase")

    assert response.json()["reason"] == "not_running"


def test_pause_and_reset(client):
    client.post("/api/game/start")

    paused = client.post("/api/game/pause").json()
    resumed = client.post("/api/game/pause").json()
    reset = client.post("/api/game/reset").json()

    assert paused == {"paused": True, "run_state": "PAUSED"}
    assert resumed == {"paused": False, "run_state": "RUNNING"}
    assert reset["run_state"] == "SETUP"


def test_ticks_advance_the_session(client, service):
    client.post("/api/game/start")

    for _ in range(181):
        service.tick(1.0)

    snapshot = client.get("/api/snapshot").json()
    assert snapshot["stats"]["day"] == 2
    assert snapshot["stats"]["cash"] == 77000

    report = client.get("/api/report").json()
    assert report["total_operating_cost"] == 3000


def test_events_and_high_score(client, service):
    client.post("/api/game/start")
    client.post("/api/upgrades/lounge/purchase")
    service.engine.state.reputation = 0
    service.tick(0.01)

    events = client.get("/api/events", params={"limit": 2}).json()["events"]
    assert [e["kind"] for e in events] == ["upgradePurchased", "gameOver"]

    high_score = client.get("/api/highscore").json()["high_score"]
    assert high_score == service.engine.state.final_score


def test_save_game(client, service, tmp_path):
    client.post("/api/game/start")

    assert client.post("/api/game/save").json() == {"saved": True}
    assert service.engine.store.load_game().cash == 80000
