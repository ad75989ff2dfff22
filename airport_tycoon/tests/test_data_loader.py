"""Tests for the upgrade catalogue loader."""

import pytest
from airport_tycoon.config import GameConfigError
from airport_tycoon.data_loader import load_upgrades
from airport_tycoon.engine import GameEngine
from airport_tycoon.models.upgrade import UpgradeEffect


@pytest.fixture
def catalogue_csv(tmp_path):
    path = tmp_path / "upgrades.csv"
    path.write_text(
        "id;name;description;cost;effect;value\n"
        "terminal2;Terminal 2;Unlock 2 additional gates;50000;addGates;2\n"
        "lounge;VIP Lounge;;35000;satisfaction;1.1\n"
        "cheapRunway;;Faster turnaround;1000;processingSpeed;0.5\n",
        encoding="utf-8",
    )
    return path


def write_csv(tmp_path, content):
    path = tmp_path / "bad.csv"
    path.write_text(content, encoding="utf-8")
    return str(path)


def test_load_upgrades(catalogue_csv):
    upgrades = load_upgrades(str(catalogue_csv))

    assert [u.id for u in upgrades] == ["terminal2", "lounge", "cheapRunway"]
    assert upgrades[0].cost == 50000
    assert upgrades[0].effect == UpgradeEffect.ADD_GATES
    assert upgrades[0].value == 2.0
    assert upgrades[1].description == ""
    assert upgrades[2].name == "cheapRunway"
    assert all(not u.purchased for u in upgrades)


def test_engine_uses_loaded_catalogue(catalogue_csv):
    engine = GameEngine(upgrades=load_upgrades(str(catalogue_csv)), seed=1)
    engine.start()

    assert engine.purchase_upgrade("cheapRunway").success
    assert engine.state.multipliers.processing_speed == 0.5
    assert engine.purchase_upgrade("controlTower").success is False


def test_comma_separated_file(tmp_path):
    path = write_csv(tmp_path, "id,cost,effect,value\nrunway2,70000,processingSpeed,0.8\n")

    upgrades = load_upgrades(path)

    assert upgrades[0].name == "runway2"
    assert upgrades[0].effect == UpgradeEffect.PROCESSING_SPEED


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_upgrades(str(tmp_path / "nope.csv"))


@pytest.mark.parametrize(
    "content,message",
    [
        ("id,cost,value\nx,10,1.0\n", "Missing required column: effect"),
        ("id,cost,effect,value\nx,10,teleport,1.0\n", "unknown effect"),
        ("id,cost,effect,value\nx,10,revenue,1.2\nx,20,revenue,1.3\n", "Duplicate upgrade ids"),
        ("id,cost,effect,value\nx,-5,revenue,1.2\n", "cost must be >= 0"),
        ("id,cost,effect,value\nx,10,revenue,0\n", "value > 0"),
        ("id,cost,effect,value\nx,cheap,revenue,1.2\n", "invalid cost or value"),
    ],
)
def test_invalid_catalogue(tmp_path, content, message):
    with pytest.raises(GameConfigError, match=message):
        load_upgrades(write_csv(tmp_path, content))
