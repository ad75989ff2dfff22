"""Data loader for the upgrade catalogue CSV."""

import logging
import os
from typing import List
import pandas as pd

from .config import GameConfigError
from .models.upgrade import Upgrade, UpgradeEffect

logger = logging.getLogger(__name__)


REQUIRED_COLUMNS = ["id", "cost", "effect", "value"]


def load_upgrades(csv_path: str) -> List[Upgrade]:
    """
    Parse an upgrade catalogue CSV and produce Upgrade instances.

    Expected columns: id, name, description, cost, effect, value. ``name`` defaults to the id
    and ``description`` to an empty string. Both ``,`` and ``;`` separated files are accepted.

    Args:
        csv_path: Path to the catalogue CSV

    Returns:
        Upgrades in file order

    Raises:
        FileNotFoundError: If the file does not exist
        GameConfigError: On missing columns, unknown effects, duplicate ids or bad numbers
    """
    if not os.path.exists(csv_path):
        raise FileNotFoundError(f"Upgrade catalogue not found: {csv_path}")

    df = pd.read_csv(csv_path, sep=None, engine="python")
    df.columns = [str(c).strip() for c in df.columns]
    logger.info(f"Loaded upgrade catalogue CSV with {len(df)} rows")

    for col in REQUIRED_COLUMNS:
        if col not in df.columns:
            raise GameConfigError(f"Missing required column: {col}")

    duplicated = df["id"][df["id"].duplicated()].tolist()
    if duplicated:
        raise GameConfigError(f"Duplicate upgrade ids: {duplicated}")

    valid_effects = {e.value for e in UpgradeEffect}
    upgrades = []

    for _, row in df.iterrows():
        upgrade_id = str(row["id"]).strip()
        effect = str(row["effect"]).strip()
        if effect not in valid_effects:
            raise GameConfigError(f"Upgrade {upgrade_id}: unknown effect '{effect}'")

        try:
            cost = int(row["cost"])
            value = float(row["value"])
        except (TypeError, ValueError) as e:
            raise GameConfigError(f"Upgrade {upgrade_id}: invalid cost or value ({e})")

        if cost < 0 or value <= 0:
            raise GameConfigError(f"Upgrade {upgrade_id}: cost must be >= 0 and value > 0")

        name = row.get("name", upgrade_id)
        description = row.get("description", "")
        upgrades.append(
            Upgrade(
                id=upgrade_id,
                name=upgrade_id if pd.isna(name) else str(name),
                description="" if pd.isna(description) else str(description),
                cost=cost,
                effect=UpgradeEffect(effect),
                value=value,
            )
        )

    return upgrades
