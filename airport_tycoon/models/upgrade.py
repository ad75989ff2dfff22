"""Upgrade model."""

from enum import Enum
from pydantic import BaseModel


class UpgradeEffect(str, Enum):
    """What a purchased upgrade changes."""

    ADD_GATES = "addGates"
    PROCESSING_SPEED = "processingSpeed"
    REVENUE = "revenue"
    SATISFACTION = "satisfaction"
    OPERATING_COST = "operatingCost"


class Upgrade(BaseModel):
    """Represents an upgrade that can be purchased once."""

    id: str
    name: str
    description: str = ""
    cost: int
    effect: UpgradeEffect
    value: float
    purchased: bool = False

    def purchase(self) -> None:
        """Mark as purchased (write-once)."""
        self.purchased = True

    class Config:
        json_schema_extra = {
            "example": {
                "id": "runway2",
                "name": "Second Runway",
                "description": "Reduce processing time by 20%",
                "cost": 70000,
                "effect": "processingSpeed",
                "value": 0.8,
                "purchased": False,
            }
        }
