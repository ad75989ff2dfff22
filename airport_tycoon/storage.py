"""High-score and save-game storage collaborators.

The engine never touches storage itself: it hands a score or a ``SaveData`` snapshot to one
of these stores. Every store swallows its own I/O failures (logging them) and answers with a
neutral value, so a broken disk or leaderboard only means "not persisted".
"""

import json
import logging
import time
from pathlib import Path
from typing import Dict, List, Optional
import requests
from pydantic import BaseModel, Field, ValidationError
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger(__name__)


class SavedGate(BaseModel):
    id: str
    name: str
    capacity: int
    type: str


class SaveData(BaseModel):
    """Serializable snapshot of a session's progress."""

    cash: int
    satisfaction: float
    reputation: int
    day: int
    flights_completed: int
    purchased_upgrade_ids: List[str] = Field(default_factory=list)
    gates: List[SavedGate] = Field(default_factory=list)
    timestamp: float = Field(default_factory=time.time)


class HighScoreStore:
    """Base store. Keeps everything in memory; subclasses persist it somewhere."""

    def __init__(self):
        self._high_score = 0
        self._save: Optional[SaveData] = None

    def get_high_score(self) -> int:
        return self._high_score

    def save_high_score(self, score: int) -> bool:
        """Record the score if it beats the current best. Returns True for a new high score."""
        if score > self.get_high_score():
            self._high_score = score
            return True
        return False

    def save_game(self, data: SaveData) -> bool:
        self._save = data
        return True

    def load_game(self) -> Optional[SaveData]:
        return self._save

    def delete_save(self) -> bool:
        self._save = None
        return True


class FileHighScoreStore(HighScoreStore):
    """Stores the high score and the last save in one JSON file."""

    def __init__(self, path: str):
        """
        Initialize file store.

        Args:
            path: JSON file path (created on first write)
        """
        super().__init__()
        self.path = Path(path)

    def _read(self) -> Dict:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def get_high_score(self) -> int:
        try:
            return int(self._read().get("high_score", 0))
        except (OSError, ValueError, TypeError) as e:
            logger.warning(f"Failed to read high score from {self.path}: {e}")
            return 0

    def save_high_score(self, score: int) -> bool:
        try:
            data = self._read()
            if score <= int(data.get("high_score", 0)):
                return False
            data["high_score"] = score
            self._write(data)
            return True
        except (OSError, ValueError, TypeError) as e:
            logger.warning(f"Failed to save high score to {self.path}: {e}")
            return False

    def save_game(self, data: SaveData) -> bool:
        try:
            stored = self._read()
            stored["save"] = data.model_dump()
            self._write(stored)
            return True
        except (OSError, ValueError, TypeError) as e:
            logger.warning(f"Failed to save game to {self.path}: {e}")
            return False

    def load_game(self) -> Optional[SaveData]:
        try:
            raw = self._read().get("save")
            return SaveData(**raw) if raw else None
        except (OSError, ValueError, TypeError, ValidationError) as e:
            logger.warning(f"Failed to load game from {self.path}: {e}")
            return None

    def delete_save(self) -> bool:
        try:
            stored = self._read()
            stored.pop("save", None)
            self._write(stored)
            return True
        except (OSError, ValueError, TypeError) as e:
            logger.warning(f"Failed to delete save in {self.path}: {e}")
            return False


class RemoteHighScoreStore(HighScoreStore):
    """HTTP leaderboard client.

    Endpoints (relative to ``base_url``): ``GET/POST /highscore`` and ``GET/POST/DELETE /save``.
    """

    def __init__(self, base_url: str, timeout: int = 5, api_key: Optional[str] = None):
        """
        Initialize leaderboard client.

        Args:
            base_url: Leaderboard service base URL
            timeout: Request timeout in seconds
            api_key: Optional key sent in the API-KEY header
        """
        super().__init__()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {"API-KEY": api_key} if api_key else {}

        # Setup session with retry strategy
        self.session = requests.Session()
        retry_strategy = Retry(
            total=3,
            backoff_factor=0.5,
            status_forcelist=[500, 502, 503, 504],
            allowed_methods=["GET", "POST", "DELETE"],
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    def _request(self, method: str, endpoint: str, json_data: Optional[Dict] = None) -> Dict:
        url = f"{self.base_url}{endpoint}"
        response = self.session.request(
            method, url, json=json_data, headers=self.headers, timeout=self.timeout
        )
        response.raise_for_status()
        return response.json() if response.content else {}

    def get_high_score(self) -> int:
        try:
            return int(self._request("GET", "/highscore").get("score", 0))
        except (requests.RequestException, ValueError, TypeError) as e:
            logger.warning(f"Leaderboard unavailable, high score unknown: {e}")
            return 0

    def save_high_score(self, score: int) -> bool:
        try:
            result = self._request("POST", "/highscore", {"score": score})
            return bool(result.get("is_high_score", False))
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Score {score} not persisted: {e}")
            return False

    def save_game(self, data: SaveData) -> bool:
        try:
            self._request("POST", "/save", data.model_dump())
            return True
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Save not persisted: {e}")
            return False

    def load_game(self) -> Optional[SaveData]:
        try:
            raw = self._request("GET", "/save")
            return SaveData(**raw) if raw else None
        except (requests.RequestException, ValueError, ValidationError) as e:
            logger.warning(f"Failed to load save from leaderboard: {e}")
            return None

    def delete_save(self) -> bool:
        try:
            self._request("DELETE", "/save")
            return True
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Failed to delete remote save: {e}")
            return False
