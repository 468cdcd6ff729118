"""Local high-score persistence.

Listens for GAME_OVER and keeps the best score and distance in a small
JSON file. The engine never reads or writes this file itself.
"""

from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional
import json
import logging

from dodger.core.events import Event, EventBus, EventType

logger = logging.getLogger(__name__)


@dataclass
class HighScore:
    """Best results seen so far."""
    score: int = 0
    distance: int = 0
    games_played: int = 0
    updated_at: Optional[str] = None


class HighScoreStore:
    """Persistent high score using a JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._record = HighScore()
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._load()

    @property
    def record(self) -> HighScore:
        return self._record

    @property
    def best_score(self) -> int:
        return self._record.score

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self._record = HighScore(**data)
            logger.info(f"Loaded high score {self._record.score} from {self.path}")
        except (OSError, ValueError, TypeError) as e:
            logger.error(f"Failed to load high score: {e}")

    def _save(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(asdict(self._record), f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Failed to save high score: {e}")

    def submit(self, score: int, distance: int) -> bool:
        """Record a finished game. Returns True if it set a new high score."""
        record = self._record
        record.games_played += 1
        is_record = score > record.score
        if is_record:
            record.score = score
            record.updated_at = datetime.now().isoformat(timespec="seconds")
            logger.info(f"New high score: {score}")
        record.distance = max(record.distance, distance)
        self._save()
        return is_record

    def attach(self, event_bus: EventBus) -> None:
        """Start recording every GAME_OVER published on the bus."""
        self.detach()
        self._unsubscribe = event_bus.subscribe(EventType.GAME_OVER, self._on_game_over)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_game_over(self, event: Event) -> None:
        self.submit(
            score=int(event.data.get("score", 0)),
            distance=int(event.data.get("distance", 0)),
        )
