from __future__ import annotations
import json
import logging
import threading
from pathlib import Path
from typing import Optional, Protocol

class HighScoreStore(Protocol):
    def get(self) -> int:
        ...

    def set(self, value: int) -> None:
        ...

class MemoryHighScoreStore:
    def __init__(self, value: int = 0):
        self._value = value

    def get(self) -> int:
        return self._value

    def set(self, value: int) -> None:
        self._value = value

class JsonHighScoreStore:
    """
    Keeps the high score in a small JSON file: {"highScore": 42}.
    A missing file reads as 0; the file is created on first write.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._lock = threading.Lock()

    def get(self) -> int:
        with self._lock:
            if not self.path.exists():
                return 0
            try:
                data = json.loads(self.path.read_text(encoding='utf-8'))
                return int(data.get('highScore', 0))
            except (ValueError, TypeError, AttributeError) as e:
                logging.warning(f"Ignoring unreadable high score file {self.path}: {e}")
                return 0

    def set(self, value: int) -> None:
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps({'highScore': value}), encoding='utf-8')

def build_high_score_store(path: Optional[Path]) -> HighScoreStore:
    if path is None:
        return MemoryHighScoreStore()
    return JsonHighScoreStore(path)
