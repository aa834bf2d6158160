# flappy/game/storage.py
"""Best-score persistence: a single integer in a text file, best effort both ways."""

from __future__ import annotations
from pathlib import Path
from typing import Union

from .config import BEST_SCORE_PATH


class BestScoreStore:
    def __init__(self, path: Union[str, Path] = BEST_SCORE_PATH):
        self.path = Path(path).expanduser()

    def load(self) -> int:
        """Stored best score, or 0 when the file is missing, unreadable or garbled."""
        try:
            value = int(self.path.read_text(encoding="utf-8").strip())
        except (OSError, ValueError):
            # ValueError also covers UnicodeDecodeError from non-UTF-8 bytes
            return 0
        return value if value >= 0 else 0

    def save(self, score: int) -> bool:
        """Returns False if the write failed; callers ignore it."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(str(int(score)), encoding="utf-8")
        except OSError:
            return False
        return True
