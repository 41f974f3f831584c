"""High score persistence for classic mode.

Only a single integer is ever stored.
"""
from __future__ import annotations

import logging
import os
from typing import Protocol


logger = logging.getLogger(__name__)


class HighScoreStore(Protocol):
    def load(self) -> int: ...

    def save(self, score: int) -> None: ...


class MemoryHighScoreStore:
    def __init__(self, initial: int = 0) -> None:
        self.value = int(initial)

    def load(self) -> int:
        return self.value

    def save(self, score: int) -> None:
        self.value = int(score)


class FileHighScoreStore:
    """Stores the high score as plain text in a single file.

    A missing or unreadable file counts as a high score of 0.
    """

    def __init__(self, path: str | os.PathLike) -> None:
        self.path = os.fspath(path)

    def load(self) -> int:
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                value = int(fh.read().strip() or 0)
        except FileNotFoundError:
            return 0
        except ValueError:
            logger.warning("Ignoring corrupt high score file %s", self.path)
            return 0
        except OSError as exc:
            logger.warning("Cannot read high score file %s: %s", self.path, exc)
            return 0
        return max(0, value)

    def save(self, score: int) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as fh:
            fh.write(str(int(score)))
