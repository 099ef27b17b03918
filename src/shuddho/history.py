from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
import json
from pathlib import Path
import time
from typing import Callable

from .logging import get_logger


DEFAULT_CAPACITY = 6


def now_millis() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class SearchHistoryEntry:
    word: str
    timestamp: int  # milliseconds since the epoch


class HistoryStore(ABC):
    """Recent searches, newest first, unique by word, at most ``capacity`` entries."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY, clock: Callable[[], int] = now_millis) -> None:
        if capacity < 1:
            raise ValueError(f"History capacity must be positive, got {capacity}")
        self.logger = get_logger(f"shuddho.history.{self.__class__.__name__}")
        self.capacity = capacity
        self._clock = clock
        self._entries: list[SearchHistoryEntry] = []

    @property
    def entries(self) -> list[SearchHistoryEntry]:
        return list(self._entries)

    def words(self) -> list[str]:
        return [entry.word for entry in self._entries]

    def append(self, word: str) -> list[SearchHistoryEntry]:
        entry = SearchHistoryEntry(word=word, timestamp=self._clock())
        older = [e for e in self._entries if e.word != word]
        self._entries = [entry, *older[: self.capacity - 1]]
        self.logger.debug("Recorded '%s', history now holds %d entries", word, len(self._entries))
        self._persist()
        return self.entries

    @abstractmethod
    def _persist(self) -> None:
        raise NotImplementedError


class InMemoryHistoryStore(HistoryStore):
    def __init__(
        self,
        entries: list[SearchHistoryEntry] | None = None,
        capacity: int = DEFAULT_CAPACITY,
        clock: Callable[[], int] = now_millis,
    ) -> None:
        super().__init__(capacity=capacity, clock=clock)
        self._entries = list(entries or [])

    def _persist(self) -> None:
        pass


class JsonFileHistoryStore(HistoryStore):
    """History kept in a single JSON file: an array of ``{word, timestamp}`` records.

    The file is read once, on construction, and overwritten as a whole after
    every append. A malformed file is not repaired; the decode error propagates.
    """

    def __init__(self, path: Path, capacity: int = DEFAULT_CAPACITY, clock: Callable[[], int] = now_millis) -> None:
        super().__init__(capacity=capacity, clock=clock)
        self.path = Path(path).expanduser()
        self._entries = self._load()

    def _load(self) -> list[SearchHistoryEntry]:
        if not self.path.is_file():
            self.logger.debug("No history file at %s, starting empty", self.path)
            return []
        records = json.loads(self.path.read_text(encoding="utf-8"))
        entries = [SearchHistoryEntry(word=r["word"], timestamp=r["timestamp"]) for r in records]
        self.logger.info("Loaded %d history entries from %s", len(entries), self.path)
        return entries

    def _persist(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [asdict(entry) for entry in self._entries]
        self.path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
