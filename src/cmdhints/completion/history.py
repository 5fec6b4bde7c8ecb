"""Command usage ledger.

Tracks how often and how recently each command was used and blends both into
a priority score. Mutations and file I/O are serialized by one
``asyncio.Lock``; waiters acquire it in FIFO order, so N concurrent
``record_command`` calls always land as N increments.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from cmdhints.domain.errors import ErrorCode, HistoryError
from cmdhints.domain.models import HistoryEntry, HistoryFile
from cmdhints.domain.result import Err, Ok, Result
from cmdhints.infrastructure.json_store import JsonFileStore
from cmdhints.logger import get_logger

logger = get_logger("completion.history")

HISTORY_VERSION = "1.0.0"
MAX_FREQUENCY_SCORE = 0.5

# (age below, in milliseconds) -> recency score
RECENCY_BUCKETS: tuple[tuple[float, float], ...] = (
    (1_000, 0.5),
    (60_000, 0.45),
    (3_600_000, 0.4),
    (86_400_000, 0.3),
    (604_800_000, 0.2),
)


def _now_ms() -> float:
    return time.time() * 1000


def recency_score(age_ms: float) -> float:
    for limit, score in RECENCY_BUCKETS:
        if age_ms < limit:
            return score
    return 0.0


class UsageHistory:
    """Frequency and recency ledger persisted as one JSON file.

    Example:
        >>> history = UsageHistory("~/.cmdhints/history.json")
        >>> await history.load()
        >>> await history.record_command("build")
        >>> history.get_command_score("build")
        0.6
    """

    def __init__(
        self,
        history_file: str | Path,
        max_history_size: int = 1000,
        *,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        """Initialize an empty ledger.

        Args:
            history_file: JSON file used by ``save``/``load``
            max_history_size: Maximum number of distinct commands kept
            clock: Source of the current time in epoch milliseconds
        """
        if max_history_size < 1:
            raise ValueError("max_history_size must be at least 1")
        self._store = JsonFileStore(history_file)
        self._max_size = max_history_size
        self._clock = clock or _now_ms
        self._entries: dict[str, HistoryEntry] = {}
        self._lock = asyncio.Lock()

    @property
    def history_file(self) -> Path:
        return self._store.path

    async def record_command(self, command: str) -> Result[None, HistoryError]:
        """Count one use of ``command``, evicting the oldest entry when over capacity."""
        async with self._lock:
            now = self._clock()
            entry = self._entries.get(command)
            if entry is not None:
                entry.frequency += 1
                entry.last_used = now
            else:
                self._entries[command] = HistoryEntry(command=command, frequency=1, last_used=now)

            if len(self._entries) > self._max_size:
                self._evict_oldest()
        return Ok(None)

    def get_command_score(self, command: str) -> float:
        """Blend of ``min(frequency / 10, 0.5)`` and a recency bucket; 0 when unknown."""
        entry = self._entries.get(command)
        if entry is None:
            return 0.0
        frequency_score = min(entry.frequency / 10, MAX_FREQUENCY_SCORE)
        return frequency_score + recency_score(self._clock() - entry.last_used)

    def get_history(self) -> list[HistoryEntry]:
        """Snapshot of the ledger; mutating the returned entries has no effect."""
        return [
            HistoryEntry(command=e.command, frequency=e.frequency, last_used=e.last_used)
            for e in self._entries.values()
        ]

    async def save(self) -> Result[None, HistoryError]:
        async with self._lock:
            document = {
                "version": HISTORY_VERSION,
                "entries": [entry.to_record() for entry in self._entries.values()],
            }
            try:
                await self._store.write(document)
            except (IOError, ValueError) as e:
                logger.error(f"Failed to save history to {self._store.path}: {e}")
                return Err(HistoryError(type=ErrorCode.SAVE_FAILED, message=str(e)))

        logger.debug(f"Saved {len(document['entries'])} history entries to {self._store.path}")
        return Ok(None)

    async def load(self) -> Result[None, HistoryError]:
        """Replace the ledger with the file's contents.

        A missing file leaves an empty ledger. A file holding more entries
        than the capacity keeps only the most recently used ones.
        """
        async with self._lock:
            try:
                raw = await self._store.read()
                parsed = HistoryFile.model_validate(raw) if raw is not None else HistoryFile()
            except (IOError, ValueError, ValidationError) as e:
                logger.warning(f"Failed to load history from {self._store.path}: {e}")
                return Err(HistoryError(type=ErrorCode.LOAD_FAILED, message=str(e)))

            self._entries.clear()
            for record in parsed.entries:
                self._entries[record.command] = record.to_entry()

            while len(self._entries) > self._max_size:
                self._evict_oldest()

        logger.debug(f"Loaded {len(self._entries)} history entries from {self._store.path}")
        return Ok(None)

    def _evict_oldest(self) -> None:
        # min() keeps the first of equal timestamps, i.e. insertion order
        oldest = min(self._entries.values(), key=lambda entry: entry.last_used)
        del self._entries[oldest.command]
        logger.debug(f"Evicted history entry '{oldest.command}'")

    def __len__(self) -> int:
        return len(self._entries)
