"""
Execution log storage for typo.
Keeps the append-only, size-capped log of action runs in memory and mirrors
it to a persistence backend.
"""
import json
import logging
import os
import tempfile
import threading
import time
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Optional

from ..constants import MAX_LOG_ENTRIES
from ..exceptions import LogFormatError
from .models import Action, ExecutionLogEntry

logger = logging.getLogger(__name__)


class LogPersistence(ABC):
    """
    Durable storage for the execution log.

    The store loads once at startup and rewrites the whole log after every
    append.
    """

    @abstractmethod
    def load(self) -> list[ExecutionLogEntry]:
        """Load all persisted entries, oldest first."""
        pass

    @abstractmethod
    def save(self, entries: list[ExecutionLogEntry]) -> None:
        """Replace the persisted log with ``entries``."""
        pass


class JsonFileLogPersistence(LogPersistence):
    """Stores the log as a JSON array in a single file."""

    def __init__(self, path: Path) -> None:
        """
        Initialize JSON file persistence.

        Args:
            path: Location of the log file
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        """Get the log file path."""
        return self._path

    def load(self) -> list[ExecutionLogEntry]:
        """
        Load entries from the log file.

        Returns:
            Entries in file order, or an empty list if the file doesn't exist

        Raises:
            OSError: If the file can't be read
            ValueError: If the file isn't valid UTF-8 or valid JSON
            LogFormatError: If a record is malformed
        """
        if not self._path.exists():
            return []

        with open(self._path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        if not isinstance(data, list):
            raise LogFormatError("Execution log must be a JSON array", data)

        return [ExecutionLogEntry.from_dict(item) for item in data]

    def save(self, entries: list[ExecutionLogEntry]) -> None:
        """Write entries atomically via a temporary file in the same directory."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.",
            dir=str(self._path.parent),
        )
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump([entry.to_dict() for entry in entries], f, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class InMemoryLogPersistence(LogPersistence):
    """Keeps the last saved snapshot in memory."""

    def __init__(self, entries: Optional[list[ExecutionLogEntry]] = None) -> None:
        self._entries = list(entries or [])
        self.save_count = 0

    def load(self) -> list[ExecutionLogEntry]:
        return list(self._entries)

    def save(self, entries: list[ExecutionLogEntry]) -> None:
        self._entries = list(entries)
        self.save_count += 1


class ExecutionLogStore:
    """
    Owner of the execution log.

    All reads and writes go through one lock, so an append and the eviction
    it triggers are never observed separately. The in-memory log is
    authoritative: persistence failures are logged and otherwise ignored.
    """

    def __init__(
        self,
        persistence: Optional[LogPersistence] = None,
        max_entries: int = MAX_LOG_ENTRIES,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize the store and load persisted entries.

        Args:
            persistence: Storage backend; entries live in memory only if None
            max_entries: Maximum number of entries kept, oldest evicted first
            clock: Source of the current time in epoch seconds
        """
        if max_entries < 1:
            raise ValueError(f"max_entries must be positive, got {max_entries}")

        self._persistence = persistence
        self._max_entries = max_entries
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: list[ExecutionLogEntry] = []
        self._load()

    def _load(self) -> None:
        """Load entries from persistence, starting empty on failure."""
        if self._persistence is None:
            return

        try:
            entries = self._persistence.load()
        except (OSError, ValueError, LogFormatError) as e:
            logger.warning(f"Failed to load execution log, starting empty: {e}")
            return

        if len(entries) > self._max_entries:
            entries = entries[-self._max_entries:]
        self._entries = entries
        logger.debug(f"Loaded {len(entries)} execution log entries")

    def _save(self, snapshot: list[ExecutionLogEntry]) -> None:
        if self._persistence is None:
            return

        try:
            self._persistence.save(snapshot)
        except Exception as e:
            logger.warning(f"Failed to save execution log: {e}", exc_info=True)

    @property
    def max_entries(self) -> int:
        """Get the entry cap."""
        return self._max_entries

    def append(self, entry: ExecutionLogEntry) -> None:
        """
        Append an entry, evicting the oldest entries beyond the cap.

        Args:
            entry: Entry to append
        """
        with self._lock:
            self._entries.append(entry)
            overflow = len(self._entries) - self._max_entries
            if overflow > 0:
                del self._entries[:overflow]
            snapshot = list(self._entries)
            self._save(snapshot)

    def record(
        self,
        action: Action,
        prompt: str,
        provider: Optional[str],
        model_id: Optional[str],
        started_at: float,
        input_text: str,
        output_text: Optional[str],
        success: bool,
        error_message: Optional[str] = None,
    ) -> ExecutionLogEntry:
        """
        Record a completed action run.

        Args:
            action: Action that ran
            prompt: Prompt that was sent
            provider: Provider name
            model_id: Model id
            started_at: Start time as epoch seconds
            input_text: Text the action was applied to
            output_text: Produced text, None if the run failed
            success: Whether the run succeeded
            error_message: Error text for a failed run

        Returns:
            The appended entry
        """
        now = self._clock()
        entry = ExecutionLogEntry(
            id=str(uuid.uuid4()),
            timestamp=now,
            action_id=action.id,
            action_name=action.name,
            prompt=prompt,
            provider=provider,
            model_id=model_id,
            duration_ms=max(0.0, (now - started_at) * 1000),
            input_length=len(input_text),
            output_length=len(output_text) if output_text is not None else 0,
            success=success,
            error_message=error_message,
        )
        self.append(entry)
        return entry

    def entries(self) -> list[ExecutionLogEntry]:
        """Get a snapshot of all entries, oldest first."""
        with self._lock:
            return list(self._entries)

    def entries_for(self, action_id: str) -> list[ExecutionLogEntry]:
        """Get a snapshot of the entries of one action, oldest first."""
        with self._lock:
            return [entry for entry in self._entries if entry.action_id == action_id]

    def recent(self, count: int = 10) -> list[ExecutionLogEntry]:
        """Get the newest ``count`` entries, newest first."""
        if count <= 0:
            return []
        with self._lock:
            return list(reversed(self._entries[-count:]))

    def clear(self) -> None:
        """Remove all entries."""
        with self._lock:
            self._entries.clear()
            self._save([])

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
