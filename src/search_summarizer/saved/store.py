"""Saved-search persistence in a single JSON file."""

import json
import logging
import os
import tempfile
from datetime import datetime
from functools import partial
from pathlib import Path

from anyio import to_thread
from pydantic import TypeAdapter, ValidationError

from ..exceptions import InvalidIndexError, PersistenceError
from ..models import SavedSearch

logger = logging.getLogger(__name__)

_ENTRIES_ADAPTER = TypeAdapter(list[SavedSearch])


def _atomic_write_text(path: Path, content: str) -> None:
    """Atomically write text to `path` using temp + fsync + os.replace."""
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.tmp.", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError:
            pass
        raise


class SavedSearchStore:
    """Ordered list of saved searches, rewritten in full on every mutation.

    Every operation returns an immutable snapshot (a tuple). The in-memory
    snapshot only advances after the file write succeeds, so the two never
    diverge silently. Writes require a snapshot that matches the file: until
    a load succeeds, ``save`` and ``delete`` reload first and refuse to write
    if that fails.
    """

    def __init__(self, path: Path | str):
        """Initialize the store.

        Args:
            path: JSON file holding the saved searches. Created on first save.
        """
        self.path = Path(path).expanduser()
        self._entries: tuple[SavedSearch, ...] = ()
        self._synced = False
        logger.debug(f"Saved searches file: {self.path}")

    @property
    def entries(self) -> tuple[SavedSearch, ...]:
        """Current snapshot."""
        return self._entries

    def load(self) -> tuple[SavedSearch, ...]:
        """Read the persisted list.

        A missing or blank file is an empty list. Unparseable content is also
        treated as empty once the bad file has been moved aside, so the next
        save cannot overwrite it.

        Raises:
            PersistenceError: If the file cannot be read, or is unparseable and
                cannot be moved aside. The store stays unsynced.
        """
        self._synced = False

        if not self.path.exists():
            return self._mark_synced(())

        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Failed to read saved searches from {self.path}: {e}") from e

        if not text.strip():
            return self._mark_synced(())

        try:
            data = json.loads(text)
            if data is None:
                data = []
            entries = _ENTRIES_ADAPTER.validate_python(data)
        except (ValueError, ValidationError) as e:
            logger.warning(f"Invalid saved searches file {self.path}, starting empty: {e}")
            self._quarantine()
            return self._mark_synced(())

        logger.debug(f"Loaded {len(entries)} saved searches")
        return self._mark_synced(tuple(entries))

    def save(self, entry: SavedSearch) -> tuple[SavedSearch, ...]:
        """Append ``entry`` and persist the full list.

        Raises:
            PersistenceError: If the current list cannot be read or the new list
                cannot be written. The snapshot is left unchanged.
        """
        self._ensure_synced()
        updated = (*self._entries, entry)
        self._persist(updated)
        self._entries = updated
        logger.info(f"Saved search: {entry.query[:80]}")
        return self._entries

    def delete(self, index: int) -> tuple[SavedSearch, ...]:
        """Remove the entry at ``index`` (0-based, current order) and persist.

        Raises:
            InvalidIndexError: If no entry exists at ``index``.
            PersistenceError: If the current list cannot be read or the new list
                cannot be written.
        """
        self._ensure_synced()
        if not 0 <= index < len(self._entries):
            raise InvalidIndexError(index, len(self._entries))

        updated = self._entries[:index] + self._entries[index + 1 :]
        self._persist(updated)
        removed = self._entries[index]
        self._entries = updated
        logger.info(f"Deleted saved search {index}: {removed.query[:80]}")
        return self._entries

    async def load_async(self) -> tuple[SavedSearch, ...]:
        """Async wrapper for load() to avoid blocking the event loop."""
        return await to_thread.run_sync(self.load)

    async def save_async(self, entry: SavedSearch) -> tuple[SavedSearch, ...]:
        """Async wrapper for save() to avoid blocking the event loop."""
        return await to_thread.run_sync(partial(self.save, entry))

    async def delete_async(self, index: int) -> tuple[SavedSearch, ...]:
        """Async wrapper for delete() to avoid blocking the event loop."""
        return await to_thread.run_sync(partial(self.delete, index))

    def _mark_synced(self, entries: tuple[SavedSearch, ...]) -> tuple[SavedSearch, ...]:
        self._entries = entries
        self._synced = True
        return self._entries

    def _ensure_synced(self) -> None:
        if not self._synced:
            self.load()

    def _persist(self, entries: tuple[SavedSearch, ...]) -> None:
        try:
            content = json.dumps([e.to_dict() for e in entries], indent=2, ensure_ascii=False)
            _atomic_write_text(self.path, content + "\n")
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to write saved searches to {self.path}: {e}")
            raise PersistenceError(f"Failed to write saved searches: {e}") from e

    def _quarantine(self) -> None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        target = self.path.with_name(f"{self.path.name}.corrupt-{timestamp}")
        try:
            os.replace(self.path, target)
        except OSError as e:
            logger.error(f"Failed to move unreadable saved searches aside: {e}")
            raise PersistenceError(f"Saved searches file {self.path} is unreadable and could not be moved aside: {e}") from e
        logger.warning(f"Moved unreadable saved searches to {target}")
