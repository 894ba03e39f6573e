"""
Preference Store

File-based key-value state shared between the tracker and the screen.
A single JSON document holds every preference; each write replaces the
file atomically (temp file + rename) under an exclusive lock on Unix.

Every write (set, update, delete, modify) is one read-modify-write under
the lock, so writers in other processes or store instances never revert
each other's keys. Sequences of several calls are not atomic; use
``modify`` when the new value depends on the old one.
"""

import json
import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator

from gpslogger.common.exceptions import StoreError

# State directory - created on first write
STATE_DIR = Path(
    os.environ.get("GPSLOGGER_STATE_DIR", Path.home() / ".gpslogger" / "state")
)
STATE_FILE = "preferences.json"

# Well-known preference keys
KEY_DEBUG_MODE = "isDebugMode"
KEY_IS_LOGGING = "isLogging"
KEY_LOGS = "logs"
KEY_CURRENT_LATITUDE = "currentLatitude"
KEY_CURRENT_LONGITUDE = "currentLongitude"
KEY_CONSUMER_KEY = "consumerKey"
KEY_CONSUMER_SECRET = "consumerSecret"
KEY_ACCESS_KEY = "accessKey"
KEY_ACCESS_SECRET = "accessSecret"

CREDENTIAL_KEYS = (
    KEY_CONSUMER_KEY,
    KEY_CONSUMER_SECRET,
    KEY_ACCESS_KEY,
    KEY_ACCESS_SECRET,
)

Observer = Callable[[str, Any], None]

_MISSING = object()


class PreferenceStore:
    """
    JSON-file key-value store with change observers.

    Absent keys are a normal state: ``get`` returns the default and
    never raises for a missing or unreadable file.
    """

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path else STATE_DIR / STATE_FILE
        self._lock = threading.Lock()
        self._observers: dict[str, list[Observer]] = {}

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError):
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def contains(self, key: str) -> bool:
        return key in self._load()

    def get_bool(self, key: str) -> bool:
        """Missing or non-bool values read as False."""
        value = self.get(key)
        return value if isinstance(value, bool) else False

    def get_string(self, key: str) -> str | None:
        value = self.get(key)
        if value is None:
            return None
        return value if isinstance(value, str) else str(value)

    def snapshot(self) -> dict:
        """Full copy of every stored preference."""
        return dict(self._load())

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def set(self, key: str, value: Any) -> None:
        self._mutate({key: value}, ())

    def update(self, values: dict[str, Any]) -> None:
        self._mutate(values, ())

    def delete(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if the key was present
        """
        return bool(self._mutate({}, (key,)))

    def modify(self, key: str, transform: Callable[[Any], Any]) -> Any:
        """
        Replace a value with ``transform(current)`` in one locked step.

        ``current`` is None when the key is absent.

        Returns:
            The stored value
        """
        result: dict[str, Any] = {}

        def compute(data: dict) -> dict[str, Any]:
            result[key] = transform(data.get(key))
            return result

        self._mutate(compute, ())
        return result[key]

    def _mutate(
        self,
        updates: dict[str, Any] | Callable[[dict], dict[str, Any]],
        removals: tuple[str, ...],
    ) -> list[str]:
        """Read, modify and replace the document inside one exclusive lock."""
        keys = ", ".join(removals) if callable(updates) else ", ".join([*updates, *removals])
        try:
            with self._lock, self._file_lock():
                data = self._load()
                if callable(updates):
                    updates = updates(data)
                removed = [key for key in removals if data.pop(key, _MISSING) is not _MISSING]
                data.update(updates)
                self._write(data)
        except (OSError, TypeError, ValueError) as e:
            raise StoreError(f"Cannot write {self.path}: {e}", key=keys) from e

        for key, value in updates.items():
            self._notify(key, value)
        for key in removed:
            self._notify(key, None)
        return removed

    @contextmanager
    def _file_lock(self) -> Iterator[None]:
        """Exclusive lock on the sibling .lock file (Unix; no-op on Windows)."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if os.name == "nt":
            yield
            return

        import fcntl

        with open(self.path.with_suffix(".lock"), "w") as lock_file:
            fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX)
            try:
                yield
            finally:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)

    def _write(self, data: dict) -> None:
        """Atomic replace via temp file; caller holds the file lock."""
        temp_path = self.path.with_suffix(".tmp")
        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.flush()
            os.fsync(f.fileno())
        temp_path.replace(self.path)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def observe(self, key: str, callback: Observer) -> Callable[[], None]:
        """
        Register a callback fired after ``key`` changes through this store.

        Returns:
            Function that removes the callback
        """
        self._observers.setdefault(key, []).append(callback)

        def unsubscribe() -> None:
            callbacks = self._observers.get(key, [])
            if callback in callbacks:
                callbacks.remove(callback)

        return unsubscribe

    def _notify(self, key: str, value: Any) -> None:
        for callback in list(self._observers.get(key, [])):
            callback(key, value)
