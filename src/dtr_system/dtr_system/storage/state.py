from __future__ import annotations

import json
import logging
import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional

from werkzeug.security import generate_password_hash

from ..core.exceptions import StorageFailure, ValidationError
from .codec import record_dict_key

_logger = logging.getLogger(__name__)

COLLECTIONS = (
    "departments",
    "employees",
    "dailyRecords",
    "leaveRecords",
    "projects",
    "tasks",
    "notifications",
)

INVALID_BACKUP = "Invalid backup file. The file is missing required data sections or has an incorrect format."

# How each collection is keyed in memory.
_KEYS: Dict[str, Callable[[Dict[str, Any]], str]] = {
    "departments": lambda d: d["name"],
    "employees": lambda d: str(d["id"]),
    "dailyRecords": record_dict_key,
    "leaveRecords": lambda d: str(d["id"]),
    "projects": lambda d: str(d["id"]),
    "tasks": lambda d: str(d["id"]),
    "notifications": lambda d: str(d["id"]),
}


class AppState:
    """Application-state store: one keyed collection per entity type.

    With a `path`, every committed mutation rewrites the whole state as JSON.
    Without one the state lives in memory only (tests).
    """

    def __init__(self, path: Optional[str | Path] = None):
        self._path = Path(path) if path else None
        self._lock = threading.RLock()
        self._data: Dict[str, Dict[str, Dict[str, Any]]] = {c: {} for c in COLLECTIONS}
        if self._path and self._path.exists():
            self._load()

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def _load(self) -> None:
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StorageFailure(f"Could not read application state from {self._path}: {e}")
        self._data = self._index(raw)
        _logger.info("Loaded application state from %s", self._path)

    def read(self, collection: str) -> Dict[str, Dict[str, Any]]:
        """Live view of a collection. Callers must not mutate it outside `mutate`."""
        return self._data[collection]

    def values(self, collection: str) -> List[Dict[str, Any]]:
        with self._lock:
            return list(self._data[collection].values())

    def is_empty(self) -> bool:
        return not any(self._data[c] for c in COLLECTIONS)

    @contextmanager
    def mutate(self, *collections: str) -> Iterator[Dict[str, Dict[str, Dict[str, Any]]]]:
        """Change the named collections and persist; on a failed write the change is undone."""
        with self._lock:
            backup = {c: dict(self._data[c]) for c in collections}
            try:
                yield {c: self._data[c] for c in collections}
                self._flush()
            except Exception:
                for c, items in backup.items():
                    self._data[c] = items
                raise

    def _flush(self) -> None:
        if not self._path:
            return
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(self._snapshot_unlocked(), indent=2), encoding="utf-8")
            os.replace(tmp, self._path)
        except (OSError, TypeError, ValueError) as e:
            _logger.error("Writing application state to %s failed: %s", self._path, e)
            raise StorageFailure("Could not save data. The change was not recorded.")

    def _snapshot_unlocked(self) -> Dict[str, List[Dict[str, Any]]]:
        return {c: list(self._data[c].values()) for c in COLLECTIONS}

    def snapshot(self) -> Dict[str, List[Dict[str, Any]]]:
        with self._lock:
            return json.loads(json.dumps(self._snapshot_unlocked()))

    def restore(self, data: Any) -> None:
        """Replace all collections with a backup taken by `snapshot`."""
        if not isinstance(data, dict) or not all(isinstance(data.get(c), list) for c in COLLECTIONS):
            raise ValidationError(INVALID_BACKUP)

        indexed = self._index(data)
        for emp in indexed["employees"].values():
            # Older backups carry plain passwords.
            plain = emp.pop("password", None)
            if plain and not emp.get("passwordHash"):
                emp["passwordHash"] = generate_password_hash(plain)

        with self.mutate(*COLLECTIONS) as cols:
            for c in COLLECTIONS:
                cols[c].clear()
                cols[c].update(indexed[c])
        _logger.warning("Application state restored from backup")

    @staticmethod
    def _index(raw: Any) -> Dict[str, Dict[str, Dict[str, Any]]]:
        if not isinstance(raw, dict):
            raise ValidationError(INVALID_BACKUP)
        out: Dict[str, Dict[str, Dict[str, Any]]] = {}
        for c in COLLECTIONS:
            items = raw.get(c) or []
            try:
                out[c] = {_KEYS[c](dict(item)): dict(item) for item in items}
            except (KeyError, TypeError, ValueError, ValidationError):
                raise ValidationError(INVALID_BACKUP)
        return out
