"""Key/value storage backends standing in for browser local storage.

Every record (plans, water intake, reminders, recent scans, ...) lives under its
own key as a JSON string. Keys are loaded and saved independently; there is no
cross-key transaction. Each backend carries a reentrant `lock`; repositories
hold it while they re-read, modify and write back a record, so concurrent
requests always apply their change to the latest stored value.
"""
import json
import logging
import os
import re
import tempfile
from pathlib import Path
from threading import Lock, RLock
from typing import Any, Dict, List, Optional

from nutrilens.infra.paths import STORAGE_DIR

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r'^[A-Za-z0-9_.-]+$')


class MemoryStorage:
    """In-process storage, used by tests and as a throwaway backend."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial) if initial else {}
        # held around read-modify-write cycles by the repositories
        self.lock = RLock()

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def keys(self) -> List[str]:
        return sorted(self._items)


class FileStorage:
    """One `<key>.json` file per key inside `directory`.

    Writes go to a temporary file in the same directory which then replaces the
    target, so an interrupted write loses at most that write.
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self.lock = RLock()

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return f.read()
        except FileNotFoundError:
            return None

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{key}_", suffix=".json")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as tmp:
                tmp.write(value)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_path, path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def remove_item(self, key: str) -> None:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            pass

    def clear(self) -> None:
        for path in self.directory.glob('*.json'):
            path.unlink()

    def keys(self) -> List[str]:
        return sorted(p.stem for p in self.directory.glob('*.json'))


def load_json(storage, key: str, default: Any = None) -> Any:
    """Read and decode a stored record; missing or unparsable data counts as no data."""
    raw = storage.get_item(key)
    if raw is None:
        return default
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"Ignoring malformed stored value for '{key}': {e}")
        return default


def save_json(storage, key: str, value: Any) -> None:
    storage.set_item(key, json.dumps(value, ensure_ascii=False))


_default_storage = None
_default_lock = Lock()


def get_storage():
    """Return the process-wide file backend (FastAPI dependency, overridable in tests)."""
    global _default_storage
    with _default_lock:
        if _default_storage is None:
            _default_storage = FileStorage(STORAGE_DIR)
            logger.info(f"Using file storage at {STORAGE_DIR}")
        return _default_storage


__all__ = ['MemoryStorage', 'FileStorage', 'load_json', 'save_json', 'get_storage']
