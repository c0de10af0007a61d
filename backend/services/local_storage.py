"""
Client-local key/value persistence.

Each value is JSON-serialized under a fixed key. Writes are last-write-wins;
there is no merge or version check between concurrent writers.
"""
import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

# Fixed keys
LOGIN_KEY = 'isLoggedIn'
DARK_MODE_KEY = 'darkMode'
MATERIALS_KEY = 'materials'
FAVORITES_KEY = 'favorites'
DOWNLOADS_KEY = 'downloads'


class KeyValueStore:
    """Capability interface: get / set / remove JSON-serializable values."""

    def get(self, key: str, default: Any = None) -> Any:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    """In-process store; values are round-tripped through JSON like the file store."""

    def __init__(self, initial: Dict[str, Any] = None):
        self._data = {key: json.dumps(value) for key, value in (initial or {}).items()}

    def get(self, key, default=None):
        if key not in self._data:
            return copy.deepcopy(default)
        return json.loads(self._data[key])

    def set(self, key, value):
        self._data[key] = json.dumps(value)

    def remove(self, key):
        self._data.pop(key, None)


class JsonFileKeyValueStore(KeyValueStore):
    """
    Store backed by a single JSON document on disk.

    The file is re-read on every access so separate instances pointing at the
    same path see each other's writes. A corrupt file is treated as empty.
    """

    def __init__(self, path):
        self.path = Path(path)

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Ignoring unreadable local storage file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except Exception:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def get(self, key, default=None):
        data = self._load()
        if key not in data:
            return copy.deepcopy(default)
        return data[key]

    def set(self, key, value):
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key):
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)
