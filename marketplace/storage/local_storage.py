"""
LOCAL STORAGE

Purpose:
- Durable key/value strings that survive reloads
- Backing store for the credential and the cart

Storage:
- File: data/local_storage.json (configurable)
- Format: one JSON object mapping key -> string

Requirements:
• Values are plain strings (callers serialise their own payloads)
• A corrupt or unreadable file behaves like an empty store
• Writes replace the file atomically
"""

import json
import logging
import os
import threading
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

_write_lock = threading.Lock()


class LocalStorage:
    """File-backed string store with browser localStorage semantics."""

    def __init__(self, path: str):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Local storage at {self.path} unreadable, treating as empty: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Local storage at {self.path} is not an object, treating as empty")
            return {}

        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f)
        os.replace(tmp_path, self.path)

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        with _write_lock:
            data = self._read_all()
            data[key] = value
            self._write_all(data)

    def remove_item(self, key: str) -> None:
        with _write_lock:
            data = self._read_all()
            if key in data:
                del data[key]
                self._write_all(data)


class MemoryStorage(LocalStorage):
    """Process-local store with the same interface, used when nothing should touch disk."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def _read_all(self) -> Dict[str, str]:
        return dict(self._data)

    def _write_all(self, data: Dict[str, str]) -> None:
        self._data = dict(data)
