"""
History Store.

Key-value store of saved shape lists, keyed by timestamp strings.
Entries are kept in insertion order and optionally mirrored to a JSON file
so the history survives restarts.
"""

import json
import logging
from collections import OrderedDict
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)


class HistoryStore:
    """
    Ordered mapping of timestamp key -> serialized shape list.

    Args:
        path: Optional JSON file backing the store. Without a path the
              store lives in memory only.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self._entries: "OrderedDict[str, str]" = OrderedDict()
        self._path: Optional[Path] = Path(path) if path else None
        if self._path:
            self._read()

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def make_key(self) -> str:
        """Timestamp key for a new entry, unique within this store."""
        base = datetime.now().isoformat(sep=" ", timespec="microseconds")
        key = base
        suffix = 1
        while key in self._entries:
            suffix += 1
            key = f"{base} ({suffix})"
        return key

    def put(self, key: str, data: str):
        self._entries[key] = data
        self._write()

    def get(self, key: str) -> str:
        """
        Get the data stored under ``key``.

        Raises:
            KeyError: If the key does not exist
        """
        return self._entries[key]

    def remove(self, key: str) -> bool:
        """Remove an entry. Returns False if it did not exist."""
        if key not in self._entries:
            return False
        del self._entries[key]
        self._write()
        return True

    def clear(self):
        self._entries.clear()
        self._write()

    def keys(self) -> List[str]:
        """Keys in insertion order."""
        return list(self._entries.keys())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def _read(self):
        """Load entries from the backing file; a bad file leaves the store empty."""
        if not self._path.exists():
            return
        try:
            with open(self._path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            entries = data.get("entries", [])
            for entry in entries:
                self._entries[str(entry["key"])] = str(entry["data"])
        except (OSError, ValueError, KeyError, TypeError, AttributeError, RecursionError) as e:
            logger.warning(f"Error loading history from {self._path}: {e}")
            self._entries.clear()

    def _write(self):
        if not self._path:
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, 'w', encoding='utf-8') as f:
                json.dump({
                    "version": "1.0",
                    "entries": [
                        {"key": key, "data": data}
                        for key, data in self._entries.items()
                    ],
                }, f, indent=2)
        except OSError as e:
            logger.warning(f"Error saving history to {self._path}: {e}")
