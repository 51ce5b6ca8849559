"""Recent-search history kept in a small string-keyed store."""

import json
import os
import threading
from typing import Dict, List, Optional

import structlog

logger = structlog.get_logger(__name__)

HISTORY_KEY = "law-search-history"


class JsonFileStore:
    """String-keyed persistent store backed by a single JSON file."""

    def __init__(self, path: str) -> None:
        self.path = path
        self._lock = threading.Lock()

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def remove_item(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if data.pop(key, None) is not None:
                self._write(data)

    def _read(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Unreadable history store, starting empty", path=self.path, error=str(e))
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, str]) -> None:
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False)


class SearchHistory:
    """Most-recent-first list of distinct queries, bounded in size."""

    def __init__(self, store: JsonFileStore, max_size: int = 5, key: str = HISTORY_KEY) -> None:
        self.store = store
        self.max_size = max_size
        self.key = key

    def add(self, query: str) -> List[str]:
        """
        Record a query at the front of the history.

        Blank queries are ignored; an existing identical entry moves to the
        front.

        Args:
            query: Query to record

        Returns:
            The updated history
        """
        if not query or not query.strip():
            return self.get()

        history = [query] + [q for q in self.get() if q != query]
        history = history[:self.max_size]
        self.store.set_item(self.key, json.dumps(history))
        return history

    def get(self) -> List[str]:
        """Get the history; corrupt or missing data reads as empty."""
        raw = self.store.get_item(self.key)
        if not raw:
            return []
        try:
            history = json.loads(raw)
        except (TypeError, json.JSONDecodeError):
            return []
        if not isinstance(history, list):
            return []
        return [q for q in history if isinstance(q, str)][:self.max_size]

    def clear(self) -> None:
        self.store.remove_item(self.key)
