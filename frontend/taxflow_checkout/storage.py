"""
Page-scoped storage backends for the pending checkout session.

Values are plain strings, mirroring browser localStorage. `JsonFileStorage`
keeps them in a JSON file so they outlive a full page reload.
"""

from __future__ import annotations

import json
import logging
import re
import uuid
from pathlib import Path
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)

SESSION_ID_PATTERN = re.compile(r"[0-9a-f]{16}")


class MemoryStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStorage:
    """Storage backed by one JSON object on disk."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        items = self._load()
        items[key] = value
        self._save(items)

    def remove(self, key: str) -> None:
        items = self._load()
        if key in items:
            del items[key]
            if items:
                self._save(items)
            else:
                self.path.unlink(missing_ok=True)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.error("Error reading checkout storage %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, items: Dict[str, str]) -> None:
        with self.path.open("w", encoding="utf-8") as f:
            json.dump(items, f, indent=2)


def new_session_id() -> str:
    return uuid.uuid4().hex[:16]


def session_storage(base_dir: Path, session_id: Optional[str]) -> Tuple[str, JsonFileStorage]:
    """Return the session id and its storage file under `base_dir`.

    Ids arrive in the page URL, so anything that is not a generated id is
    replaced with a fresh one instead of being used as a filename.
    """
    if not session_id or not SESSION_ID_PATTERN.fullmatch(session_id):
        if session_id:
            logger.warning("Ignoring malformed session id in URL")
        session_id = new_session_id()
    return session_id, JsonFileStorage(Path(base_dir) / f"{session_id}.json")
