"""
Per-user local storage for the coordinator UI.

Each user gets one JSON document, keyed by email, holding their activities,
milestones and readiness assessment. Saving merges the supplied top-level
keys over what is stored; reading never fails, falling back to an empty
document when nothing usable is stored.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Protocol
from urllib.parse import quote

logger = logging.getLogger(__name__)

STORAGE_PREFIX = "impacts_"
COLLECTIONS = ("activities", "milestones", "readinessAssessment")


def storage_key(email: str) -> str:
    return f"{STORAGE_PREFIX}{email}"


def default_data() -> dict:
    return {"activities": [], "milestones": [], "readinessAssessment": {}}


class KeyValueStore(Protocol):
    """String key/value persistence, shaped like the browser's localStorage."""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


@dataclass
class InMemoryKeyValueStore:
    """Process-local store, mostly for tests."""

    items: dict = field(default_factory=dict)

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class FileKeyValueStore:
    """One file per key under a directory."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{quote(key, safe='@._-+')}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(value, encoding="utf-8")

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


def load_document(store: KeyValueStore, email: str) -> dict:
    """Read the stored document for `email`, defaulting any missing collection."""
    raw = store.get_item(storage_key(email))
    if not raw:
        return default_data()
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        logger.error("Error parsing stored data for %s", email, exc_info=True)
        return default_data()
    if not isinstance(parsed, dict):
        logger.error("Stored data for %s is not an object", email)
        return default_data()

    data = default_data()
    for name in COLLECTIONS:
        if parsed.get(name):
            data[name] = parsed[name]
    return data


class UserStorage:
    """Storage bound to the signed-in user's email. No email, no storage."""

    def __init__(self, store: KeyValueStore, user_email: Optional[str]):
        self.store = store
        self.user_email = user_email

    def get_data(self) -> dict:
        if not self.user_email:
            return default_data()
        return load_document(self.store, self.user_email)

    def save_data(self, data: dict) -> None:
        """Shallow-merge `data` over the stored document."""
        if not self.user_email:
            return
        merged = {**self.get_data(), **data}
        self.store.set_item(storage_key(self.user_email), json.dumps(merged, default=str))
