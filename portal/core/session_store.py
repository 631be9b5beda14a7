# portal/core/session_store.py

import json
from pathlib import Path
from typing import Any

from loguru import logger

from portal.core.config import settings
from portal.core.constants import TOKEN_KEY, USER_KEY


class SessionStore:
    """
    Client-local key/value storage persisted to a JSON file.

    Mirrors the browser localStorage contract the portal was built on:
    string keys, string values, no expiry. Every read goes back to the
    file so separate processes sharing it see each other's writes
    (last write wins).
    """

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path or settings.SESSION_FILE)

    # ------------------------------------------------------------
    # RAW STORAGE
    # ------------------------------------------------------------
    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError:
            logger.warning(f"Session file {self.path} is corrupt, treating as empty.")
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Readers see the old file or the new one, never a partial write
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        tmp.replace(self.path)

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._save(data)

    # ------------------------------------------------------------
    # TOKEN / USER
    # ------------------------------------------------------------
    def get_token(self) -> str | None:
        return self.get_item(TOKEN_KEY) or None

    def set_token(self, token: str) -> None:
        self.set_item(TOKEN_KEY, token)

    def get_current_user(self) -> dict[str, Any] | None:
        raw = self.get_item(USER_KEY)
        if not raw:
            return None
        try:
            user = json.loads(raw)
        except json.JSONDecodeError:
            return None
        return user if isinstance(user, dict) else None

    def set_current_user(self, user: dict[str, Any]) -> None:
        self.set_item(USER_KEY, json.dumps(user, ensure_ascii=False))

    def is_authenticated(self) -> bool:
        return self.get_token() is not None

    def clear(self) -> None:
        self.remove_item(TOKEN_KEY)
        self.remove_item(USER_KEY)
