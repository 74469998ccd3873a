# utils/local_storage.py

import json
import logging
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger("utils.local_storage")

DEFAULT_STORAGE_FILE = ".booking_client.json"

TOKEN_KEY = "token"
USER_INFO_KEY = "userInfo"
AUTHENTICATED_KEY = "isAuthenticated"
THEME_KEY = "theme"

THEMES = ("light", "dark")


def get_storage_path() -> str:
    load_dotenv()
    return os.getenv("LOCAL_STORAGE_PATH", DEFAULT_STORAGE_FILE)


class LocalStorage:
    """Small JSON-file key/value store for the client's persisted state"""

    def __init__(self, path: Optional[str] = None):
        self.path = path or get_storage_path()

    def _load(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable storage file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, Any]):
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any):
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str):
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)

    # Token

    def get_token(self) -> Optional[str]:
        return self.get(TOKEN_KEY)

    def set_token(self, token: str):
        self.set(TOKEN_KEY, token)

    def clear_auth(self):
        data = self._load()
        for key in (TOKEN_KEY, USER_INFO_KEY, AUTHENTICATED_KEY):
            data.pop(key, None)
        self._save(data)

    # Theme

    def get_theme(self) -> str:
        theme = self.get(THEME_KEY, "light")
        return theme if theme in THEMES else "light"

    def set_theme(self, theme: str):
        if theme not in THEMES:
            raise ValueError(f"Unknown theme '{theme}', expected one of {THEMES}")
        self.set(THEME_KEY, theme)

    def toggle_theme(self) -> str:
        theme = "dark" if self.get_theme() == "light" else "light"
        self.set_theme(theme)
        return theme
