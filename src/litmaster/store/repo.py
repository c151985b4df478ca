"""Repository over the key-value store.

get_item / set_item / remove_item mirror localStorage; the typed helpers
load and save the three fixed keys as JSON.
"""

import json
from typing import List, Optional

from pydantic import TypeAdapter

from .db import get_db_connection
from ..schemas.analysis import AnalysisResult
from ..schemas.user import Account, User

CURRENT_USER_KEY = "litmaster_current_user"
HISTORY_KEY = "litmaster_history"
USERS_KEY = "litmaster_users"

_history_adapter = TypeAdapter(List[AnalysisResult])
_accounts_adapter = TypeAdapter(List[Account])


class Repo:
    @staticmethod
    def get_item(key: str) -> Optional[str]:
        with get_db_connection() as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
            return row["value"] if row else None

    @staticmethod
    def set_item(key: str, value: str):
        with get_db_connection() as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = CURRENT_TIMESTAMP
                """,
                (key, value)
            )
            conn.commit()

    @staticmethod
    def remove_item(key: str):
        with get_db_connection() as conn:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()

    # Current session user

    @staticmethod
    def load_current_user() -> Optional[User]:
        raw = Repo.get_item(CURRENT_USER_KEY)
        return User.model_validate_json(raw) if raw else None

    @staticmethod
    def save_current_user(user: User):
        Repo.set_item(CURRENT_USER_KEY, user.model_dump_json())

    @staticmethod
    def clear_current_user():
        Repo.remove_item(CURRENT_USER_KEY)

    # Analysis history (newest first)

    @staticmethod
    def load_history() -> List[AnalysisResult]:
        raw = Repo.get_item(HISTORY_KEY)
        return _history_adapter.validate_json(raw) if raw else []

    @staticmethod
    def save_history(history: List[AnalysisResult]):
        payload = [r.to_json_dict() for r in history]
        Repo.set_item(HISTORY_KEY, json.dumps(payload, ensure_ascii=False))

    # Registered accounts

    @staticmethod
    def load_accounts() -> List[Account]:
        raw = Repo.get_item(USERS_KEY)
        return _accounts_adapter.validate_json(raw) if raw else []

    @staticmethod
    def save_accounts(accounts: List[Account]):
        Repo.set_item(USERS_KEY, json.dumps([a.model_dump() for a in accounts], ensure_ascii=False))
