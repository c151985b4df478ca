from __future__ import annotations

from typing import Literal
from pydantic import BaseModel

Role = Literal["student", "teacher"]

AVATAR_URL_TEMPLATE = "https://api.dicebear.com/7.x/notionists/svg?seed={username}"


def avatar_url(username: str) -> str:
    return AVATAR_URL_TEMPLATE.format(username=username)


class User(BaseModel):
    """Current-session record. Never carries a password."""
    username: str
    avatar: str
    role: Role = "student"

    @classmethod
    def for_username(cls, username: str, role: Role = "student") -> "User":
        return cls(username=username, avatar=avatar_url(username), role=role)


class Account(BaseModel):
    """Stored registration record."""
    username: str
    role: Role = "student"
    salt: str  # hex
    password_hash: str  # hex, PBKDF2-HMAC-SHA256
    iterations: int  # PBKDF2 rounds used when the hash was made

    def to_user(self) -> User:
        return User.for_username(self.username, role=self.role)
