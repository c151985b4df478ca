"""Registration and login against accounts kept in the key-value store.

Passwords are stored as salted PBKDF2-HMAC-SHA256 hashes and compared in
constant time. Username uniqueness is a linear scan at registration.
"""

import hashlib
import hmac
import os

from ..config import get_settings
from ..errors import LoginError, RegistrationError
from ..log import get_logger
from ..schemas.user import Account, Role, User
from ..store.repo import Repo

settings = get_settings()
logger = get_logger("accounts")

# Hashed against on unknown usernames so both login paths cost the same
_DUMMY_SALT = os.urandom(16)


def hash_password(password: str, salt: bytes, iterations: int) -> str:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations).hex()


def verify_password(password: str, account: Account) -> bool:
    expected = hash_password(password, bytes.fromhex(account.salt), account.iterations)
    return hmac.compare_digest(expected, account.password_hash)


def register(username: str, password: str, role: Role = "student") -> User:
    username = username.strip()
    if not username or not password:
        raise RegistrationError("Username and password are required")

    accounts = Repo.load_accounts()
    if any(a.username == username for a in accounts):
        raise RegistrationError(f"Username {username!r} is already taken")

    salt = os.urandom(16)
    iterations = settings.PASSWORD_HASH_ITERATIONS
    account = Account(
        username=username,
        role=role,
        salt=salt.hex(),
        password_hash=hash_password(password, salt, iterations),
        iterations=iterations,
    )
    accounts.append(account)
    Repo.save_accounts(accounts)
    logger.info(f"Registered user {username}")
    return account.to_user()


def login(username: str, password: str) -> User:
    username = username.strip()
    account = next((a for a in Repo.load_accounts() if a.username == username), None)
    if account is None:
        hash_password(password, _DUMMY_SALT, settings.PASSWORD_HASH_ITERATIONS)
    elif verify_password(password, account):
        return account.to_user()
    raise LoginError("Invalid username or password")


def guest_user(username: str) -> User:
    """Name-only login; no account is created."""
    username = username.strip()
    if not username:
        raise LoginError("Username is required")
    return User.for_username(username)
