from __future__ import annotations

from threading import RLock
from typing import Optional

from loguru import logger

from urbix.core.errors import DuplicateUsername, PersistenceCorruption
from urbix.core.security import verify_password
from urbix.db.repository import UserRepository
from urbix.models.user import User


def _key(username: str) -> str:
    return username.strip().lower()


class UserDirectory:
    """Registered accounts; usernames are unique ignoring case."""

    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository
        self._lock = RLock()
        try:
            users = repository.load_users()
        except PersistenceCorruption as exc:
            logger.warning('user_directory.corrupt', error=str(exc))
            users = None
        self._users: list[User] = users or []

    def list_users(self) -> list[User]:
        with self._lock:
            return [user.model_copy() for user in self._users]

    def get_user(self, username: str) -> Optional[User]:
        key = _key(username)
        with self._lock:
            for user in self._users:
                if user.username_key == key:
                    return user.model_copy()
        return None

    def append_user(self, user: User) -> User:
        with self._lock:
            if any(existing.username_key == user.username_key for existing in self._users):
                raise DuplicateUsername(user.username)
            users = [*self._users, user]
            self._repository.save_users(users)
            self._users = users
        logger.info('user.registered', username=user.username, role=user.role.value)
        return user.model_copy()

    def find_user(self, username: str, password: str) -> Optional[User]:
        user = self.get_user(username)
        if user is None or not verify_password(password, user.hashed_password):
            return None
        return user
