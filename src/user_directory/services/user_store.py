"""
In-memory storage for user records.

Holds the insertion-ordered collection behind a single lock so concurrent
requests never observe a half-applied mutation.
"""

import logging
import threading
from typing import Iterable, List, Optional

from user_directory.models.user import User


logger = logging.getLogger(__name__)


def seed_users() -> List[User]:
    """Demo records loaded when the directory starts."""
    return [
        User(id=1, name="John Doe", email="john.doe@example.com"),
        User(id=2, name="Jane Smith", email="jane.smith@example.com"),
    ]


class UserStore:
    """
    Insertion-ordered user collection owned by the directory service.

    Every read and mutation holds the same lock. Records handed out are
    copies, so callers cannot change stored state outside the lock.
    """

    def __init__(self, users: Optional[Iterable[User]] = None):
        self._users: List[User] = [user.model_copy() for user in users or []]
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)

    def snapshot(self) -> List[User]:
        with self._lock:
            return [user.model_copy() for user in self._users]

    def page(self, skip: int, take: int) -> List[User]:
        """Return up to `take` records after skipping the first `skip`."""
        with self._lock:
            return [user.model_copy() for user in self._users[skip:skip + take]]

    def find(self, user_id: int) -> Optional[User]:
        with self._lock:
            user = self._find_locked(user_id)
            return user.model_copy() if user else None

    def add(self, name: str, email: str) -> Optional[User]:
        """
        Append a record, assigning the next id (max existing id + 1, or 1).

        Returns None without storing anything when the email is taken.
        Email comparison is exact and case-sensitive.
        """
        with self._lock:
            if any(user.email == email for user in self._users):
                return None
            next_id = max((user.id for user in self._users), default=0) + 1
            user = User(id=next_id, name=name, email=email)
            self._users.append(user)
            logger.debug(f"Stored user {next_id}")
            return user.model_copy()

    def update(self, user_id: int, name: str, email: str) -> bool:
        with self._lock:
            user = self._find_locked(user_id)
            if user is None:
                return False
            user.name = name
            user.email = email
            return True

    def remove(self, user_id: int) -> bool:
        with self._lock:
            user = self._find_locked(user_id)
            if user is None:
                return False
            self._users.remove(user)
            return True

    def _find_locked(self, user_id: int) -> Optional[User]:
        return next((user for user in self._users if user.id == user_id), None)
