"""Directory services."""

from user_directory.services.user_store import UserStore, seed_users
from user_directory.services.user_service import UserDirectoryService

__all__ = [
    "UserStore",
    "UserDirectoryService",
    "seed_users",
]
