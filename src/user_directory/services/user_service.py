"""
Directory service for user records.

Validates input and maps store operations onto ServiceResult values.
"""

import logging
from typing import Optional

from user_directory.models.result import ServiceResult
from user_directory.models.user import is_valid_email
from user_directory.services.user_store import UserStore


logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

REQUIRED_FIELDS_MESSAGE = "Name and Email are required"
INVALID_EMAIL_MESSAGE = "Invalid email format"
DUPLICATE_EMAIL_MESSAGE = "A user with this email already exists"


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class UserDirectoryService:
    """Service for listing, reading and mutating directory users."""

    def __init__(self, store: UserStore):
        self.store = store

    def list_users(self, page: Optional[int] = None, page_size: Optional[int] = None) -> ServiceResult:
        """
        Return one page of users in insertion order.

        Missing values fall back to page 1 and 10 per page; values below 1
        are clamped to 1.
        """
        page = max(DEFAULT_PAGE if page is None else page, 1)
        page_size = max(DEFAULT_PAGE_SIZE if page_size is None else page_size, 1)

        users = self.store.page((page - 1) * page_size, page_size)
        return ServiceResult.ok(users)

    def get_user(self, user_id: int) -> ServiceResult:
        user = self.store.find(user_id)
        if user is None:
            logger.warning(f"User with ID {user_id} not found.")
            return ServiceResult.not_found()
        return ServiceResult.ok(user)

    def create_user(self, name: Optional[str], email: Optional[str]) -> ServiceResult:
        """Validate and store a new user; the id is always assigned here."""
        if _is_blank(name) or _is_blank(email):
            return ServiceResult.invalid(REQUIRED_FIELDS_MESSAGE)

        if not is_valid_email(email):
            return ServiceResult.invalid(INVALID_EMAIL_MESSAGE)

        user = self.store.add(name, email)
        if user is None:
            return ServiceResult.invalid(DUPLICATE_EMAIL_MESSAGE)

        logger.info(f"Created user {user.id}")
        return ServiceResult.created(user)

    def update_user(self, user_id: int, name: Optional[str], email: Optional[str]) -> ServiceResult:
        # Only presence is checked here; email format and uniqueness are
        # enforced on create alone.
        if _is_blank(name) or _is_blank(email):
            return ServiceResult.invalid(REQUIRED_FIELDS_MESSAGE)

        if not self.store.update(user_id, name, email):
            logger.warning(f"User with ID {user_id} not found.")
            return ServiceResult.not_found()

        logger.info(f"Updated user {user_id}")
        return ServiceResult.no_content()

    def delete_user(self, user_id: int) -> ServiceResult:
        if not self.store.remove(user_id):
            logger.warning(f"User with ID {user_id} not found.")
            return ServiceResult.not_found()

        logger.info(f"Deleted user {user_id}")
        return ServiceResult.no_content()
