"""Data models for the user directory."""

from user_directory.models.user import User, is_valid_email
from user_directory.models.result import Outcome, ServiceResult

__all__ = [
    "User",
    "Outcome",
    "ServiceResult",
    "is_valid_email",
]
