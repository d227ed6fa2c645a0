"""
User Directory Service

In-memory user records exposed over HTTP with bearer-token authentication.
"""

__version__ = "1.0.0"
__author__ = "User Directory Team"

from user_directory.models.user import User
from user_directory.models.result import Outcome, ServiceResult

__all__ = [
    "User",
    "Outcome",
    "ServiceResult",
]
