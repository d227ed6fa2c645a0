"""Request and response models for the HTTP API."""

from user_directory.api.models.users import ErrorResponse, MessageResponse, ProblemDetails, UserPayload

__all__ = [
    "UserPayload",
    "MessageResponse",
    "ErrorResponse",
    "ProblemDetails",
]
