"""
User entity model for the user directory.

Represents a directory record with a service-assigned identifier.
"""

import re

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def is_valid_email(email: str) -> bool:
    """Check an address against the local-part@domain.tld pattern."""
    return EMAIL_PATTERN.match(email) is not None


class User(BaseModel):
    """
    User record held by the directory.

    The id is assigned by the directory on creation and never changes;
    name and email are mutable through updates.
    """

    id: int = Field(..., description="Unique user identifier assigned by the directory")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address, unique across the directory")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "name": "John Doe",
                "email": "john.doe@example.com",
            }
        }
    )
