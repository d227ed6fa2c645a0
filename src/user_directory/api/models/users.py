"""API models for user directory requests and responses."""

from typing import Optional
from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class UserPayload(BaseModel):
    """
    Request body for creating or updating a user.

    Both fields are optional at the schema level so that missing or blank
    values reach the directory service and produce its own 400 message.
    Any client-supplied id is ignored.
    """

    name: Optional[str] = Field(default=None, description="Display name")
    email: Optional[str] = Field(default=None, description="Email address")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Al",
                "email": "al@x.com",
            }
        }
    )


class MessageResponse(BaseModel):
    """Error body for validation and not-found responses."""

    message: str = Field(..., description="Human-readable error message")


class ErrorResponse(BaseModel):
    """Error body produced by the request pipeline for unhandled faults."""

    message: str = Field(..., description="Generic error message")
    statusCode: int = Field(..., description="HTTP status code of the response")


class ProblemDetails(BaseModel):
    """RFC 9457 problem body returned when a handler catches a fault."""

    type: str = Field(default="https://tools.ietf.org/html/rfc9110#section-15.6.1")
    title: str = Field(default="An error occurred while processing your request.")
    status: int = Field(default=500)
    detail: Optional[str] = Field(default=None)
