"""Authentication request/response schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    """Body of ``/auth/register`` and ``/auth/login``.

    Both fields are optional at the schema level so that a missing field is
    reported by the auth service with the same message as an empty one.
    """

    username: Optional[str] = Field(None, description="Account name")
    password: Optional[str] = Field(None, description="Plain-text password")


class AuthResponse(BaseModel):
    """Public user fields plus a freshly issued session token."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"id": 1, "username": "ash", "token": "eyJhbGciOiJIUzI1NiIs..."}
        }
    )

    id: int = Field(..., description="User ID")
    username: str = Field(..., description="Account name")
    token: str = Field(..., description="Bearer token, valid for 30 days")

