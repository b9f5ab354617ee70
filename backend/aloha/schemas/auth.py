"""Login request and session identity schemas."""

import uuid

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class SessionResponse(BaseModel):
    """
    Identity bound to the current session cookie.

    Attributes:
        user_id: Logged-in user's id
        username: Logged-in user's login name
    """

    user_id: uuid.UUID
    username: str
