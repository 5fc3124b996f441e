"""Login request and response schemas for user authentication."""

from pydantic import BaseModel

from autolead.app.schemas.user import UserRead


class LoginRequest(BaseModel):
    """Payload for login attempts."""

    # Plain string: a malformed address is just an unknown account
    email: str
    password: str


class LoginResponse(BaseModel):
    token: str
    user: UserRead
