"""User schemas used for login and profile responses."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr


class UserRead(BaseModel):
    id: int
    email: EmailStr
    name: str
    role: str
    dealership_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)
