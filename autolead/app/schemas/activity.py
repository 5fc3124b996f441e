"""Activity schemas for the lead audit trail."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ActivityRead(BaseModel):
    id: int
    lead_id: int
    user_id: Optional[int] = None
    activity_type: str
    description: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
