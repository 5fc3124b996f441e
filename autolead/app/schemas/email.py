"""Inbound email payloads."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from autolead.app.schemas.lead import LeadRead


class InboundEmail(BaseModel):
    # Left untyped so that incomplete or malformed messages reach the extractor and are rejected there
    sender: Any = Field(default=None, alias="from")
    subject: Any = None
    body: Any = None
    received_date: Optional[datetime] = Field(default=None, alias="receivedDate")

    model_config = ConfigDict(populate_by_name=True)


class ProcessedEmailResponse(BaseModel):
    success: bool
    lead: LeadRead
