"""Lead schemas for create, update and read operations."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict


LeadSource = Literal["manual", "website", "email", "phone"]
LeadPriority = Literal["low", "medium", "high"]
LeadStatus = Literal["new", "contacted", "qualified", "negotiating", "sold", "lost"]


class LeadCreate(BaseModel):
    """Schema for lead creation requests."""

    customer_name: str
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    vehicle_interest: Optional[str] = None
    source: LeadSource = "manual"
    notes: Optional[str] = None
    priority: Optional[LeadPriority] = None
    assigned_to: Optional[int] = None


class LeadUpdate(BaseModel):
    """Schema for lead updates with partial fields."""

    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    vehicle_interest: Optional[str] = None
    status: Optional[LeadStatus] = None
    notes: Optional[str] = None
    priority: Optional[LeadPriority] = None
    assigned_to: Optional[int] = None


class LeadRead(BaseModel):
    """Schema for lead responses."""

    id: int
    customer_name: str
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    vehicle_interest: Optional[str] = None
    source: str
    notes: Optional[str] = None
    priority: str
    status: str
    assigned_to: Optional[int] = None
    dealership_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
