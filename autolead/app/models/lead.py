"""Lead model for AutoLead CRM."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from autolead.app.core.time import utc_now
from autolead.app.db.base_class import Base


class Lead(Base):
    __tablename__ = "leads"

    id = Column(Integer, primary_key=True, index=True)
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=True)
    customer_phone = Column(String(20), nullable=True)
    vehicle_interest = Column(String(255), nullable=True)
    source = Column(String(100), nullable=False, default="manual")
    notes = Column(Text, nullable=True)
    priority = Column(String(20), nullable=False, default="medium")
    status = Column(String(50), nullable=False, default="new", index=True)
    assigned_to = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    dealership_id = Column(Integer, ForeignKey("dealerships.id"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    dealership = relationship("Dealership", back_populates="leads")
    assignee = relationship("User", back_populates="assigned_leads", foreign_keys=[assigned_to])
    activities = relationship("Activity", back_populates="lead", order_by="Activity.id")
    email_logs = relationship("EmailLog", back_populates="lead")
