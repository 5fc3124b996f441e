"""Dealership model: the tenant that owns users and leads."""

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from autolead.app.core.time import utc_now
from autolead.app.db.base_class import Base


class Dealership(Base):
    __tablename__ = "dealerships"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    address = Column(Text, nullable=True)
    phone = Column(String(20), nullable=True)
    email = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    users = relationship("User", back_populates="dealership")
    leads = relationship("Lead", back_populates="dealership")
