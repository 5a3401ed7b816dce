# app/models/business.py
"""
Business Model - the tenant boundary
Owns its services, working hours and appointments.
"""
from sqlalchemy import Column, String, Boolean, DateTime, Text, Integer, Time, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.models.base import Base


class Business(Base):
    __tablename__ = "businesses"

    id = Column(Integer, primary_key=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    slug = Column(String(220), nullable=False, unique=True, index=True)  # Public booking handle

    # Contact information
    contact_info = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)

    # Technical fields
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    owner = relationship("User", back_populates="business")
    services = relationship("Service", back_populates="business", cascade="all, delete-orphan")
    working_hours = relationship(
        "WorkingHour",
        back_populates="business",
        cascade="all, delete-orphan",
        order_by="WorkingHour.day_of_week",
    )

    def __repr__(self):
        return f"<Business(id={self.id}, slug={self.slug})>"

    def to_public_dict(self):
        """Display details safe to show on the public booking page"""
        return {
            "business_name": self.name,
            "slug": self.slug,
            "contact_info": self.contact_info,
            "address": self.address,
        }


class WorkingHour(Base):
    __tablename__ = "working_hours"
    __table_args__ = (
        UniqueConstraint("business_id", "day_of_week", name="uq_working_hours_business_day"),
    )

    id = Column(Integer, primary_key=True)
    business_id = Column(Integer, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False)
    day_of_week = Column(Integer, nullable=False)  # 0=Sunday, 6=Saturday
    is_open = Column(Boolean, nullable=False, default=True)
    open_time = Column(Time, nullable=True)  # Null when closed
    close_time = Column(Time, nullable=True)

    business = relationship("Business", back_populates="working_hours")

    def __repr__(self):
        return f"<WorkingHour(business_id={self.business_id}, day={self.day_of_week})>"

    def to_dict(self):
        return {
            "day_of_week": self.day_of_week,
            "is_open": self.is_open,
            "open_time": self.open_time.strftime("%H:%M:%S") if self.open_time else None,
            "close_time": self.close_time.strftime("%H:%M:%S") if self.close_time else None,
        }
