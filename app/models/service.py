# app/models/service.py
"""
Service Model - Structured service definitions
Each service belongs to one business and carries its price and slot duration.
"""
from sqlalchemy import Column, String, Numeric, Integer, ForeignKey, Boolean, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.models.base import Base


class Service(Base):
    """
    Source of truth for price and duration.
    Appointments reference a service, they do not copy it.
    """
    __tablename__ = "services"
    __table_args__ = (
        CheckConstraint("duration > 0", name="ck_services_duration_positive"),
        CheckConstraint("price >= 0", name="ck_services_price_non_negative"),
    )

    id = Column(Integer, primary_key=True)
    business_id = Column(
        Integer,
        ForeignKey("businesses.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Core service details
    name = Column(String(200), nullable=False)
    price = Column(Numeric(10, 2), nullable=False, default=0)  # Stored as decimal for precision
    duration = Column(Integer, nullable=False)  # Minutes

    is_active = Column(Boolean, default=True, index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )

    # Relationships
    business = relationship("Business", back_populates="services")
    appointments = relationship("Appointment", back_populates="service")

    def __repr__(self):
        return f"<Service(id={self.id}, name={self.name}, business_id={self.business_id})>"

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "id": self.id,
            "business_id": self.business_id,
            "name": self.name,
            "price": float(self.price) if self.price is not None else 0.0,
            "duration": self.duration,
            "formatted_duration": self.formatted_duration,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @property
    def formatted_duration(self) -> str:
        """Return human-readable duration string"""
        if not self.duration:
            return "Duration varies"

        hours = self.duration // 60
        minutes = self.duration % 60

        if hours > 0 and minutes > 0:
            return f"{hours}h {minutes}m"
        elif hours > 0:
            return f"{hours}h"
        else:
            return f"{minutes}m"
