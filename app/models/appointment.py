from sqlalchemy import Column, String, Integer, Date, Time, DateTime, ForeignKey, Index, text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from .base import Base
import enum


class AppointmentStatus(str, enum.Enum):
    """Lifecycle states of a booking."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    DONE = "done"


# Owner-initiated transitions; cancelled and done are terminal
ALLOWED_TRANSITIONS = {
    AppointmentStatus.PENDING: {AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED},
    AppointmentStatus.CONFIRMED: {AppointmentStatus.DONE, AppointmentStatus.CANCELLED},
    AppointmentStatus.CANCELLED: set(),
    AppointmentStatus.DONE: set(),
}

# Statuses that hold a slot
BLOCKING_STATUSES = (AppointmentStatus.PENDING.value, AppointmentStatus.CONFIRMED.value)

# Dashboard ordering: pending first, cancelled last
STATUS_PRIORITY = {
    AppointmentStatus.PENDING.value: 1,
    AppointmentStatus.CONFIRMED.value: 2,
    AppointmentStatus.DONE.value: 3,
    AppointmentStatus.CANCELLED.value: 4,
}

_NOT_CANCELLED = text("status <> 'cancelled'")


class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        # At most one live booking per business slot; cancelled rows free it
        Index(
            "uq_appointments_active_slot",
            "business_id", "date", "time",
            unique=True,
            postgresql_where=_NOT_CANCELLED,
            sqlite_where=_NOT_CANCELLED,
        ),
        Index("idx_appointments_business_date", "business_id", "date"),
    )

    id = Column(Integer, primary_key=True)

    # References
    business_id = Column(Integer, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False)
    # Nullable only so cancelled history survives a service deletion
    service_id = Column(Integer, ForeignKey("services.id", ondelete="SET NULL"), nullable=True, index=True)

    # Customer info
    customer_name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)

    # Appointment details (business-local calendar date and wall-clock start)
    date = Column(Date, nullable=False)
    time = Column(Time, nullable=False)

    status = Column(String(20), nullable=False, default=AppointmentStatus.PENDING.value)
    booking_code = Column(String(20), nullable=False, unique=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    business = relationship("Business")
    service = relationship("Service", back_populates="appointments")

    def __repr__(self):
        return f"<Appointment(id={self.id}, code={self.booking_code}, status={self.status})>"

    def can_transition_to(self, new_status: AppointmentStatus) -> bool:
        return new_status in ALLOWED_TRANSITIONS[AppointmentStatus(self.status)]
