from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, String

from ..database import Base, generate_id, utcnow


class ProximityAlert(Base):
    __tablename__ = "proximity_alerts"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String, nullable=False, index=True)
    bus_id = Column(String(36), ForeignKey("buses.id"), nullable=False, index=True)
    alert_distance = Column(Float, nullable=False, default=1.0)  # km
    is_active = Column(Boolean, nullable=False, default=True)
    in_range = Column(Boolean, nullable=False, default=False)    # result of the last check
    last_alert_sent = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
