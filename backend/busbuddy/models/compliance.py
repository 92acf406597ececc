from sqlalchemy import Column, DateTime, ForeignKey, String

from ..database import Base, generate_id, utcnow


class BusCompliance(Base):
    __tablename__ = "bus_compliance"

    id = Column(String(36), primary_key=True, default=generate_id)
    bus_id = Column(String(36), ForeignKey("buses.id"), nullable=False, unique=True, index=True)
    pollution_cert_expiry = Column(DateTime(timezone=True), nullable=True)
    fitness_cert_expiry = Column(DateTime(timezone=True), nullable=True)
    pollution_cert_url = Column(String, nullable=True)
    fitness_cert_url = Column(String, nullable=True)
    compliance_status = Column(String, nullable=False, default="unknown")
    last_checked = Column(DateTime(timezone=True), nullable=False, default=utcnow)
