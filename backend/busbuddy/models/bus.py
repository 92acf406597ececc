from sqlalchemy import Column, DateTime, Float, Integer, String

from ..database import Base, generate_id, utcnow

BUS_STATUSES = ("active", "idle", "maintenance", "stopped")


class Bus(Base):
    __tablename__ = "buses"

    id = Column(String(36), primary_key=True, default=generate_id)
    bus_number = Column(String, nullable=False, unique=True, index=True)  # e.g. "MYS101"
    route_name = Column(String, nullable=False)         # matched against Route.name, not a foreign key
    driver_id = Column(String, nullable=True)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    status = Column(String, nullable=False, default="active")
    current_speed = Column(Float, nullable=False, default=0.0)  # km/h
    occupancy = Column(Integer, nullable=False, default=0)      # percent
    last_updated = Column(DateTime(timezone=True), nullable=False, default=utcnow)
