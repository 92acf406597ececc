from sqlalchemy import JSON, Boolean, Column, Float, ForeignKey, String

from ..database import Base, generate_id

ALL_DAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


class Route(Base):
    __tablename__ = "routes"

    id = Column(String(36), primary_key=True, default=generate_id)
    route_number = Column(String, nullable=True)
    name = Column(String, nullable=False)
    origin = Column("from", String, nullable=False)
    destination = Column("to", String, nullable=False)
    service_class = Column(String, nullable=True)       # e.g. "Ordinary", "Vajra"
    city = Column(String, nullable=False, default="Mysuru")
    stops = Column(JSON, nullable=False, default=list)  # [{"name", "lat", "lng"}, ...] in travel order
    is_eco_route = Column(Boolean, nullable=False, default=False)
    estimated_co2_savings = Column(Float, nullable=False, default=0.0)


class Schedule(Base):
    __tablename__ = "schedules"

    id = Column(String(36), primary_key=True, default=generate_id)
    route_id = Column(String(36), ForeignKey("routes.id"), nullable=False, index=True)
    departure_time = Column(String, nullable=False)     # "HH:MM", zero-padded 24h
    arrival_time = Column(String, nullable=True)
    days_of_week = Column(JSON, nullable=True, default=lambda: list(ALL_DAYS))
    is_active = Column(Boolean, nullable=False, default=True)
