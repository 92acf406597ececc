from sqlalchemy import Column, Date, Float, Integer, String

from ..database import Base, generate_id


class Analytics(Base):
    __tablename__ = "analytics"

    id = Column(String(36), primary_key=True, default=generate_id)
    date = Column(Date, nullable=False, unique=True, index=True)
    total_co2_saved = Column(Float, nullable=False, default=0.0)   # kg
    total_fuel_saved = Column(Float, nullable=False, default=0.0)  # litres
    total_trips = Column(Integer, nullable=False, default=0)
    avg_bus_speed = Column(Float, nullable=False, default=0.0)
