from datetime import datetime
from typing import Literal

from pydantic import Field

from .common import CamelModel

BusStatusValue = Literal["active", "idle", "maintenance", "stopped"]


class BusCreate(CamelModel):
    bus_number: str = Field(min_length=1)
    route_name: str
    driver_id: str | None = None
    latitude: float
    longitude: float
    status: BusStatusValue = "active"
    current_speed: float = Field(0.0, ge=0)
    occupancy: int = Field(0, ge=0, le=100)


class LocationUpdate(CamelModel):
    # strict: "12.3" or true must be rejected, not coerced
    latitude: float = Field(strict=True)
    longitude: float = Field(strict=True)
    speed: float = Field(strict=True, ge=0)


class BusOut(CamelModel):
    id: str
    bus_number: str
    route_name: str
    driver_id: str | None = None
    latitude: float
    longitude: float
    status: str
    current_speed: float
    occupancy: int
    last_updated: datetime | None = None
