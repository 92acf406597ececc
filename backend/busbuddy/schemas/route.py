from pydantic import Field

from ..models.route import ALL_DAYS
from .common import CamelModel

TIME_OF_DAY_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class Stop(CamelModel):
    name: str
    lat: float
    lng: float


class RouteCreate(CamelModel):
    route_number: str | None = None
    name: str = Field(min_length=1)
    origin: str = Field(alias="from")
    destination: str = Field(alias="to")
    service_class: str | None = None
    city: str = "Mysuru"
    stops: list[Stop] = []
    is_eco_route: bool = False
    estimated_co2_savings: float = Field(0.0, alias="estimatedCO2Savings", ge=0)


class RouteOut(RouteCreate):
    id: str


class ScheduleCreate(CamelModel):
    departure_time: str = Field(pattern=TIME_OF_DAY_PATTERN)
    arrival_time: str | None = Field(None, pattern=TIME_OF_DAY_PATTERN)
    days_of_week: list[str] = Field(default_factory=lambda: list(ALL_DAYS))
    is_active: bool = True


class ScheduleOut(ScheduleCreate):
    id: str
    route_id: str
    days_of_week: list[str] | None = None


class NextArrival(CamelModel):
    route_id: str
    next_departure: str | None      # "HH:MM"
    minutes_until: int | None
    display: str | None = None      # e.g. "45 mins"
