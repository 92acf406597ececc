from datetime import datetime

from pydantic import Field

from ..config import settings
from .common import CamelModel


class ProximityAlertCreate(CamelModel):
    user_id: str = Field(min_length=1)
    bus_id: str
    alert_distance: float = Field(default_factory=lambda: settings.default_alert_distance_km, gt=0)
    is_active: bool = True


class ProximityAlertOut(CamelModel):
    id: str
    user_id: str
    bus_id: str
    alert_distance: float
    is_active: bool
    in_range: bool
    last_alert_sent: datetime | None = None
    created_at: datetime | None = None


class ProximityCheckRequest(CamelModel):
    user_id: str
    latitude: float
    longitude: float


class ProximityResult(CamelModel):
    alert_id: str
    bus_id: str
    bus_number: str
    in_range: bool
    distance_km: float
    notify: bool   # True only when the bus just moved into range
