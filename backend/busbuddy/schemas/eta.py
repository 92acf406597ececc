from .common import CamelModel


class ETARequest(CamelModel):
    bus_id: str
    destination_lat: float
    destination_lng: float


class ETAResponse(CamelModel):
    eta: int              # minutes
    distance: str         # straight-line km, two decimals
    bus_speed: float      # km/h actually used for the estimate
    display: str          # "Arriving now", "12 mins", "1h 30m"
    status: str           # imminent | moderate | distant
