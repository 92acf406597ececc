from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.eta import ETARequest, ETAResponse
from ..services.eta import DIRECT_FALLBACK_SPEED_KMH, direct_eta, effective_speed, eta_status, format_eta
from ..services.fleet_store import get_bus
from ..services.geo import distance_km

router = APIRouter(prefix="/api/eta", tags=["eta"])


@router.post("/calculate", response_model=ETAResponse)
def calculate_eta(payload: ETARequest, db: Session = Depends(get_db)):
    bus = get_bus(db, payload.bus_id)
    if not bus:
        raise HTTPException(status_code=404, detail="Bus not found")

    straight = distance_km((bus.latitude, bus.longitude), (payload.destination_lat, payload.destination_lng))
    speed = effective_speed(bus.current_speed, fallback=DIRECT_FALLBACK_SPEED_KMH)
    minutes = direct_eta(straight, speed)
    return ETAResponse(
        eta=minutes,
        distance=f"{straight:.2f}",
        bus_speed=speed,
        display=format_eta(minutes),
        status=eta_status(minutes),
    )
