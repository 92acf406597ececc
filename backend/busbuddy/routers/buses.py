from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.bus import Bus
from ..schemas.bus import BusCreate, BusOut, LocationUpdate
from ..services.fleet_store import get_bus, list_buses, update_bus_location

router = APIRouter(prefix="/api/buses", tags=["buses"])


@router.get("", response_model=list[BusOut])
def list_all_buses(db: Session = Depends(get_db)):
    return list_buses(db)


@router.get("/{bus_id}", response_model=BusOut)
def get_one_bus(bus_id: str, db: Session = Depends(get_db)):
    bus = get_bus(db, bus_id)
    if not bus:
        raise HTTPException(status_code=404, detail="Bus not found")
    return bus


@router.post("", response_model=BusOut, status_code=201)
def create_bus(payload: BusCreate, db: Session = Depends(get_db)):
    bus = Bus(**payload.model_dump())
    db.add(bus)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail=f"Bus number {payload.bus_number} already exists")
    db.refresh(bus)
    return bus


@router.patch("/{bus_id}/location", response_model=BusOut)
def update_location(bus_id: str, payload: LocationUpdate, db: Session = Depends(get_db)):
    if not update_bus_location(db, bus_id, payload.latitude, payload.longitude, payload.speed):
        raise HTTPException(status_code=404, detail="Bus not found")
    return get_bus(db, bus_id)
