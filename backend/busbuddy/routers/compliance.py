from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db, utcnow
from ..models.bus import Bus
from ..models.compliance import BusCompliance
from ..schemas.compliance import ComplianceCreate, ComplianceOut, ComplianceStatusOut
from ..services.compliance import certificate_days_left, compliance_status
from ..services.fleet_store import get_bus, list_buses

router = APIRouter(prefix="/api/compliance", tags=["compliance"])


def _refresh_status(record: BusCompliance, now) -> BusCompliance:
    record.compliance_status = compliance_status(record, now)
    record.last_checked = now
    return record


def _status_for(bus: Bus, record: BusCompliance | None, now) -> ComplianceStatusOut:
    if record is None:
        return ComplianceStatusOut(bus_id=bus.id, bus_number=bus.bus_number, status="unknown")
    pollution, fitness = certificate_days_left(record, now)
    return ComplianceStatusOut(
        bus_id=bus.id,
        bus_number=bus.bus_number,
        status=compliance_status(record, now),
        pollution_days_left=pollution,
        fitness_days_left=fitness,
        pollution_cert_expiry=record.pollution_cert_expiry,
        fitness_cert_expiry=record.fitness_cert_expiry,
    )


@router.get("", response_model=list[ComplianceOut])
def list_compliance(db: Session = Depends(get_db)):
    now = utcnow()
    records = [_refresh_status(r, now) for r in db.query(BusCompliance).all()]
    db.commit()
    for r in records:
        db.refresh(r)
    return records


@router.get("/status", response_model=list[ComplianceStatusOut])
def list_compliance_status(db: Session = Depends(get_db)):
    now = utcnow()
    records = {r.bus_id: r for r in db.query(BusCompliance).all()}
    return [_status_for(bus, records.get(bus.id), now) for bus in list_buses(db)]


@router.get("/bus/{bus_id}", response_model=ComplianceStatusOut)
def get_bus_compliance(bus_id: str, db: Session = Depends(get_db)):
    bus = get_bus(db, bus_id)
    if not bus:
        raise HTTPException(status_code=404, detail="Bus not found")
    record = db.query(BusCompliance).filter(BusCompliance.bus_id == bus_id).first()
    return _status_for(bus, record, utcnow())


@router.post("", response_model=ComplianceOut, status_code=201)
def upsert_compliance(payload: ComplianceCreate, db: Session = Depends(get_db)):
    """Create the bus's compliance record, or replace the existing one."""
    if not get_bus(db, payload.bus_id):
        raise HTTPException(status_code=404, detail="Bus not found")
    record = db.query(BusCompliance).filter(BusCompliance.bus_id == payload.bus_id).first()
    if record is None:
        record = BusCompliance(bus_id=payload.bus_id)
        db.add(record)
    for field, value in payload.model_dump(exclude={"bus_id"}).items():
        setattr(record, field, value)
    _refresh_status(record, utcnow())
    db.commit()
    db.refresh(record)
    return record
