from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.proximity import ProximityAlert
from ..schemas.proximity import (
    ProximityAlertCreate,
    ProximityAlertOut,
    ProximityCheckRequest,
    ProximityResult,
)
from ..services.fleet_store import get_bus
from ..services.proximity import LoggingNotifier, Notifier, evaluate_alerts

router = APIRouter(prefix="/api/proximity-alerts", tags=["proximity"])


def get_notifier() -> Notifier:
    return LoggingNotifier()


@router.post("", response_model=ProximityAlertOut, status_code=201)
def create_alert(payload: ProximityAlertCreate, db: Session = Depends(get_db)):
    if not get_bus(db, payload.bus_id):
        raise HTTPException(status_code=404, detail="Bus not found")
    alert = ProximityAlert(**payload.model_dump())
    db.add(alert)
    db.commit()
    db.refresh(alert)
    return alert


@router.get("/user/{user_id}", response_model=list[ProximityAlertOut])
def list_user_alerts(user_id: str, db: Session = Depends(get_db)):
    return (
        db.query(ProximityAlert)
        .filter(ProximityAlert.user_id == user_id)
        .order_by(ProximityAlert.created_at.asc())
        .all()
    )


@router.delete("/{alert_id}")
def delete_alert(alert_id: str, db: Session = Depends(get_db)):
    alert = db.query(ProximityAlert).filter(ProximityAlert.id == alert_id).first()
    if not alert:
        raise HTTPException(status_code=404, detail="Proximity alert not found")
    db.delete(alert)
    db.commit()
    return {"detail": "Proximity alert deleted"}


@router.post("/check", response_model=list[ProximityResult])
def check_alerts(payload: ProximityCheckRequest, db: Session = Depends(get_db),
                 notifier: Notifier = Depends(get_notifier)):
    """Evaluate the user's active alerts against their current position."""
    return evaluate_alerts(db, payload.user_id, (payload.latitude, payload.longitude), notifier)
