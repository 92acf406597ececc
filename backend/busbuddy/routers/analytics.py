from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.analytics import Analytics
from ..schemas.analytics import AnalyticsCreate, AnalyticsOut, AnalyticsUpdate

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("", response_model=list[AnalyticsOut])
def list_analytics(db: Session = Depends(get_db)):
    return db.query(Analytics).order_by(Analytics.date.asc()).all()


@router.get("/latest", response_model=AnalyticsOut)
def get_latest_analytics(db: Session = Depends(get_db)):
    row = db.query(Analytics).order_by(Analytics.date.desc()).first()
    if not row:
        raise HTTPException(status_code=404, detail="No analytics found")
    return row


@router.post("", response_model=AnalyticsOut, status_code=201)
def create_analytics(payload: AnalyticsCreate, db: Session = Depends(get_db)):
    row = Analytics(**payload.model_dump())
    db.add(row)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail=f"Analytics for {payload.date} already recorded")
    db.refresh(row)
    return row


@router.patch("/{analytics_id}", response_model=AnalyticsOut)
def correct_analytics(analytics_id: str, payload: AnalyticsUpdate, db: Session = Depends(get_db)):
    row = db.query(Analytics).filter(Analytics.id == analytics_id).first()
    if not row:
        raise HTTPException(status_code=404, detail="Analytics not found")
    for field, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(row, field, value)
    db.commit()
    db.refresh(row)
    return row
