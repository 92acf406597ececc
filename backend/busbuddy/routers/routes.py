from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.route import Route, Schedule
from ..schemas.route import NextArrival, RouteCreate, RouteOut, ScheduleCreate, ScheduleOut
from ..services.eta import format_eta
from ..services.schedule import local_now, minutes_until, next_scheduled_arrival

router = APIRouter(prefix="/api/routes", tags=["routes"])


def _get_route_or_404(route_id: str, db: Session) -> Route:
    route = db.query(Route).filter(Route.id == route_id).first()
    if not route:
        raise HTTPException(status_code=404, detail="Route not found")
    return route


@router.get("", response_model=list[RouteOut])
def list_routes(city: str | None = None, db: Session = Depends(get_db)):
    q = db.query(Route)
    if city:
        q = q.filter(Route.city == city)
    return q.order_by(Route.name.asc()).all()


@router.post("", response_model=RouteOut, status_code=201)
def create_route(payload: RouteCreate, db: Session = Depends(get_db)):
    route = Route(**payload.model_dump())
    db.add(route)
    db.commit()
    db.refresh(route)
    return route


@router.get("/{route_id}", response_model=RouteOut)
def get_route(route_id: str, db: Session = Depends(get_db)):
    return _get_route_or_404(route_id, db)


# ──────────────────────────────────────────────
# Schedules
# ──────────────────────────────────────────────

@router.get("/{route_id}/schedules", response_model=list[ScheduleOut])
def list_schedules(route_id: str, db: Session = Depends(get_db)):
    _get_route_or_404(route_id, db)
    return (
        db.query(Schedule)
        .filter(Schedule.route_id == route_id)
        .order_by(Schedule.departure_time.asc())
        .all()
    )


@router.post("/{route_id}/schedules", response_model=ScheduleOut, status_code=201)
def create_schedule(route_id: str, payload: ScheduleCreate, db: Session = Depends(get_db)):
    _get_route_or_404(route_id, db)
    schedule = Schedule(route_id=route_id, **payload.model_dump())
    db.add(schedule)
    db.commit()
    db.refresh(schedule)
    return schedule


@router.get("/{route_id}/next-arrival", response_model=NextArrival)
def get_next_arrival(route_id: str, db: Session = Depends(get_db)):
    _get_route_or_404(route_id, db)
    schedules = db.query(Schedule).filter(Schedule.route_id == route_id).all()
    now = local_now()
    departure = next_scheduled_arrival(schedules, now)
    if departure is None:
        return NextArrival(route_id=route_id, next_departure=None, minutes_until=None)
    wait = minutes_until(departure, now)
    return NextArrival(
        route_id=route_id,
        next_departure=departure,
        minutes_until=wait,
        display=format_eta(wait),
    )
