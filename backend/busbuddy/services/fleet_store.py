from sqlalchemy import update
from sqlalchemy.orm import Session

from ..database import utcnow
from ..models.bus import Bus


def list_buses(db: Session) -> list[Bus]:
    return db.query(Bus).order_by(Bus.bus_number.asc()).all()


def get_bus(db: Session, bus_id: str) -> Bus | None:
    return db.query(Bus).filter(Bus.id == bus_id).first()


def update_bus_location(db: Session, bus_id: str, latitude: float, longitude: float,
                        speed: float) -> bool:
    """Write a new position for one bus and stamp last_updated.

    A single-row UPDATE, so the simulator and the location endpoint never
    interleave partial writes to the same bus. Returns False for an unknown id.
    """
    result = db.execute(
        update(Bus)
        .where(Bus.id == bus_id)
        .values(latitude=latitude, longitude=longitude, current_speed=speed, last_updated=utcnow())
        .execution_options(synchronize_session=False)
    )
    db.commit()
    return result.rowcount > 0
