"""
Proximity alerts: a passenger pins a bus and is told once when it comes
within the alert distance of them.

The reference point is the passenger's own position, sent by the client with
each check. A notification fires only on the out-of-range to in-range
transition; the stored `in_range` flag remembers the previous result between
polls.
"""
import logging
from dataclasses import dataclass
from typing import Protocol

from sqlalchemy.orm import Session

from ..database import utcnow
from ..models.bus import Bus
from ..models.proximity import ProximityAlert
from .geo import LatLng, distance_km

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProximityCheck:
    in_range: bool
    distance_km: float


class Notifier(Protocol):
    def notify(self, alert: ProximityAlert, bus: Bus, distance: float) -> None: ...


class LoggingNotifier:
    """Stand-in for a push/SMS gateway."""

    def notify(self, alert: ProximityAlert, bus: Bus, distance: float) -> None:
        logger.info(f"Proximity alert {alert.id}: bus {bus.bus_number} is {distance:.2f} km "
                    f"from user {alert.user_id} (threshold {alert.alert_distance} km)")


def check_proximity(alert_distance: float, bus_position: LatLng, user_position: LatLng) -> ProximityCheck:
    d = distance_km(bus_position, user_position)
    return ProximityCheck(in_range=d <= alert_distance, distance_km=d)


def evaluate_alerts(db: Session, user_id: str, user_position: LatLng,
                    notifier: Notifier | None = None) -> list[dict]:
    notifier = notifier or LoggingNotifier()
    alerts = (
        db.query(ProximityAlert)
        .filter(ProximityAlert.user_id == user_id, ProximityAlert.is_active.is_(True))
        .order_by(ProximityAlert.created_at.asc())
        .all()
    )

    results = []
    for alert in alerts:
        bus = db.query(Bus).filter(Bus.id == alert.bus_id).first()
        if not bus:
            continue
        check = check_proximity(alert.alert_distance, (bus.latitude, bus.longitude), user_position)
        notify = check.in_range and not alert.in_range
        if notify:
            try:
                notifier.notify(alert, bus, check.distance_km)
            except Exception as e:
                logger.error(f"Notifier failed for alert {alert.id}: {e}", exc_info=True)
                notify = False
            else:
                alert.last_alert_sent = utcnow()
        # keep the old state when delivery failed so the next poll retries
        if notify or not check.in_range:
            alert.in_range = check.in_range
        results.append({
            "alert_id": alert.id,
            "bus_id": bus.id,
            "bus_number": bus.bus_number,
            "in_range": check.in_range,
            "distance_km": round(check.distance_km, 3),
            "notify": notify,
        })
    db.commit()
    return results
