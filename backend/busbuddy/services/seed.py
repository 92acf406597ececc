"""
Demo fleet for Mysuru and Bengaluru: one route per bus (stops laid out
between the bus's start point and a nearby terminus), seven departures per
route two hours apart, compliance records and a week of daily analytics.
"""
import logging
import random
from datetime import date, timedelta

from sqlalchemy.orm import Session

from ..database import utcnow
from ..models.analytics import Analytics
from ..models.bus import Bus
from ..models.compliance import BusCompliance
from ..models.proximity import ProximityAlert
from ..models.route import Route, Schedule
from .compliance import compliance_status

logger = logging.getLogger(__name__)

# (bus number, from, to, via, first departure, (lat, lng), status)
MYSURU_FLEET = [
    ("MYS101", "City Bus Stand", "Chamundi Hill", ["Race Course", "Nanjumalige", "Hill Base"],
     "07:00", (12.2987, 76.6575), "active"),
    ("MYS102", "City Bus Stand", "Bannur", ["Mullahalli", "Kadakola"],
     "07:45", (12.2679, 76.7463), "active"),
    ("MYS103", "City Bus Stand", "Bogadi 2nd Stage", ["Akashvani", "Kuvempunagar", "Hebbal"],
     "08:30", (12.3091, 76.6205), "active"),
    ("MYS104", "City Bus Stand", "Srirampura", ["Vivekananda Circle", "Jayalakshmipuram"],
     "09:15", (12.3274, 76.6398), "active"),
    ("MYS105", "City Bus Stand", "Krishna Raja Sagar (KRS)", ["Metagalli", "Koorgalli", "Brindavan Gardens"],
     "10:00", (12.4246, 76.5681), "idle"),
]

BENGALURU_FLEET = [
    ("BLR13", "Shivajinagar Bus Station", "Banashankari TTMC", ["Richmond Circle", "Lalbagh", "Jayanagar 4th Block"],
     "06:45", (12.9374, 77.5868), "active"),
    ("BLR61", "Kempegowda Bus Station (Majestic)", "Vijayanagar TTMC", ["Corporation Circle", "Hosahalli", "Maruthi Mandir"],
     "07:20", (12.9716, 77.5545), "active"),
    ("BLR171", "Majestic", "Koramangala 1st Block", ["Richmond Circle", "Adugodi", "Forum Mall"],
     "08:10", (12.9361, 77.6129), "active"),
    ("BLR333E", "Majestic", "Kadugodi", ["Indiranagar", "KR Puram", "Whitefield"],
     "09:00", (12.9859, 77.7326), "active"),
    ("BLR365J", "Majestic", "Jigani APC Circle", ["BTM", "Electronic City", "Bommasandra"],
     "09:40", (12.8221, 77.6764), "maintenance"),
]

CITIES = [
    ("Mysuru", "ORD", MYSURU_FLEET),
    ("Bengaluru", "CITY", BENGALURU_FLEET),
]


def _stops(origin: str, destination: str, via: list[str],
           start: tuple[float, float], end: tuple[float, float]) -> list[dict]:
    names = [origin, *via, destination]
    last = len(names) - 1
    return [
        {
            "name": name,
            "lat": start[0] + (end[0] - start[0]) * i / last,
            "lng": start[1] + (end[1] - start[1]) * i / last,
        }
        for i, name in enumerate(names)
    ]


def _departures(first: str, count: int = 7, every_hours: int = 2) -> list[str]:
    hours, minutes = (int(p) for p in first.split(":"))
    return [f"{(hours + i * every_hours) % 24:02d}:{minutes:02d}" for i in range(count)]


def clear_demo_data(db: Session):
    for model in (ProximityAlert, BusCompliance, Schedule, Bus, Route, Analytics):
        db.query(model).delete()
    db.commit()


def seed_demo_data(db: Session, rng: random.Random | None = None, force: bool = False) -> dict:
    """Insert the demo fleet. Skips an already populated database unless `force`."""
    rng = rng or random.Random()
    if db.query(Bus).count() and not force:
        logger.info("Seed skipped: buses already present")
        return {"routes": 0, "buses": 0, "schedules": 0, "analytics": 0}
    if force:
        clear_demo_data(db)

    counts = {"routes": 0, "buses": 0, "schedules": 0, "analytics": 0}
    now = utcnow()

    for city, service_class, fleet in CITIES:
        for bus_no, origin, destination, via, first, (lat, lng), status in fleet:
            end = (lat + rng.uniform(-0.05, 0.05), lng + rng.uniform(-0.05, 0.05))
            name = f"{origin} → {destination}"
            route = Route(
                route_number=bus_no,
                name=name,
                origin=origin,
                destination=destination,
                service_class=service_class,
                city=city,
                stops=_stops(origin, destination, via, (lat, lng), end),
                is_eco_route=rng.random() > 0.5,
                estimated_co2_savings=round(rng.uniform(20, 70), 1),
            )
            db.add(route)
            db.flush()
            counts["routes"] += 1

            active = status == "active"
            bus = Bus(
                bus_number=bus_no,
                route_name=name,
                latitude=lat,
                longitude=lng,
                status=status,
                current_speed=float(rng.randint(20, 45)) if active else 0.0,
                occupancy=rng.randint(10, 60) if active else 0,
            )
            db.add(bus)
            db.flush()
            counts["buses"] += 1

            for departure in _departures(first):
                db.add(Schedule(route_id=route.id, departure_time=departure, is_active=True))
                counts["schedules"] += 1

            record = BusCompliance(
                bus_id=bus.id,
                pollution_cert_expiry=now + timedelta(days=rng.randint(-10, 180)),
                fitness_cert_expiry=now + timedelta(days=rng.randint(5, 365)),
            )
            record.compliance_status = compliance_status(record, now)
            db.add(record)

    today = date.today()
    for days_ago in range(8):
        db.add(Analytics(
            date=today - timedelta(days=days_ago),
            total_co2_saved=round(rng.uniform(100, 150), 1),
            total_fuel_saved=round(rng.uniform(35, 55), 1),
            total_trips=rng.randint(300, 400),
            avg_bus_speed=round(rng.uniform(28, 36), 1),
        ))
        counts["analytics"] += 1

    db.commit()
    logger.info(f"Seeded {counts['routes']} routes, {counts['buses']} buses, "
                f"{counts['schedules']} schedules, {counts['analytics']} analytics days")
    return counts
