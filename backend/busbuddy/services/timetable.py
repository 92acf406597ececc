"""
Import published depot timetables (exported to whitespace-column text) into
the routes and schedules tables.

Mysuru lists one row per departure, so departures are grouped into one route
per from/to pair. Bengaluru lists one row per route with no times, so every
route gets the same sample departures.
"""
import logging
import random
import re
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.route import Route, Schedule

logger = logging.getLogger(__name__)

MYSURU_CENTRE = (12.2958, 76.6394)
BENGALURU_CENTRE = (12.9716, 77.5946)

MYSURU_HEADER_LINES = 3
BENGALURU_HEADER_LINES = 6
BENGALURU_SAMPLE_DEPARTURES = ["06:00", "09:00", "12:00", "15:00", "18:00"]

PROGRESS_EVERY = 10

_COLUMNS = re.compile(r"\s{2,}")
_HH_MM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


@dataclass
class MysuruDeparture:
    origin: str
    destination: str
    service_class: str
    via: str
    departure_time: str


@dataclass
class BengaluruRoute:
    route_number: str
    origin: str
    destination: str


def format_time(value: str) -> str:
    """Depot clock notation to "HH:MM": "715" -> "07:15", "1430" -> "14:30".

    Anything else is returned unchanged.
    """
    value = value.strip()
    if len(value) == 3 and value.isdigit():
        return f"0{value[0]}:{value[1:]}"
    if len(value) == 4 and value.isdigit():
        return f"{value[:2]}:{value[2:]}"
    return value


def _columns(line: str) -> list[str]:
    return [part.strip() for part in _COLUMNS.split(line)]


def _column(parts: list[str], index: int) -> str:
    return parts[index] if index < len(parts) else ""


def parse_mysuru(text: str) -> list[MysuruDeparture]:
    departures = []
    for line in text.splitlines()[MYSURU_HEADER_LINES:]:
        line = line.strip()
        if not line or line.startswith("Sl.No"):
            continue
        parts = _columns(line)
        if len(parts) < 5:
            continue
        origin, destination, departure = _column(parts, 1), _column(parts, 3), _column(parts, 5)
        if origin and destination and departure:
            departures.append(MysuruDeparture(
                origin=origin,
                destination=destination,
                service_class=_column(parts, 2) or "ORD",
                via=_column(parts, 4),
                departure_time=departure,
            ))
    return departures


def parse_bengaluru(text: str) -> list[BengaluruRoute]:
    routes = []
    for line in text.splitlines()[BENGALURU_HEADER_LINES:]:
        line = line.strip()
        if not line or line.startswith("SL") or line.startswith("TOTAL"):
            continue
        parts = _columns(line)
        route_number, origin, destination = _column(parts, 1), _column(parts, 2), _column(parts, 3)
        if route_number and origin and destination:
            routes.append(BengaluruRoute(route_number=route_number, origin=origin, destination=destination))
    return routes


def group_by_route(departures: list[MysuruDeparture]) -> dict[tuple[str, str], list[MysuruDeparture]]:
    """Departures keyed by (from, to), in first-seen order."""
    grouped: dict[tuple[str, str], list[MysuruDeparture]] = {}
    for departure in departures:
        grouped.setdefault((departure.origin, departure.destination), []).append(departure)
    return grouped


def generate_stops(origin: str, destination: str, via: str, centre: tuple[float, float],
                   rng: random.Random) -> list[dict]:
    """Origin at the city centre, via stops and terminus scattered around it."""
    lat, lng = centre
    stops = [{"name": origin, "lat": lat, "lng": lng}]
    for name in (v.strip() for v in via.split(",") if v.strip()):
        stops.append({
            "name": name,
            "lat": lat + (rng.random() - 0.5) * 0.1,
            "lng": lng + (rng.random() - 0.5) * 0.1,
        })
    stops.append({
        "name": destination,
        "lat": lat + (rng.random() - 0.5) * 0.2,
        "lng": lng + (rng.random() - 0.5) * 0.2,
    })
    return stops


def _insert_route(db: Session, route: Route, departures: list[str]) -> int:
    """Insert one route with its schedules in its own transaction. Returns schedules added."""
    added = 0
    try:
        db.add(route)
        db.flush()
        for departure in departures:
            db.add(Schedule(route_id=route.id, departure_time=departure, is_active=True))
            added += 1
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to import route {route.name}: {e}")
        return -1
    return added


def _departure_times(departures: list[MysuruDeparture]) -> list[str]:
    times = []
    for departure in departures:
        formatted = format_time(departure.departure_time)
        if _HH_MM.match(formatted):
            times.append(formatted)
        else:
            logger.warning(f"Skipping unreadable departure {departure.departure_time!r} "
                           f"on {departure.origin} → {departure.destination}")
    return times


def import_mysuru(db: Session, text: str, rng: random.Random | None = None) -> dict:
    rng = rng or random.Random()
    departures = parse_mysuru(text)
    grouped = group_by_route(departures)
    logger.info(f"Parsed {len(departures)} Mysuru departures on {len(grouped)} routes")

    counts = {"routes": 0, "schedules": 0, "failed": 0}
    for (origin, destination), rows in grouped.items():
        first = rows[0]
        route = Route(
            name=f"{origin} to {destination}",
            origin=origin,
            destination=destination,
            service_class=first.service_class,
            city="Mysuru",
            stops=generate_stops(origin, destination, first.via, MYSURU_CENTRE, rng),
            is_eco_route=first.service_class == "SUB",
            estimated_co2_savings=rng.random() * 50 + 10,
        )
        added = _insert_route(db, route, _departure_times(rows))
        if added < 0:
            counts["failed"] += 1
            continue
        counts["routes"] += 1
        counts["schedules"] += added
        if counts["routes"] % PROGRESS_EVERY == 0:
            logger.info(f"Imported {counts['routes']} Mysuru routes...")

    logger.info(f"Imported {counts['routes']} Mysuru routes with {counts['schedules']} schedules")
    return counts


def import_bengaluru(db: Session, text: str, rng: random.Random | None = None) -> dict:
    rng = rng or random.Random()
    parsed = parse_bengaluru(text)
    logger.info(f"Parsed {len(parsed)} Bengaluru routes")

    counts = {"routes": 0, "schedules": 0, "failed": 0}
    for row in parsed:
        route = Route(
            route_number=row.route_number,
            name=f"{row.origin} to {row.destination}",
            origin=row.origin,
            destination=row.destination,
            service_class="ORD",
            city="Bengaluru",
            stops=generate_stops(row.origin, row.destination, "", BENGALURU_CENTRE, rng),
            is_eco_route=False,
            estimated_co2_savings=rng.random() * 30 + 5,
        )
        added = _insert_route(db, route, BENGALURU_SAMPLE_DEPARTURES)
        if added < 0:
            counts["failed"] += 1
            continue
        counts["routes"] += 1
        counts["schedules"] += added
        if counts["routes"] % PROGRESS_EVERY == 0:
            logger.info(f"Imported {counts['routes']} Bengaluru routes...")

    logger.info(f"Imported {counts['routes']} Bengaluru routes with {counts['schedules']} schedules")
    return counts


def import_timetable(db: Session, mysuru_text: str | None = None, bengaluru_text: str | None = None,
                     rng: random.Random | None = None) -> dict:
    """Import whichever timetables are given. Returns counts per city."""
    rng = rng or random.Random()
    result = {}
    if mysuru_text is not None:
        result["Mysuru"] = import_mysuru(db, mysuru_text, rng)
    if bengaluru_text is not None:
        result["Bengaluru"] = import_bengaluru(db, bengaluru_text, rng)
    return result
