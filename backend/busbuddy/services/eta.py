"""
Arrival-time estimation for a bus heading to a point, plus the display
helpers the passenger views use (formatted text and a three-way urgency
category).
"""
import logging
import math
import random

from .geo import LatLng, distance_km

logger = logging.getLogger(__name__)

ROAD_CURVATURE_FACTOR = 1.2       # road distance / straight-line distance
FALLBACK_SPEED_KMH = 25.0         # average city speed
DIRECT_FALLBACK_SPEED_KMH = 30.0  # used by the straight-line estimate
TRAFFIC_BUFFER_MIN = 2.0          # minutes
TRAFFIC_BUFFER_MAX = 5.0

IMMINENT_MINUTES = 5
MODERATE_MINUTES = 15


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def effective_speed(speed: float | None, fallback: float = FALLBACK_SPEED_KMH) -> float:
    """Reported speed, or `fallback` when the bus reports none.

    A reported 0 km/h also takes the fallback, so a stopped bus still gets a
    finite estimate.
    """
    if speed:
        return float(speed)
    logger.warning(f"No usable speed reported ({speed!r}), assuming {fallback} km/h")
    return fallback


def traffic_buffer(rng: random.Random | None = None) -> float:
    rng = rng or random
    return TRAFFIC_BUFFER_MIN + rng.random() * (TRAFFIC_BUFFER_MAX - TRAFFIC_BUFFER_MIN)


def estimate_eta(bus, destination: LatLng, buffer: float | None = None,
                 rng: random.Random | None = None) -> int:
    """Minutes until `bus` reaches `destination`.

    `bus` is anything with latitude, longitude and current_speed attributes.
    Pass `buffer` to pin the traffic allowance (tests use 0); otherwise it is
    drawn uniformly from [2, 5).
    """
    straight = distance_km((bus.latitude, bus.longitude), destination)
    road = straight * ROAD_CURVATURE_FACTOR
    speed = effective_speed(bus.current_speed)
    minutes = road / speed * 60
    if buffer is None:
        buffer = traffic_buffer(rng)
    return round_half_up(minutes + buffer)


def direct_eta(distance: float, speed: float) -> int:
    """Straight-line minutes at `speed`, no curvature factor or buffer."""
    return round_half_up(distance / speed * 60)


def _number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def format_eta(minutes: float) -> str:
    if minutes < 1:
        return "Arriving now"
    if minutes == 1:
        return "1 min"
    if minutes < 60:
        return f"{_number(minutes)} mins"

    hours = int(minutes // 60)
    mins = minutes % 60
    if mins == 0:
        return "1 hour" if hours == 1 else f"{hours} hours"
    return f"{hours}h {_number(mins)}m"


def eta_status(minutes: float) -> str:
    if minutes < IMMINENT_MINUTES:
        return "imminent"
    if minutes < MODERATE_MINUTES:
        return "moderate"
    return "distant"
