"""
Fleet position simulator, standing in for GPS telemetry.
Every tick, each bus whose status is "active" takes a small random step in
latitude/longitude and has its speed nudged within [15, 45] km/h. Buses in
any other status are left exactly as they are.

One simulator runs per process, on its own daemon thread. Ticks never
overlap: the next one starts only after the previous one has finished.
"""
import logging
import random
import threading
import time
from datetime import datetime

from shapely.geometry import LineString, Point

from ..database import utcnow
from ..models.route import Route
from .eta import round_half_up
from .fleet_store import list_buses, update_bus_location

logger = logging.getLogger(__name__)

POSITION_JITTER = 0.002   # degrees, full width of the random step
SPEED_JITTER = 10.0       # km/h, full width of the speed change
DEFAULT_SPEED = 30.0      # km/h, used when a bus reports no speed
MIN_SPEED = 15.0
MAX_SPEED = 45.0


class FleetSimulator:
    def __init__(self, session_factory, interval: float = 3.0, rng: random.Random | None = None,
                 report_every: int = 10, tick_timeout: float | None = None,
                 snap_to_route: bool = False):
        self._session_factory = session_factory
        self.interval = interval
        self.rng = rng or random.Random()
        self.report_every = max(report_every, 1)
        self.tick_timeout = tick_timeout
        self.snap_to_route = snap_to_route

        self.tick_count = 0
        self.last_updated_count = 0
        self.last_tick_at: datetime | None = None
        self.last_error: str | None = None

        self._tick_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    # ──────────────────────────────────────────────
    # Single tick
    # ──────────────────────────────────────────────

    def _offset(self) -> float:
        return (self.rng.random() - 0.5) * POSITION_JITTER

    def step(self, latitude: float, longitude: float, speed: float | None) -> tuple[float, float, float]:
        """Next (lat, lng, speed) for one active bus; speed is clamped but not rounded."""
        new_lat = latitude + self._offset()
        new_lng = longitude + self._offset()
        variation = (self.rng.random() - 0.5) * SPEED_JITTER
        new_speed = max(MIN_SPEED, min(MAX_SPEED, (speed or DEFAULT_SPEED) + variation))
        return new_lat, new_lng, new_speed

    @staticmethod
    def _route_lines(db) -> dict[str, LineString]:
        lines = {}
        for route in db.query(Route).all():
            stops = route.stops or []
            if len(stops) >= 2:
                lines[route.name] = LineString([(s["lng"], s["lat"]) for s in stops])
        return lines

    @staticmethod
    def _snap(line: LineString, latitude: float, longitude: float) -> tuple[float, float]:
        snapped = line.interpolate(line.project(Point(longitude, latitude)))
        return snapped.y, snapped.x

    def tick(self) -> int:
        """Advance every active bus once. Returns how many buses were written."""
        with self._tick_lock:
            started = time.monotonic()
            updated = 0
            db = None
            try:
                db = self._session_factory()
                # Plain values only: each per-bus commit expires the loaded rows
                active = [
                    (b.id, b.route_name, b.latitude, b.longitude, b.current_speed)
                    for b in list_buses(db) if b.status == "active"
                ]
                lines = self._route_lines(db) if self.snap_to_route else {}

                for index, (bus_id, route_name, lat, lng, speed) in enumerate(active):
                    if self.tick_timeout is not None and time.monotonic() - started > self.tick_timeout:
                        logger.warning(f"Simulator tick #{self.tick_count + 1} exceeded "
                                       f"{self.tick_timeout}s, {len(active) - index} bus(es) deferred")
                        break
                    new_lat, new_lng, new_speed = self.step(lat, lng, speed)
                    line = lines.get(route_name)
                    if line is not None:
                        new_lat, new_lng = self._snap(line, new_lat, new_lng)
                    try:
                        if update_bus_location(db, bus_id, new_lat, new_lng, round_half_up(new_speed)):
                            updated += 1
                    except Exception as e:
                        db.rollback()
                        self.last_error = str(e)
                        logger.error(f"Simulator: failed to update bus {bus_id}: {e}", exc_info=True)
            except Exception as e:
                self.last_error = str(e)
                logger.error(f"Bus simulation error: {e}", exc_info=True)
            finally:
                if db is not None:
                    db.close()

            self.tick_count += 1
            self.last_updated_count = updated
            self.last_tick_at = utcnow()
            if self.tick_count % self.report_every == 0:
                logger.info(f"Simulator update #{self.tick_count}: {updated} active buses updated")
            return updated

    # ──────────────────────────────────────────────
    # Background loop
    # ──────────────────────────────────────────────

    def _run(self):
        next_run = time.monotonic()
        while not self._stop_event.is_set():
            self.tick()
            next_run += self.interval
            delay = next_run - time.monotonic()
            if delay < 0:
                # Overran the interval: start the next tick now instead of bursting to catch up
                next_run = time.monotonic()
                delay = 0
            if self._stop_event.wait(delay):
                break

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> bool:
        if self.running:
            return False
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="fleet-simulator", daemon=True)
        self._thread.start()
        logger.info(f"Bus location simulator started (updates every {self.interval:g}s)")
        return True

    def stop(self, timeout: float = 5.0) -> bool:
        if not self.running:
            return False
        self._stop_event.set()
        self._thread.join(timeout=timeout)
        if self._thread.is_alive():
            logger.warning(f"Simulator thread still busy after {timeout}s, leaving it to exit on its own")
        else:
            logger.info(f"Bus location simulator stopped after {self.tick_count} ticks")
        return True

    def status(self) -> dict:
        return {
            "running": self.running,
            "interval_seconds": self.interval,
            "tick_count": self.tick_count,
            "last_updated_count": self.last_updated_count,
            "last_tick_at": self.last_tick_at.isoformat() if self.last_tick_at else None,
            "last_error": self.last_error,
        }
