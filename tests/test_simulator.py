"""Tests for the fleet position simulator."""
import itertools
import random
import threading
import time
from datetime import datetime

import pytest

from busbuddy.models.bus import Bus
from busbuddy.models.route import Route
from busbuddy.services import simulator as simulator_module
from busbuddy.services.simulator import MAX_SPEED, MIN_SPEED, FleetSimulator

LONG_AGO = datetime(2020, 1, 1, 0, 0)


def _snapshot(session_factory, bus_id):
    session = session_factory()
    try:
        bus = session.query(Bus).filter(Bus.id == bus_id).first()
        return bus.latitude, bus.longitude, bus.current_speed, bus.last_updated
    finally:
        session.close()


class TestTick:
    def test_active_speeds_stay_in_bounds(self, session_factory, make_bus):
        buses = [
            make_bus(current_speed=0.0),
            make_bus(current_speed=15.0),
            make_bus(current_speed=45.0),
            make_bus(current_speed=80.0),
        ]
        sim = FleetSimulator(session_factory, rng=random.Random(7))
        for _ in range(60):
            sim.tick()
            for bus in buses:
                _, _, speed, _ = _snapshot(session_factory, bus.id)
                assert MIN_SPEED <= speed <= MAX_SPEED
                assert speed == int(speed)

    def test_non_active_buses_untouched(self, session_factory, make_bus):
        frozen = [
            make_bus(status="idle", last_updated=LONG_AGO),
            make_bus(status="maintenance", current_speed=0.0, last_updated=LONG_AGO),
            make_bus(status="stopped", current_speed=12.5, last_updated=LONG_AGO),
        ]
        before = {bus.id: _snapshot(session_factory, bus.id) for bus in frozen}
        sim = FleetSimulator(session_factory, rng=random.Random(1))
        for _ in range(20):
            sim.tick()
        for bus in frozen:
            assert _snapshot(session_factory, bus.id) == before[bus.id]

    def test_returns_number_of_active_buses_updated(self, session_factory, make_bus):
        make_bus()
        make_bus()
        make_bus(status="idle")
        sim = FleetSimulator(session_factory, rng=random.Random(2))
        assert sim.tick() == 2
        assert sim.tick_count == 1
        assert sim.last_updated_count == 2

    def test_step_is_small_and_stamps_last_updated(self, session_factory, make_bus):
        bus = make_bus(last_updated=LONG_AGO)
        lat0, lng0, _, _ = _snapshot(session_factory, bus.id)
        FleetSimulator(session_factory, rng=random.Random(5)).tick()
        lat1, lng1, _, stamped = _snapshot(session_factory, bus.id)
        assert abs(lat1 - lat0) <= 0.001
        assert abs(lng1 - lng0) <= 0.001
        assert stamped.replace(tzinfo=None) > LONG_AGO

    def test_step_uses_default_speed_when_missing(self):
        class FixedRandom(random.Random):
            def random(self):
                return 0.5

        sim = FleetSimulator(None, rng=FixedRandom())
        lat, lng, speed = sim.step(12.0, 76.0, 0)
        assert (lat, lng, speed) == (12.0, 76.0, 30.0)

    def test_read_failure_is_swallowed(self):
        def broken_factory():
            raise RuntimeError("database unavailable")

        sim = FleetSimulator(broken_factory)
        assert sim.tick() == 0
        assert sim.tick() == 0
        assert sim.tick_count == 2
        assert "database unavailable" in sim.last_error

    def test_single_bus_failure_does_not_stop_the_others(self, session_factory, make_bus, monkeypatch):
        bad = make_bus(bus_number="BAD1", last_updated=LONG_AGO)
        good = make_bus(bus_number="GOOD1", last_updated=LONG_AGO)
        real_update = simulator_module.update_bus_location

        def flaky_update(db, bus_id, *args):
            if bus_id == bad.id:
                raise RuntimeError("row locked")
            return real_update(db, bus_id, *args)

        monkeypatch.setattr(simulator_module, "update_bus_location", flaky_update)
        sim = FleetSimulator(session_factory, rng=random.Random(3))
        assert sim.tick() == 1
        assert _snapshot(session_factory, bad.id)[3].replace(tzinfo=None) == LONG_AGO
        assert _snapshot(session_factory, good.id)[3].replace(tzinfo=None) > LONG_AGO
        assert "row locked" in sim.last_error

    def test_concurrent_ticks_do_not_interleave(self, session_factory, make_bus, monkeypatch):
        for _ in range(3):
            make_bus()
        writes = []

        def slow_update(db, bus_id, *args):
            writes.append(threading.current_thread().name)
            time.sleep(0.02)
            return True

        monkeypatch.setattr(simulator_module, "update_bus_location", slow_update)
        sim = FleetSimulator(session_factory, rng=random.Random(9))
        workers = [threading.Thread(target=sim.tick, name=f"tick-{i}") for i in range(2)]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join(timeout=5)

        assert len(writes) == 6
        # each tick's writes form one unbroken run
        assert len([name for name, _ in itertools.groupby(writes)]) == 2
        assert sim.tick_count == 2

    def test_tick_deadline_defers_remaining_buses(self, session_factory, make_bus, caplog):
        make_bus()
        make_bus()
        sim = FleetSimulator(session_factory, tick_timeout=-1)
        with caplog.at_level("WARNING"):
            assert sim.tick() == 0
        assert "2 bus(es) deferred" in caplog.text

    def test_summary_logged_every_nth_tick(self, session_factory, make_bus, caplog):
        make_bus()
        sim = FleetSimulator(session_factory, rng=random.Random(4), report_every=2)
        with caplog.at_level("INFO"):
            sim.tick()
            assert "Simulator update #" not in caplog.text
            sim.tick()
        assert "Simulator update #2: 1 active buses updated" in caplog.text


class TestRouteSnapping:
    def test_position_snapped_onto_route_line(self, session_factory, db, make_bus):
        db.add(Route(
            name="East-West",
            origin="West End",
            destination="East End",
            stops=[{"name": "West End", "lat": 12.0, "lng": 76.0},
                   {"name": "East End", "lat": 12.0, "lng": 77.0}],
        ))
        db.commit()
        bus = make_bus(route_name="East-West", latitude=12.0005, longitude=76.5)
        sim = FleetSimulator(session_factory, rng=random.Random(9), snap_to_route=True)
        sim.tick()
        lat, lng, _, _ = _snapshot(session_factory, bus.id)
        assert lat == pytest.approx(12.0, abs=1e-9)
        assert 76.0 <= lng <= 77.0

    def test_bus_without_known_route_walks_freely(self, session_factory, make_bus):
        bus = make_bus(route_name="Nowhere", latitude=12.0005, longitude=76.5)
        FleetSimulator(session_factory, rng=random.Random(9), snap_to_route=True).tick()
        lat, _, _, _ = _snapshot(session_factory, bus.id)
        assert lat != pytest.approx(12.0, abs=1e-9)


class TestBackgroundLoop:
    def test_start_stop(self, session_factory, make_bus):
        make_bus()
        sim = FleetSimulator(session_factory, interval=0.01, rng=random.Random(6))
        assert sim.start() is True
        assert sim.start() is False
        deadline = time.monotonic() + 5
        while sim.tick_count < 3 and time.monotonic() < deadline:
            time.sleep(0.01)
        assert sim.stop() is True
        assert sim.running is False
        assert sim.tick_count >= 3
        ticks = sim.tick_count
        time.sleep(0.05)
        assert sim.tick_count == ticks
        assert sim.stop() is False

    def test_status(self, session_factory):
        sim = FleetSimulator(session_factory, interval=3.0)
        status = sim.status()
        assert status["running"] is False
        assert status["interval_seconds"] == 3.0
        assert status["tick_count"] == 0
        assert status["last_tick_at"] is None
