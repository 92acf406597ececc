from fastapi import APIRouter, Depends, Request

from ..services.simulator import FleetSimulator

router = APIRouter(prefix="/api/simulator", tags=["simulator"])


def get_simulator(request: Request) -> FleetSimulator:
    return request.app.state.fleet_simulator


@router.get("/status")
def simulator_status(simulator: FleetSimulator = Depends(get_simulator)):
    return simulator.status()


@router.post("/start")
def simulator_start(simulator: FleetSimulator = Depends(get_simulator)):
    started = simulator.start()
    return {"started": started, **simulator.status()}


@router.post("/stop")
def simulator_stop(simulator: FleetSimulator = Depends(get_simulator)):
    stopped = simulator.stop()
    return {"stopped": stopped, **simulator.status()}
