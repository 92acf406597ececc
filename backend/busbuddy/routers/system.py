import time

import psutil
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..services.simulator import FleetSimulator
from .simulator import get_simulator

router = APIRouter(prefix="/api/system", tags=["system"])

_start_time = time.time()


class SystemHealth(BaseModel):
    cpu_pct: float
    ram_pct: float
    ram_used_mb: int
    ram_total_mb: int
    uptime_seconds: int
    simulator_running: bool
    simulator_ticks: int


@router.get("/health", response_model=SystemHealth)
def get_system_health(simulator: FleetSimulator = Depends(get_simulator)):
    """Return CPU, RAM usage, process uptime and whether the fleet simulator is ticking."""
    cpu = psutil.cpu_percent(interval=0.2)
    ram = psutil.virtual_memory()
    return SystemHealth(
        cpu_pct=round(cpu, 1),
        ram_pct=round(ram.percent, 1),
        ram_used_mb=ram.used // (1024 * 1024),
        ram_total_mb=ram.total // (1024 * 1024),
        uptime_seconds=int(time.time() - _start_time),
        simulator_running=simulator.running,
        simulator_ticks=simulator.tick_count,
    )
