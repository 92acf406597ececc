from .analytics import Analytics
from .bus import Bus
from .compliance import BusCompliance
from .proximity import ProximityAlert
from .route import Route, Schedule

__all__ = ["Analytics", "Bus", "BusCompliance", "ProximityAlert", "Route", "Schedule"]
