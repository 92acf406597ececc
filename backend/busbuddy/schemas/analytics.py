import datetime as dt

from pydantic import Field

from .common import CamelModel


class AnalyticsCreate(CamelModel):
    date: dt.date = Field(default_factory=dt.date.today)
    total_co2_saved: float = Field(0.0, alias="totalCO2Saved", ge=0)
    total_fuel_saved: float = Field(0.0, ge=0)
    total_trips: int = Field(0, ge=0)
    avg_bus_speed: float = Field(0.0, ge=0)


class AnalyticsUpdate(CamelModel):
    total_co2_saved: float | None = Field(None, alias="totalCO2Saved", ge=0)
    total_fuel_saved: float | None = Field(None, ge=0)
    total_trips: int | None = Field(None, ge=0)
    avg_bus_speed: float | None = Field(None, ge=0)


class AnalyticsOut(CamelModel):
    id: str
    date: dt.date
    total_co2_saved: float = Field(alias="totalCO2Saved")
    total_fuel_saved: float
    total_trips: int
    avg_bus_speed: float
