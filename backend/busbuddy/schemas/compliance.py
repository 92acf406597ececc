from datetime import datetime

from .common import CamelModel


class ComplianceCreate(CamelModel):
    bus_id: str
    pollution_cert_expiry: datetime | None = None
    fitness_cert_expiry: datetime | None = None
    pollution_cert_url: str | None = None
    fitness_cert_url: str | None = None


class ComplianceOut(ComplianceCreate):
    id: str
    compliance_status: str
    last_checked: datetime | None = None


class ComplianceStatusOut(CamelModel):
    bus_id: str
    bus_number: str
    status: str                       # valid | expiring | expired | unknown
    pollution_days_left: int | None = None
    fitness_days_left: int | None = None
    pollution_cert_expiry: datetime | None = None
    fitness_cert_expiry: datetime | None = None
