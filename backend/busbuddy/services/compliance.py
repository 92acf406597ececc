import math
from datetime import datetime, timezone

from ..config import settings
from ..database import utcnow

SECONDS_PER_DAY = 86400


def _as_aware(ts: datetime) -> datetime:
    # SQLite hands timestamps back naive; they were written as UTC
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


def days_left(expiry: datetime | None, now: datetime) -> int | None:
    if expiry is None:
        return None
    delta = _as_aware(expiry) - _as_aware(now)
    return math.floor(delta.total_seconds() / SECONDS_PER_DAY)


def certificate_days_left(record, now: datetime | None = None) -> tuple[int | None, int | None]:
    now = now or utcnow()
    return (
        days_left(record.pollution_cert_expiry, now),
        days_left(record.fitness_cert_expiry, now),
    )


def compliance_status(record, now: datetime | None = None) -> str:
    """valid | expiring | expired | unknown for a BusCompliance row (or None)."""
    if record is None:
        return "unknown"
    present = [d for d in certificate_days_left(record, now) if d is not None]
    if any(d < 0 for d in present):
        return "expired"
    if any(d < settings.compliance_expiring_days for d in present):
        return "expiring"
    return "valid"
