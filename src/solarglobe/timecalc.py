"""Instant handling, Julian Date conversion, and angle normalization."""

from datetime import datetime, timedelta

from pytz import utc

J2000_JD = 2451545.0
J2000 = datetime(2000, 1, 1, 12, 0, 0, tzinfo=utc)
_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=utc)
_ONE_DAY = timedelta(days=1)


def ensure_utc(dt: datetime) -> datetime:
    """Return ``dt`` as an aware UTC datetime. Naive values are taken as UTC."""
    if dt.tzinfo is None:
        return utc.localize(dt)
    return dt.astimezone(utc)


def now_utc() -> datetime:
    """Sample the wall clock once. Callers thread the result through a whole frame."""
    return datetime.now(utc)


def instant_from_millis(millis: int) -> datetime:
    """Instant from milliseconds since 1970-01-01T00:00Z."""
    return _UNIX_EPOCH + timedelta(milliseconds=millis)


def days_since_j2000(instant: datetime) -> float:
    """Signed days since 2000-01-01T12:00Z (``n`` in the solar/lunar series).

    Computed from an exact timedelta so the result is exact to the
    millisecond. No leap-second correction.
    """
    return (ensure_utc(instant) - J2000) / _ONE_DAY


def julian_date(instant: datetime) -> float:
    return J2000_JD + days_since_j2000(instant)


def utc_decimal_hours(instant: datetime) -> float:
    """Hour of the UTC day as a real number in [0, 24)."""
    t = ensure_utc(instant)
    return (
        t.hour
        + t.minute / 60.0
        + (t.second + t.microsecond / 1_000_000.0) / 3600.0
    )


def normalize360(angle: float) -> float:
    """Wrap an angle in degrees into [0, 360)."""
    wrapped = angle % 360.0
    # -1e-17 % 360.0 rounds to 360.0
    if wrapped >= 360.0:
        wrapped = 0.0
    return wrapped


def normalize180(angle: float) -> float:
    """Wrap an angle in degrees into (-180, 180]."""
    wrapped = normalize360(angle)
    if wrapped > 180.0:
        wrapped -= 360.0
    return wrapped
