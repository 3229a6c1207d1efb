"""Instants, Julian dates and sidereal time."""

from datetime import datetime, timezone

from pytz import timezone as pytz_timezone
from pytz import utc
from pytz.exceptions import InvalidTimeError, UnknownTimeZoneError

Instant = datetime | int | float

_MS_PER_DAY = 86_400_000.0
_JD_UNIX_EPOCH = 2440587.5
_JD_J2000 = 2451545.0


def instant_to_epoch_ms(instant: Instant) -> float:
    """Return epoch milliseconds for a datetime or an epoch-ms number.

    Naive datetimes are taken to be UTC.
    """
    if isinstance(instant, datetime):
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        return instant.timestamp() * 1000.0
    return float(instant)


def julian_date(instant: Instant) -> float:
    """Julian Date of an instant."""
    return instant_to_epoch_ms(instant) / _MS_PER_DAY + _JD_UNIX_EPOCH


def _wrap_360(deg: float) -> float:
    wrapped = deg % 360.0
    # -1e-17 % 360.0 rounds to 360.0
    return 0.0 if wrapped >= 360.0 else wrapped


def greenwich_mean_sidereal_time(instant: Instant) -> float:
    """Greenwich Mean Sidereal Time in degrees [0, 360).

    IAU 1982 polynomial in centuries since J2000.0.
    """
    days = julian_date(instant) - _JD_J2000
    T = days / 36525.0
    gmst = (
        280.46061837
        + 360.98564736629 * days
        + 0.000387933 * T * T
        - T * T * T / 38710000.0
    )
    return _wrap_360(gmst)


def local_sidereal_time(instant: Instant, longitude_deg: float) -> float:
    """Local Sidereal Time in degrees [0, 360) for an east-positive longitude."""
    return _wrap_360(greenwich_mean_sidereal_time(instant) + longitude_deg)


def instant_from_local(when: str, tz_name: str) -> datetime:
    """Resolve a local "YYYY-MM-DD HH:MM" string in an IANA zone to a UTC datetime.

    Args:
        when: Local time string.
        tz_name: IANA time zone name ("America/Los_Angeles").

    Returns:
        Timezone-aware UTC datetime.

    Raises:
        ValueError: On a malformed time string, unknown zone, or a local time
            that is skipped or repeated by a DST change.
    """
    dt = datetime.strptime(when, "%Y-%m-%d %H:%M")
    try:
        local_tz = pytz_timezone(tz_name)
    except UnknownTimeZoneError as e:
        raise ValueError(f"Unknown time zone: {tz_name}") from e
    try:
        local_dt = local_tz.localize(dt, is_dst=None)
    except InvalidTimeError as e:
        raise ValueError(f"Ambiguous or non-existent local time: {when} ({tz_name})") from e
    return local_dt.astimezone(utc)
