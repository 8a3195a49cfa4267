"""Local time for evaluating facility opening hours."""

from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from portal.config import HoursSettings
from portal.util.error import ConfigurationError


def local_time(at: datetime | None, hours_settings: HoursSettings) -> datetime:
    """Express ``at`` (default: now) in the timezone timings are written in.

    A naive ``at`` is taken to already be local time.

    Raises:
        ConfigurationError: If the configured timezone is unknown
    """
    try:
        zone = ZoneInfo(hours_settings.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        raise ConfigurationError(f"Unknown timezone: {hours_settings.timezone}")

    if at is None:
        return datetime.now(zone)
    if at.tzinfo is None:
        return at.replace(tzinfo=zone)
    return at.astimezone(zone)
