"""Epoch timestamp to local time-of-day formatting."""

from datetime import datetime, tzinfo

INVALID_TIMESTAMP = "Invalid timestamp"


def to_local_time(epoch_seconds: int, tz: tzinfo | None = None) -> str:
    """Render a UTC epoch timestamp as HH:MM:SS in the local timezone.

    ``tz`` overrides the process timezone. Values the platform cannot
    represent yield ``INVALID_TIMESTAMP`` instead of raising.
    """
    try:
        moment = datetime.fromtimestamp(epoch_seconds, tz)
    except (OverflowError, OSError, ValueError):
        return INVALID_TIMESTAMP
    return moment.strftime("%H:%M:%S")
