"""
Display formatting shared by sources and report shaping.

Dependencies: datetime
System role: Date rendering for report headers and document metadata
"""

from datetime import datetime, timezone

REPORT_DATE_FORMAT = "%d %b %Y"


def format_date(value: datetime | str) -> str:
    """
    Render a date as 'DD Mon YYYY' (e.g. '18 Aug 2025').

    Args:
        value: datetime or ISO 8601 string ('Z' suffix accepted)

    Returns:
        str: Formatted date
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return value.strftime(REPORT_DATE_FORMAT)


def to_iso_timestamp(epoch_seconds: float | str) -> str:
    """Convert epoch seconds to an ISO 8601 UTC string with millisecond precision."""
    moment = datetime.fromtimestamp(float(epoch_seconds), tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
