"""Formatting utilities for pass content.

Dates and colours in pass.json follow formats the wallet parses itself,
so they are rendered here rather than left to the JSON encoder.
"""

import re
from datetime import datetime, timezone

RGB_PATTERN = re.compile(r"rgb\((\d+),\s*(\d+),\s*(\d+)\)")


def format_iso_date(dt: datetime) -> str:
    """Format a datetime for the wallet's expected ISO 8601 format.

    The wallet requires the colon in the timezone offset (+00:00, not +0000)
    and a timezone. Naive datetimes are treated as UTC.

    Args:
        dt: The datetime to format.

    Returns:
        ISO 8601 formatted string with colon in timezone.
    """
    if dt.tzinfo is None or dt.utcoffset() is None:
        dt = dt.replace(tzinfo=timezone.utc)

    formatted = dt.strftime("%Y-%m-%dT%H:%M:%S%z")

    # Insert colon in timezone offset: +0000 -> +00:00
    if len(formatted) >= 5 and formatted[-5] in ("+", "-"):
        formatted = formatted[:-2] + ":" + formatted[-2:]

    return formatted


def parse_iso_date(value: str) -> datetime:
    """Parse an ISO 8601 timestamp, accepting minute precision ("2018-11-25T14:25-08:00").

    Raises:
        ValueError: If the string is not a valid timestamp.
    """
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def rgb_string(red: int, green: int, blue: int) -> str:
    """Build a colour string in the "rgb(r, g, b)" format used by pass colours."""
    for component in (red, green, blue):
        if not 0 <= component <= 255:
            raise ValueError(f"Colour component out of range: {component}")
    return f"rgb({red}, {green}, {blue})"


def parse_rgb_color(rgb: str) -> tuple[int, int, int]:
    """Parse an "rgb(r, g, b)" string to a tuple.

    Raises:
        ValueError: If the string is not an rgb() colour.
    """
    match = RGB_PATTERN.fullmatch(rgb.strip())
    if not match:
        raise ValueError(f"Not an rgb() colour: {rgb!r}")
    red, green, blue = (int(group) for group in match.groups())
    if max(red, green, blue) > 255:
        raise ValueError(f"Colour component out of range: {rgb!r}")
    return red, green, blue
