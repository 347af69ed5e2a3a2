"""Timestamp parsing and display-time formatting for tweet_feed.

Uses Python's zoneinfo module. Formatting functions take the display zone as an
argument, so nothing here depends on the process-wide local timezone.

Display times are either relative to a reference "now" ("5 minutes ago",
"2 hrs ago") or an absolute date rendered with a strftime pattern. Anything a
day old or older always falls back to the absolute date.
"""

import re
from datetime import datetime, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from tweet_feed.config import DATE_FORMAT, DISPLAY_TIMEZONE

# Standard timezone constants
ET = ZoneInfo("America/New_York")
UTC = ZoneInfo("UTC")

# Twitter v1.1 created_at format: "Wed Dec 17 15:01:11 +0000 2025"
TWITTER_TIMESTAMP_FORMAT = "%a %b %d %H:%M:%S %z %Y"

# Relative-time bucket edges, in seconds
MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR

# Matches one strftime directive, so "%%O" stays a literal "%O"
_DIRECTIVE_PATTERN = re.compile(r"%.")


def parse_twitter_timestamp(timestamp_str: str) -> Optional[datetime]:
    """
    Parse Twitter timestamp string to datetime.

    Args:
        timestamp_str: Twitter format "Wed Dec 17 15:01:11 +0000 2025"

    Returns:
        datetime object (timezone-aware UTC) or None if parsing fails
    """
    try:
        return datetime.strptime(timestamp_str, TWITTER_TIMESTAMP_FORMAT)
    except (ValueError, TypeError):
        return None


def ordinal_day(day: int) -> str:
    """Day of month with its English suffix: 1st, 2nd, 3rd, 4th, 11th, 22nd."""
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_absolute_time(timestamp: datetime, date_format: str = DATE_FORMAT, tz: tzinfo = DISPLAY_TIMEZONE) -> str:
    """
    Format a timestamp as a calendar date in the display zone.

    Args:
        timestamp: Timezone-aware datetime (naive values are assumed UTC)
        date_format: strftime pattern; ``%O`` expands to the ordinal day of month
        tz: Zone the date is rendered in

    Returns:
        Formatted date string
    """
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    local = timestamp.astimezone(tz)

    def expand(match: re.Match) -> str:
        if match.group(0) == "%O":
            return ordinal_day(local.day)
        return match.group(0)

    return local.strftime(_DIRECTIVE_PATTERN.sub(expand, date_format))


def format_display_time(
    created_at: datetime,
    now: datetime,
    relative: bool = True,
    date_format: str = DATE_FORMAT,
    tz: tzinfo = DISPLAY_TIMEZONE,
) -> str:
    """
    Format a tweet's creation time for display.

    With ``relative`` set, the absolute difference to ``now`` (whole seconds)
    picks a bucket; each bucket's lower edge is inclusive:

        diff < 60            "<diff> seconds ago"
        60 <= diff < 3600    "<minutes> minutes ago"
        3600 <= diff < 86400 "<hours> hr ago" / "<hours> hrs ago"
        diff >= 86400        absolute date

    Args:
        created_at: When the tweet was posted
        now: Reference time
        relative: Use relative phrasing for anything under a day old
        date_format: Pattern for the absolute date (see format_absolute_time)
        tz: Zone for the absolute date

    Returns:
        Display string
    """
    if not relative:
        return format_absolute_time(created_at, date_format, tz)

    diff = abs(int((now - created_at).total_seconds()))

    if diff < MINUTE:
        return f"{diff} seconds ago"
    elif diff < HOUR:
        return f"{diff // MINUTE} minutes ago"
    elif diff < DAY:
        hours = diff // HOUR
        return f"{hours} hr{'s' if hours > 1 else ''} ago"
    return format_absolute_time(created_at, date_format, tz)
