"""Utility modules for tweet_feed package."""

from tweet_feed.utils.timezone import (
    ET,
    UTC,
    format_absolute_time,
    format_display_time,
    ordinal_day,
    parse_twitter_timestamp,
)

__all__ = [
    "ET",
    "UTC",
    "format_absolute_time",
    "format_display_time",
    "ordinal_day",
    "parse_twitter_timestamp",
]
