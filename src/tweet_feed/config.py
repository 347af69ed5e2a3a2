"""Configuration constants for tweet_feed package."""

import os
from pathlib import Path
from zoneinfo import ZoneInfo


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "yes", "on", "true")


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if not value:
        return default
    return int(value)


# Account whose timeline is displayed
TWITTER_HANDLE = os.environ.get("TWITTER_HANDLE", "TWITTER_HANDLE")

# OAuth 1.0a user-context credentials from the Twitter app settings
TWITTER_CONSUMER_KEY = os.environ.get("TWITTER_CONSUMER_KEY", "")
TWITTER_CONSUMER_SECRET = os.environ.get("TWITTER_CONSUMER_SECRET", "")
TWITTER_ACCESS_TOKEN = os.environ.get("TWITTER_ACCESS_TOKEN", "")
TWITTER_ACCESS_TOKEN_SECRET = os.environ.get("TWITTER_ACCESS_TOKEN_SECRET", "")

# Twitter REST API v1.1
TWITTER_API_BASE_URL = os.environ.get("TWITTER_API_BASE_URL", "https://api.twitter.com/1.1")
TWITTER_REQUEST_TIMEOUT = 30  # seconds

# Cache settings
CACHE_LIFESPAN = _env_int("TWEET_FEED_CACHE_LIFESPAN", 60 * 3)  # seconds
CACHE_FILE = Path(os.environ.get("TWEET_FEED_CACHE_FILE", Path(__file__).parent / "tweets.json"))

# Display settings
TWEETS_TO_DISPLAY = _env_int("TWEET_FEED_COUNT", 5)
IGNORE_REPLIES = _env_bool("TWEET_FEED_IGNORE_REPLIES", True)
RELATIVE_TIME = _env_bool("TWEET_FEED_RELATIVE_TIME", True)

# strftime pattern plus %O for the ordinal day of month: "Oct 18th, 2026"
DATE_FORMAT = os.environ.get("TWEET_FEED_DATE_FORMAT", "%b %O, %Y")

# All display times are rendered in this zone
DISPLAY_TIMEZONE = ZoneInfo(os.environ.get("TWEET_FEED_TIMEZONE", "America/New_York"))

# Link targets
ACCOUNT_URL_TEMPLATE = "https://twitter.com/{handle}"
PROFILE_URL_TEMPLATE = "https://twitter.com/{handle}"
SEARCH_URL_TEMPLATE = "https://twitter.com/search?q=%23{tag}"
