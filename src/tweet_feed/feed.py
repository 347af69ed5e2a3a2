"""Cached, display-ready feed of one account's recent tweets."""

import logging
from datetime import datetime, tzinfo
from pathlib import Path
from typing import Any, Optional

from tweet_feed.cache import FeedCache
from tweet_feed.config import (
    ACCOUNT_URL_TEMPLATE,
    DATE_FORMAT,
    DISPLAY_TIMEZONE,
    IGNORE_REPLIES,
    PROFILE_URL_TEMPLATE,
    RELATIVE_TIME,
    SEARCH_URL_TEMPLATE,
    TWEETS_TO_DISPLAY,
    TWITTER_HANDLE,
)
from tweet_feed.errors import FeedError, NoTweetsError
from tweet_feed.models import DisplayTweet, FeedResult
from tweet_feed.text.markup import linkify
from tweet_feed.twitter.client import Tweet, TwitterClient
from tweet_feed.utils.timezone import UTC, format_display_time, parse_twitter_timestamp

logger = logging.getLogger(__name__)


class FeedService:
    """Serves the formatted feed from cache, refetching once the cache goes stale."""

    def __init__(
        self,
        handle: Optional[str] = None,
        client: Optional[TwitterClient] = None,
        cache: Optional[FeedCache] = None,
        credentials: Optional[dict[str, str]] = None,
        tweets_to_display: int = TWEETS_TO_DISPLAY,
        ignore_replies: bool = IGNORE_REPLIES,
        date_format: str = DATE_FORMAT,
        relative_time: bool = RELATIVE_TIME,
        tz: tzinfo = DISPLAY_TIMEZONE,
        profile_url: str = PROFILE_URL_TEMPLATE,
        search_url: str = SEARCH_URL_TEMPLATE,
    ):
        """
        Initialize feed service.

        Args:
            handle: Twitter username without @ (defaults to config)
            client: TwitterClient instance (created on first fetch if not provided)
            cache: FeedCache instance (default cache file and lifespan if not provided)
            credentials: Keyword arguments for TwitterClient when it has to be created
            tweets_to_display: How many tweets to request
            ignore_replies: Leave replies out of the feed
            date_format: Absolute date pattern (see utils.timezone.format_absolute_time)
            relative_time: Show "5 minutes ago" style times for recent tweets
            tz: Zone for absolute dates
            profile_url: Mention link template with a {handle} placeholder
            search_url: Hashtag link template with a {tag} placeholder
        """
        self.handle = handle or TWITTER_HANDLE
        self._client = client
        self._credentials = credentials or {}
        self.cache = cache or FeedCache()
        self.tweets_to_display = tweets_to_display
        self.ignore_replies = ignore_replies
        self.date_format = date_format
        self.relative_time = relative_time
        self.tz = tz
        self.profile_url = profile_url
        self.search_url = search_url

    @property
    def client(self) -> TwitterClient:
        """
        Get or create the Twitter client.

        Raises:
            NoConnectionError: If the client cannot be created
        """
        if self._client is None:
            self._client = TwitterClient(**self._credentials)
        return self._client

    @property
    def account_link(self) -> str:
        return ACCOUNT_URL_TEMPLATE.format(handle=self.handle)

    def _format_time(self, tweet: Tweet, now: datetime) -> str:
        created_at = parse_twitter_timestamp(tweet.created_at)
        if created_at is None:
            logger.warning(f"Failed to parse timestamp '{tweet.created_at}' for tweet {tweet.id}")
            return str(tweet.created_at or "")
        return format_display_time(created_at, now, self.relative_time, self.date_format, self.tz)

    def format_tweet(self, tweet: Tweet, now: datetime) -> DisplayTweet:
        """Apply link markup and display-time formatting to one tweet."""
        return DisplayTweet(
            desc=linkify(tweet.text, self.profile_url, self.search_url),
            time=self._format_time(tweet, now),
        )

    def fetch(self, now: Optional[datetime] = None) -> FeedResult:
        """
        Fetch and format the timeline, bypassing the cache.

        The cache is rewritten only when tweets were fetched. Errors are
        returned in ``FeedResult.error``, never raised.
        """
        now = now or datetime.now(UTC)

        try:
            tweets = self.client.fetch_timeline(self.handle, self.tweets_to_display, self.ignore_replies)
            if not tweets:
                raise NoTweetsError()
        except FeedError as e:
            logger.error(f"Could not load tweets for @{self.handle}: {e}")
            return FeedResult.failure(self.handle, self.account_link, e.message)

        result = FeedResult(
            acct=self.handle,
            acct_link=self.account_link,
            tweets=tuple(self.format_tweet(t, now) for t in tweets),
        )
        self.cache.save(result)
        return result

    def get_feed(self, now: Optional[datetime] = None) -> FeedResult:
        """
        Return the feed, from cache while it is fresh, otherwise from the API.

        Args:
            now: Reference time for cache freshness and relative times (default: current time)

        Returns:
            FeedResult with tweets, or with ``error`` set and no tweets
        """
        now = now or datetime.now(UTC)

        if self.cache.is_fresh(now.timestamp()):
            cached = self.cache.load()
            if cached is not None:
                logger.info(f"Serving @{self.handle} from cache {self.cache.cache_file}")
                return cached
            logger.info("Cache is fresh but unreadable, refetching")
        else:
            logger.debug(f"Cache miss for @{self.handle}, fetching timeline")

        return self.fetch(now)


def get_tweets_json(
    handle: Optional[str] = None,
    consumer_key: Optional[str] = None,
    consumer_secret: Optional[str] = None,
    access_token: Optional[str] = None,
    access_token_secret: Optional[str] = None,
    cache_lifespan: Optional[float] = None,
    cache_file: Optional[Path] = None,
    tweets_to_display: int = TWEETS_TO_DISPLAY,
    ignore_replies: bool = IGNORE_REPLIES,
    date_format: str = DATE_FORMAT,
    relative_time: bool = RELATIVE_TIME,
) -> dict[str, Any]:
    """
    Get the latest tweets as a plain dict, using the cache when it is fresh.

    Every argument falls back to the value in tweet_feed.config.

    Returns:
        ``{"acct": ..., "acct_link": ..., "tweets": [{"desc": ..., "time": ...}], "error": False}``
        or the same shape with ``error`` set to a message and no tweets
    """
    credentials = {
        "consumer_key": consumer_key,
        "consumer_secret": consumer_secret,
        "access_token": access_token,
        "access_token_secret": access_token_secret,
    }
    service = FeedService(
        handle=handle,
        cache=FeedCache(cache_file, cache_lifespan),
        credentials=credentials,
        tweets_to_display=tweets_to_display,
        ignore_replies=ignore_replies,
        date_format=date_format,
        relative_time=relative_time,
    )
    return service.get_feed().to_dict()
