"""Twitter REST API v1.1 client for a user's recent timeline."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests
from requests_oauthlib import OAuth1

from tweet_feed.config import (
    TWITTER_ACCESS_TOKEN,
    TWITTER_ACCESS_TOKEN_SECRET,
    TWITTER_API_BASE_URL,
    TWITTER_CONSUMER_KEY,
    TWITTER_CONSUMER_SECRET,
    TWITTER_REQUEST_TIMEOUT,
)
from tweet_feed.errors import FeedError, NoConnectionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tweet:
    """Represents a tweet from the API."""

    id: str
    text: str
    created_at: str  # UTC timestamp: "Wed Dec 17 15:01:11 +0000 2025"


class TwitterClient:
    """Client for the Twitter v1.1 REST API using OAuth 1.0a user-context auth."""

    BASE_URL = TWITTER_API_BASE_URL
    TIMEOUT = TWITTER_REQUEST_TIMEOUT

    def __init__(
        self,
        consumer_key: Optional[str] = None,
        consumer_secret: Optional[str] = None,
        access_token: Optional[str] = None,
        access_token_secret: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the Twitter client.

        Args:
            consumer_key: App consumer key (defaults to env var TWITTER_CONSUMER_KEY)
            consumer_secret: App consumer secret (defaults to env var TWITTER_CONSUMER_SECRET)
            access_token: User access token (defaults to env var TWITTER_ACCESS_TOKEN)
            access_token_secret: User access token secret (defaults to env var TWITTER_ACCESS_TOKEN_SECRET)
            session: HTTP session to send requests with (a new one if not provided)

        Raises:
            NoConnectionError: If any of the four credentials is missing
        """
        credentials = (
            consumer_key or TWITTER_CONSUMER_KEY,
            consumer_secret or TWITTER_CONSUMER_SECRET,
            access_token or TWITTER_ACCESS_TOKEN,
            access_token_secret or TWITTER_ACCESS_TOKEN_SECRET,
        )
        if not all(credentials):
            logger.error(
                "Twitter credentials not provided. Set TWITTER_CONSUMER_KEY, TWITTER_CONSUMER_SECRET, "
                "TWITTER_ACCESS_TOKEN and TWITTER_ACCESS_TOKEN_SECRET or pass them explicitly."
            )
            raise NoConnectionError()

        self.auth = OAuth1(*credentials)
        self.session = session or requests.Session()

    def _make_request(self, endpoint: str, params: dict[str, Any]) -> Any:
        """
        Make a signed GET request to the API.

        Args:
            endpoint: API endpoint path
            params: Query parameters

        Returns:
            JSON response data

        Raises:
            NoConnectionError: If the API could not be reached
            FeedError: On an error status or a non-JSON body
        """
        url = f"{self.BASE_URL}{endpoint}"
        logger.debug(f"Requesting {url} with params {params}")

        try:
            response = self.session.get(url, params=params, auth=self.auth, timeout=self.TIMEOUT)
            response.raise_for_status()
            return response.json()
        except (requests.ConnectionError, requests.Timeout) as e:
            logger.error(f"Could not reach {url}: {e}")
            raise NoConnectionError() from e
        except requests.HTTPError as e:
            logger.error(f"Request to {url} failed: {e}")
            status = e.response.status_code if e.response is not None else "unknown"
            raise FeedError(f"Twitter API error ({status}).") from e
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Bad response from {url}: {e}")
            raise FeedError() from e

    def _parse_tweet(self, tweet_data: dict[str, Any]) -> Tweet:
        """Parse raw API tweet data into Tweet object."""
        return Tweet(
            id=str(tweet_data.get("id_str") or tweet_data.get("id", "")),
            text=tweet_data.get("full_text") or tweet_data.get("text") or "",
            created_at=tweet_data.get("created_at") or "",
        )

    def fetch_timeline(self, username: str, count: int, exclude_replies: bool = True) -> list[Tweet]:
        """
        Fetch a user's most recent tweets.

        Twitter applies ``count`` before dropping replies, so fewer than
        ``count`` tweets may come back when replies are excluded.

        Args:
            username: Twitter username (without @)
            count: Number of tweets to request
            exclude_replies: Whether to leave reply tweets out

        Returns:
            Tweets, newest first (possibly empty)
        """
        params: dict[str, Any] = {
            "screen_name": username,
            "count": count,
            "exclude_replies": "true" if exclude_replies else "false",
            "tweet_mode": "extended",
        }

        data = self._make_request("/statuses/user_timeline.json", params)
        if not isinstance(data, list):
            logger.error(f"Unexpected timeline payload for @{username}: {type(data).__name__}")
            raise FeedError()

        tweets = [self._parse_tweet(t) for t in data]
        logger.info(f"Fetched {len(tweets)} tweets for @{username}")
        return tweets
