"""Recent tweets for one account, formatted for display and cached to a JSON file."""

from tweet_feed.feed import FeedService, get_tweets_json
from tweet_feed.models import DisplayTweet, FeedResult

__all__ = ["FeedService", "get_tweets_json", "DisplayTweet", "FeedResult"]

__version__ = "1.0.0"
