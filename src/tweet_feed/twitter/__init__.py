"""Twitter API integration for fetching a user's recent tweets."""

from tweet_feed.twitter.client import Tweet, TwitterClient

__all__ = ["Tweet", "TwitterClient"]
