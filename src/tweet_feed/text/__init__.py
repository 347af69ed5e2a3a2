"""Tweet text markup: URLs, mentions and hashtags as HTML links."""

from tweet_feed.text.markup import linkify

__all__ = ["linkify"]
