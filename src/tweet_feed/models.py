"""Display-ready feed types and their JSON cache shape."""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class DisplayTweet:
    """A tweet after markup and time formatting."""

    desc: str  # HTML with linked URLs, mentions and hashtags
    time: str  # "5 minutes ago" or "Oct 18th, 2026"

    def to_dict(self) -> dict[str, str]:
        return {"desc": self.desc, "time": self.time}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DisplayTweet":
        return cls(desc=str(data.get("desc", "")), time=str(data.get("time", "")))


@dataclass(frozen=True)
class FeedResult:
    """
    Account info plus formatted tweets, or an error message.

    This is both what callers get back and what the cache file stores. On
    disk ``error`` is ``false`` when there is no error, matching the JSON
    shape::

        {"acct": ..., "acct_link": ..., "tweets": [{"desc": ..., "time": ...}], "error": false}
    """

    acct: str
    acct_link: str
    tweets: tuple[DisplayTweet, ...] = field(default_factory=tuple)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True if the result holds tweets rather than an error."""
        return self.error is None

    @classmethod
    def failure(cls, acct: str, acct_link: str, message: str) -> "FeedResult":
        """Build an error result with no tweets."""
        return cls(acct=acct, acct_link=acct_link, tweets=(), error=message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the cache JSON shape."""
        return {
            "acct": self.acct,
            "acct_link": self.acct_link,
            "tweets": [t.to_dict() for t in self.tweets],
            "error": self.error if self.error is not None else False,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FeedResult":
        """
        Deserialize from the cache JSON shape.

        ``error`` may be ``false``, ``null`` or a message string. Missing keys
        fall back to empty values so error-only documents still load.

        Raises:
            ValueError: If ``tweets`` is not a list of objects
        """
        raw_tweets = data.get("tweets") or []
        if not isinstance(raw_tweets, list) or not all(isinstance(t, dict) for t in raw_tweets):
            raise ValueError("'tweets' must be a list of objects")

        error = data.get("error")
        if error is False or error is None:
            error = None
        else:
            error = str(error)

        return cls(
            acct=str(data.get("acct", "")),
            acct_link=str(data.get("acct_link", "")),
            tweets=tuple(DisplayTweet.from_dict(t) for t in raw_tweets),
            error=error,
        )
