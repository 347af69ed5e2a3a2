"""Feed error kinds.

These are raised by the Twitter client and caught by the feed service, which
reports them in-band through ``FeedResult.error``. Callers of the service never
see them raised.
"""


class FeedError(Exception):
    """A fetch that produced no displayable tweets. ``str(err)`` is the display message."""

    default_message = "Unable to load tweets."

    def __init__(self, message: str = ""):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return self.args[0]


class NoConnectionError(FeedError):
    """The Twitter API could not be reached, or no client could be built."""

    default_message = "No connection."


class NoTweetsError(FeedError):
    """The timeline request succeeded but returned zero tweets."""

    default_message = "No tweets to display."
