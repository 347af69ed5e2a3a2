"""Turn plain tweet text into HTML with linked URLs, @mentions and #hashtags.

The three substitutions run in a fixed order:
1. Bare http(s) URLs link to themselves
2. @mentions link to the user's profile
3. #hashtags link to a hashtag search

Mentions and hashtags only match at the start of the text or after
whitespace, so the ``@``/``#`` inside markup inserted by an earlier pass is not
matched again. Adjacent or overlapping matches (a URL ending in ``#frag``
followed by a tag, say) are resolved only by this ordering. Text outside a
match is left as-is, including any HTML special characters.
"""

import re

from tweet_feed.config import PROFILE_URL_TEMPLATE, SEARCH_URL_TEMPLATE

# =============================================================================
# Regex patterns
# =============================================================================

URL_PATTERN = re.compile(r"(https?://\S+)")

# Group 1 keeps the boundary (start of text or the whitespace character)
MENTION_PATTERN = re.compile(r"(^|\s)@(\w+)")
HASHTAG_PATTERN = re.compile(r"(^|\s)#(\w+)")


def _anchor(href: str, label: str) -> str:
    return f'<a href="{href}">{label}</a>'


def linkify(
    text: str,
    profile_url: str = PROFILE_URL_TEMPLATE,
    search_url: str = SEARCH_URL_TEMPLATE,
) -> str:
    """
    Wrap URLs, mentions and hashtags in anchor tags.

    Args:
        text: Raw tweet text
        profile_url: Link target for mentions, with a ``{handle}`` placeholder
        search_url: Link target for hashtags, with a ``{tag}`` placeholder

    Returns:
        Text with each match replaced by an ``<a>`` element
    """
    if not text:
        return text

    text = URL_PATTERN.sub(lambda m: _anchor(m.group(1), m.group(1)), text)
    text = MENTION_PATTERN.sub(
        lambda m: m.group(1) + _anchor(profile_url.format(handle=m.group(2)), f"@{m.group(2)}"),
        text,
    )
    text = HASHTAG_PATTERN.sub(
        lambda m: m.group(1) + _anchor(search_url.format(tag=m.group(2)), f"#{m.group(2)}"),
        text,
    )
    return text
