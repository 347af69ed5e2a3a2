"""Single-file JSON cache for the formatted feed.

Freshness is decided from the file's modification time alone. Writes go to a
sibling temp file that is then renamed over the cache, so a reader never sees
a half-written document. Two processes can still both miss and both fetch.
"""

import json
import logging
import os
import time
from pathlib import Path
from typing import Optional

from tweet_feed.config import CACHE_FILE, CACHE_LIFESPAN
from tweet_feed.models import FeedResult

logger = logging.getLogger(__name__)


def is_fresh(last_modified: Optional[float], now: float, lifespan: float) -> bool:
    """
    Decide whether a cached document can be reused.

    Args:
        last_modified: Cache mtime in epoch seconds, or None if there is no cache
        now: Current time in epoch seconds
        lifespan: Maximum cache age in seconds

    Returns:
        True iff a cache exists and ``now - lifespan < last_modified``
    """
    if last_modified is None:
        return False
    return now - lifespan < last_modified


class FeedCache:
    """
    The cache file holding one serialized FeedResult.

    Unreadable or corrupt files are treated as a miss rather than an error.
    """

    def __init__(self, cache_file: Optional[Path] = None, lifespan: Optional[float] = None):
        """
        Initialize the feed cache.

        Args:
            cache_file: Path to cache file (default: from config)
            lifespan: Seconds a cached feed stays fresh (default: from config)
        """
        self.cache_file = Path(cache_file) if cache_file is not None else CACHE_FILE
        self.lifespan = lifespan if lifespan is not None else CACHE_LIFESPAN

    @property
    def _temp_file(self) -> Path:
        return self.cache_file.with_name(self.cache_file.name + ".tmp")

    def last_modified(self) -> Optional[float]:
        """Cache file mtime in epoch seconds, or None if there is no cache file."""
        try:
            return self.cache_file.stat().st_mtime
        except (FileNotFoundError, NotADirectoryError):
            return None
        except OSError as e:
            logger.warning(f"Failed to stat cache {self.cache_file}: {e}")
            return None

    def is_fresh(self, now: Optional[float] = None) -> bool:
        """Whether the cache file exists and is younger than the lifespan."""
        now = time.time() if now is None else now
        return is_fresh(self.last_modified(), now, self.lifespan)

    def age(self, now: Optional[float] = None) -> Optional[float]:
        """Seconds since the cache was written, or None if there is no cache file."""
        modified = self.last_modified()
        if modified is None:
            return None
        now = time.time() if now is None else now
        return now - modified

    def load(self) -> Optional[FeedResult]:
        """Read the cached feed, or None if it is missing or unreadable."""
        try:
            with open(self.cache_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load cache from {self.cache_file}: {e}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"Ignoring cache at {self.cache_file}: expected a JSON object")
            return None

        try:
            return FeedResult.from_dict(data)
        except (AttributeError, TypeError, ValueError) as e:
            logger.warning(f"Ignoring malformed cache at {self.cache_file}: {e}")
            return None

    def save(self, result: FeedResult) -> bool:
        """
        Replace the cache file with ``result``.

        Returns:
            True if the cache was written, False if the write failed
        """
        payload = json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
        temp_file = self._temp_file
        try:
            self.cache_file.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_file, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(temp_file, self.cache_file)
        except OSError as e:
            logger.error(f"Failed to save cache to {self.cache_file}: {e}")
            if temp_file.exists():
                temp_file.unlink()
            return False

        logger.debug(f"Saved feed cache to {self.cache_file}")
        return True

    def clear(self) -> bool:
        """Delete the cache file. Returns True if there was one."""
        try:
            self.cache_file.unlink()
        except FileNotFoundError:
            return False
        logger.info(f"Removed feed cache {self.cache_file}")
        return True
