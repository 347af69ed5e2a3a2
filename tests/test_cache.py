"""Tests for the cache freshness gate and the JSON cache file."""

import json
import os
from pathlib import Path

import pytest

from tweet_feed.cache import FeedCache, is_fresh
from tweet_feed.models import DisplayTweet, FeedResult


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def cache_file(tmp_path: Path) -> Path:
    return tmp_path / "tweets.json"


@pytest.fixture
def cache(cache_file: Path) -> FeedCache:
    return FeedCache(cache_file, lifespan=180)


@pytest.fixture
def sample_result() -> FeedResult:
    return FeedResult(
        acct="bob",
        acct_link="https://twitter.com/bob",
        tweets=(DisplayTweet(desc="hello", time="5 minutes ago"),),
    )


def set_mtime(path: Path, mtime: float) -> None:
    os.utime(path, (mtime, mtime))


# =============================================================================
# Test: Freshness gate
# =============================================================================


class TestIsFresh:
    """Tests for the is_fresh function."""

    def test_no_cache_is_never_fresh(self):
        assert is_fresh(None, now=1000.0, lifespan=180) is False

    def test_no_cache_with_huge_lifespan(self):
        assert is_fresh(None, now=1000.0, lifespan=10**9) is False

    @pytest.mark.parametrize(
        "last_modified,expected",
        [
            (1000.0, True),  # written just now
            (821.0, True),  # 179 seconds old
            (820.5, True),
            (820.0, False),  # exactly lifespan old
            (500.0, False),
        ],
    )
    def test_strictly_younger_than_lifespan(self, last_modified, expected):
        assert is_fresh(last_modified, now=1000.0, lifespan=180) is expected

    def test_zero_lifespan_never_fresh_for_past_writes(self):
        assert is_fresh(999.0, now=1000.0, lifespan=0) is False


# =============================================================================
# Test: Cache file
# =============================================================================


class TestFeedCacheFreshness:
    """Tests for FeedCache.last_modified / is_fresh / age."""

    def test_missing_file(self, cache: FeedCache):
        assert cache.last_modified() is None
        assert cache.age() is None
        assert cache.is_fresh() is False

    def test_recent_file_is_fresh(self, cache: FeedCache, cache_file: Path, sample_result: FeedResult):
        cache.save(sample_result)
        set_mtime(cache_file, 10_000.0)

        assert cache.last_modified() == 10_000.0
        assert cache.is_fresh(now=10_100.0) is True
        assert cache.age(now=10_100.0) == 100.0

    def test_old_file_is_stale(self, cache: FeedCache, cache_file: Path, sample_result: FeedResult):
        cache.save(sample_result)
        set_mtime(cache_file, 10_000.0)

        assert cache.is_fresh(now=10_180.0) is False

    def test_defaults_from_config(self):
        from tweet_feed.config import CACHE_FILE, CACHE_LIFESPAN

        default = FeedCache()
        assert default.cache_file == CACHE_FILE
        assert default.lifespan == CACHE_LIFESPAN

    def test_unstattable_file_is_a_miss(self, cache: FeedCache, cache_file: Path, sample_result: FeedResult, monkeypatch):
        """Errors other than a missing file are logged and read as no cache."""
        cache.save(sample_result)
        original_stat = Path.stat

        def denied_stat(self, *args, **kwargs):
            if self == cache_file:
                raise PermissionError(13, "Permission denied", str(self))
            return original_stat(self, *args, **kwargs)

        monkeypatch.setattr(Path, "stat", denied_stat)

        assert cache.last_modified() is None
        assert cache.age() is None
        assert cache.is_fresh() is False


class TestFeedCacheReadWrite:
    """Tests for FeedCache.load / save / clear."""

    def test_save_then_load_round_trip(self, cache: FeedCache, sample_result: FeedResult):
        assert cache.save(sample_result) is True
        assert cache.load() == sample_result

    def test_file_is_pretty_printed_json(self, cache: FeedCache, cache_file: Path, sample_result: FeedResult):
        cache.save(sample_result)

        text = cache_file.read_text(encoding="utf-8")
        assert text == json.dumps(sample_result.to_dict(), indent=2, ensure_ascii=False)
        assert json.loads(text)["error"] is False

    def test_save_overwrites_instead_of_appending(self, cache: FeedCache, cache_file: Path, sample_result: FeedResult):
        cache.save(sample_result)
        newer = FeedResult(acct="bob", acct_link="https://twitter.com/bob", tweets=(DisplayTweet("new", "1 hr ago"),))
        cache.save(newer)

        assert cache.load() == newer
        # A single document, parseable as-is
        assert json.loads(cache_file.read_text(encoding="utf-8"))["tweets"] == [{"desc": "new", "time": "1 hr ago"}]

    def test_no_temp_file_left_behind(self, cache: FeedCache, tmp_path: Path, sample_result: FeedResult):
        cache.save(sample_result)
        assert sorted(p.name for p in tmp_path.iterdir()) == ["tweets.json"]

    def test_save_creates_parent_directory(self, tmp_path: Path, sample_result: FeedResult):
        nested = FeedCache(tmp_path / "a" / "b" / "tweets.json")
        assert nested.save(sample_result) is True
        assert nested.load() == sample_result

    def test_save_failure_returns_false(self, tmp_path: Path, sample_result: FeedResult):
        """An unwritable location is logged and reported, not raised."""
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("x")
        broken = FeedCache(blocker / "tweets.json")

        assert broken.save(sample_result) is False
        assert broken.load() is None

    def test_load_missing_file(self, cache: FeedCache):
        assert cache.load() is None

    def test_load_corrupt_json(self, cache: FeedCache, cache_file: Path):
        cache_file.write_text("{not json", encoding="utf-8")
        assert cache.load() is None

    def test_load_non_object_json(self, cache: FeedCache, cache_file: Path):
        cache_file.write_text("[1, 2, 3]", encoding="utf-8")
        assert cache.load() is None

    @pytest.mark.parametrize(
        "document",
        [
            '{"tweets": ["x"]}',
            '{"tweets": [null]}',
            '{"tweets": 5}',
            '{"tweets": {"desc": "a", "time": "b"}}',
        ],
    )
    def test_load_wrong_shape_document(self, cache: FeedCache, cache_file: Path, document: str):
        """JSON that parses but does not hold a tweet list is treated as a miss."""
        cache_file.write_text(document, encoding="utf-8")
        assert cache.load() is None

    def test_load_error_document(self, cache: FeedCache, cache_file: Path):
        cache_file.write_text('{"error": "No connection."}', encoding="utf-8")
        loaded = cache.load()

        assert loaded is not None
        assert loaded.error == "No connection."

    def test_clear(self, cache: FeedCache, cache_file: Path, sample_result: FeedResult):
        cache.save(sample_result)

        assert cache.clear() is True
        assert not cache_file.exists()
        assert cache.clear() is False
