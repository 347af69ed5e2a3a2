"""Command-line interface for tweet_feed.

Provides subcommands:
- show: print the feed (cached while fresh)
- status: show cache location, age and freshness
- clear-cache: delete the cache file
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from tweet_feed import __version__
from tweet_feed.cache import FeedCache
from tweet_feed.config import (
    CACHE_FILE,
    CACHE_LIFESPAN,
    DATE_FORMAT,
    DISPLAY_TIMEZONE,
    IGNORE_REPLIES,
    TWEETS_TO_DISPLAY,
    TWITTER_HANDLE,
)
from tweet_feed.feed import FeedService


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _cache_from_args(args: argparse.Namespace) -> FeedCache:
    return FeedCache(Path(args.cache_file), args.lifespan)


def cmd_show(args: argparse.Namespace) -> int:
    """Print the feed."""
    setup_logging(args.verbose)

    try:
        tz = ZoneInfo(args.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        print(f"Unknown timezone: {args.timezone}", file=sys.stderr)
        return 2

    service = FeedService(
        handle=args.handle,
        cache=_cache_from_args(args),
        tweets_to_display=args.count,
        ignore_replies=not args.include_replies,
        date_format=args.date_format,
        relative_time=not args.absolute_time,
        tz=tz,
    )
    result = service.get_feed()

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return 0 if result.ok else 1

    print(f"\n@{result.acct}  {result.acct_link}")
    print("=" * 60)
    if not result.ok:
        print(f"  {result.error}")
        return 1

    for tweet in result.tweets:
        print(f"  [{tweet.time}]")
        print(f"  {tweet.desc}")
        print("-" * 60)

    return 0


def cmd_status(args: argparse.Namespace) -> int:
    """Show cache status."""
    setup_logging(args.verbose)

    cache = _cache_from_args(args)
    age = cache.age()

    print(f"Cache file:  {cache.cache_file}")
    print(f"Lifespan:    {cache.lifespan:g}s")
    if age is None:
        print("Age:         (no cache)")
        print("Fresh:       no")
        return 0

    print(f"Age:         {age:.0f}s")
    print(f"Fresh:       {'yes' if cache.is_fresh() else 'no'}")

    cached = cache.load()
    if cached is None:
        print("Contents:    unreadable")
    elif cached.ok:
        print(f"Contents:    {len(cached.tweets)} tweets for @{cached.acct}")
    else:
        print(f"Contents:    error: {cached.error}")
    return 0


def cmd_clear_cache(args: argparse.Namespace) -> int:
    """Delete the cache file."""
    setup_logging(args.verbose)

    cache = FeedCache(Path(args.cache_file))
    if cache.clear():
        print(f"Removed {cache.cache_file}")
    else:
        print(f"No cache at {cache.cache_file}")
    return 0


def _add_cache_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--cache-file", default=str(CACHE_FILE), help=f"Cache file (default: {CACHE_FILE})")
    parser.add_argument(
        "--lifespan", type=float, default=CACHE_LIFESPAN, help=f"Cache lifespan in seconds (default: {CACHE_LIFESPAN})"
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="tweet-feed",
        description="Show an account's recent tweets, cached to a JSON file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show the configured account's feed
  tweet-feed show

  # Raw JSON with absolute dates
  tweet-feed show --handle nasa --absolute-time --json

  # Inspect or drop the cache
  tweet-feed status
  tweet-feed clear-cache
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    show_parser = subparsers.add_parser("show", help="Print the feed")
    show_parser.add_argument("--handle", default=TWITTER_HANDLE, help=f"Twitter username (default: {TWITTER_HANDLE})")
    show_parser.add_argument(
        "--count", type=int, default=TWEETS_TO_DISPLAY, help=f"Tweets to request (default: {TWEETS_TO_DISPLAY})"
    )
    show_parser.add_argument(
        "--include-replies",
        action="store_true",
        default=not IGNORE_REPLIES,
        help="Include replies in the feed",
    )
    show_parser.add_argument("--absolute-time", action="store_true", help="Always show calendar dates")
    show_parser.add_argument(
        "--date-format", default=DATE_FORMAT, help="strftime pattern, %%O is the ordinal day (default: %(default)s)"
    )
    show_parser.add_argument(
        "--timezone", default=str(DISPLAY_TIMEZONE), help=f"Display timezone (default: {DISPLAY_TIMEZONE})"
    )
    show_parser.add_argument("--json", action="store_true", help="Print the cache JSON document")
    _add_cache_arguments(show_parser)
    show_parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
    show_parser.set_defaults(func=cmd_show)

    status_parser = subparsers.add_parser("status", help="Show cache status")
    _add_cache_arguments(status_parser)
    status_parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
    status_parser.set_defaults(func=cmd_status)

    clear_parser = subparsers.add_parser("clear-cache", help="Delete the cache file")
    clear_parser.add_argument("--cache-file", default=str(CACHE_FILE), help=f"Cache file (default: {CACHE_FILE})")
    clear_parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
    clear_parser.set_defaults(func=cmd_clear_cache)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
