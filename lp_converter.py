"""
Level Palace -> Level Share Square converter - Main Pipeline

Downloads every level of a Level Palace user and saves each one as a
JSON file that can be imported into Level Share Square:

    python lp_converter.py <lp_username> <lss_user_id>
    python lp_converter.py "User With Spaces" <lss_user_id> --delay 2

Options:
    --output DIR        Parent folder for the per-user output folder (default: .)
    --schema NAME       lss (default) or legacy output format
    --delay SECONDS     Delay before every request (default: 1.0)
    --timeout SECONDS   Request timeout (default: 15)
"""
import argparse
import json
import sys
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Tuple
from urllib.parse import quote, urlencode, urljoin

import requests
from dotenv import load_dotenv

from config import (
    LEVEL_FILENAME,
    LP_LEVELS_PATH,
    SCHEMA_VARIANTS,
    ConverterSettings,
    load_settings,
)
from fetcher import FetchError, FetchResult, create_session, fetch_page
from mapper import build_level_record
from parser import parse_level_page, parse_listing_page
from schemas import LevelRecord, RawLevel


USAGE_MESSAGE = "Please supply a Level Palace username and Level Share Square user ID."

Sleep = Callable[[float], None]


@dataclass
class CrawlResult:
    """Levels collected from all listing pages of one user"""
    levels: List[LevelRecord] = field(default_factory=list)
    pages_crawled: int = 0
    empty: bool = False


@dataclass
class SaveResult:
    """Outcome of writing the level files"""
    output_dir: Path
    saved: List[Path] = field(default_factory=list)
    failed: List[Path] = field(default_factory=list)


def resolve_username(username: str) -> str:
    """Strip one layer of surrounding double quotes (usernames with spaces)"""
    if len(username) >= 2 and username.startswith('"') and username.endswith('"'):
        return username[1:-1]
    return username


def listing_url(username: str, page: int, settings: ConverterSettings) -> str:
    """URL of one page of the user's levels, newest first"""
    params = {"creator": username, **settings.listing_params, "page": page}
    return urljoin(settings.base_url, LP_LEVELS_PATH) + "?" + urlencode(params, quote_via=quote)


def fetch_level(
    session: requests.Session,
    url: str,
    settings: ConverterSettings,
    sleep: Sleep = time.sleep,
) -> Tuple[RawLevel, FetchResult]:
    """Fetch and parse one level detail page"""
    sleep(settings.wait_time)
    fetched = fetch_page(session, url, timeout=settings.timeout)
    return parse_level_page(fetched.html), fetched


def crawl_levels(
    username: str,
    author_id: str,
    settings: ConverterSettings,
    session: requests.Session,
    sleep: Sleep = time.sleep,
) -> CrawlResult:
    """
    Walk every listing page of the user and convert each level card.

    1. Fetch listing page N
    2. For each level card: Fetch detail page -> Parse -> Map
    3. Continue while the page shows a "next page" arrow

    Raises FetchError if any page cannot be fetched; nothing collected so far
    is returned in that case.
    """
    result = CrawlResult()
    current_page = 1
    has_next_page = True

    while has_next_page:
        sleep(settings.wait_time)

        fetched = fetch_page(session, listing_url(username, current_page, settings), timeout=settings.timeout)
        listing = parse_listing_page(fetched.html, base_url=settings.base_url)
        print(f"Searching page {current_page} of LP levels... ({fetched.fetch_time_ms}ms)")

        if listing.no_levels:
            if current_page == 1:
                print("No levels were found!")
                result.empty = True
            else:
                print(f"  ✗ Page {current_page} reported no levels, keeping {len(result.levels)} converted so far")
            break

        result.pages_crawled = current_page

        for url in listing.level_urls:
            raw, fetched = fetch_level(session, url, settings, sleep=sleep)
            level = build_level_record(raw, author_id, schema=settings.schema)
            result.levels.append(level)
            print(f'  ✓ Converted level "{level.name}" ({fetched.fetch_time_ms}ms)')

        has_next_page = listing.has_next_page
        if has_next_page:
            current_page += 1

    return result


def save_levels(
    levels: List[LevelRecord],
    username: str,
    settings: ConverterSettings,
    now: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
) -> SaveResult:
    """
    Save each level as <output_root>/<username>/level-<n>.json.

    The "lss" format is written oldest level first with postDate stamped at
    save time; "legacy" keeps the crawl order (newest first).
    A failed write is reported and skipped; the numbering stays contiguous.
    """
    output_dir = Path(settings.output_root) / username
    result = SaveResult(output_dir=output_dir)

    if settings.schema == "lss":
        ordered = list(reversed(levels))
    else:
        ordered = list(levels)

    for level_num, level in enumerate(ordered, start=1):
        if settings.schema == "lss":
            level = level.model_copy(update={"postDate": now()})

        filepath = output_dir / LEVEL_FILENAME.format(num=level_num)
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(level.model_dump(mode="json", exclude_none=True), f, indent=2, ensure_ascii=False)
            result.saved.append(filepath)
            print(f'  ✓ Saved "{level.name}" -> {filepath.name}')
        except OSError as e:
            result.failed.append(filepath)
            print(f'  ✗ Failed to save "{level.name}": {e}')

    return result


def run_converter(username: str, author_id: str, settings: ConverterSettings) -> int:
    """
    Main pipeline execution.

    Crawl all levels, then write them out. Returns the process exit code.
    """
    print("=" * 60)
    print("LEVEL PALACE -> LEVEL SHARE SQUARE CONVERTER")
    print("=" * 60)
    print(f"LP user: {username}")
    print(f"LSS author: {author_id}")
    print(f"Format: {settings.schema}")
    print(f"Delay: {settings.wait_time}s")
    print("=" * 60)

    run_start = datetime.now()

    print(f'\nBeginning conversion process of levels for user "{username}"...')
    try:
        with create_session(settings) as session:
            crawl = crawl_levels(username, author_id, settings, session=session)
    except FetchError as e:
        print(f"  ✗ {e}")
        print("Conversion aborted, no levels were saved.")
        return 1

    if crawl.empty:
        return 0
    print("Finished converting levels!")

    print("\nSaving levels as JSON for LSS...")
    saved = save_levels(crawl.levels, username, settings)
    print("Finished saving levels!")

    run_duration = (datetime.now() - run_start).total_seconds()

    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print(f"Duration: {run_duration:.1f}s")
    print(f"Pages: {crawl.pages_crawled} | Levels: {len(crawl.levels)}")
    print(f"Saved: {len(saved.saved)} | Errors: {len(saved.failed)}")
    print(f"Output folder: {saved.output_dir}")
    print("=" * 60)

    if saved.failed:
        return 1

    print(f'All levels for user "{username}" have successfully been converted and saved!')
    return 0


def build_parser() -> argparse.ArgumentParser:
    # Positionals are read from the leftover arguments so usernames starting
    # with "-" are accepted and anything after the author ID is ignored
    parser = argparse.ArgumentParser(
        usage="%(prog)s [options] username author_id",
        description="Convert a Level Palace user's levels into Level Share Square JSON files",
        epilog=(
            "username: Level Palace username (wrap in double quotes if it has spaces). "
            "author_id: Level Share Square user ID written as the author of every level."
        ),
        allow_abbrev=False,
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Parent folder for the per-user output folder (default: .)"
    )
    parser.add_argument(
        "--schema",
        choices=SCHEMA_VARIANTS,
        default=None,
        help="Output format: lss (normalized rating, save-time postDate) or legacy (default: lss)"
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Delay before every request in seconds (default: 1.0)"
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=None,
        help="Request timeout in seconds (default: 15)"
    )
    return parser


def main(argv=None) -> int:
    load_dotenv()

    parser = build_parser()
    args, positionals = parser.parse_known_args(argv)

    if len(positionals) < 2 or not positionals[0] or not positionals[1]:
        print(USAGE_MESSAGE)
        parser.print_usage()
        return 2
    username, author_id = positionals[0], positionals[1]

    settings = load_settings(
        output_root=args.output,
        schema=args.schema,
        wait_time=args.delay,
        timeout=args.timeout,
    )

    return run_converter(resolve_username(username), author_id, settings)


if __name__ == "__main__":
    sys.exit(main())
