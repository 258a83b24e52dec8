"""
Mapper module - converts scraped Level Palace fields into Level Share Square records.
Pure functions; malformed input never raises, it maps to empty or None values.
"""
import math
from typing import List, Optional

from config import GAME_IDS, GAME_FALLBACK, LEVEL_STATUS, NO_CONTRIBUTORS_TEXT
from schemas import LevelRecord, RawLevel


def map_game(game: Optional[str]) -> int:
    """Map a Level Palace game name to its LSS game id"""
    return GAME_IDS.get((game or "").strip(), GAME_FALLBACK)


def normalize_rating(rating: Optional[str]) -> Optional[float]:
    """
    Convert a percentage rating ("80%") to the 0-5 star scale (4.0).
    Returns None if the rating is missing or not a number.
    """
    if not rating:
        return None
    try:
        value = float(rating.strip().replace("%", ""))
    except ValueError:
        return None
    # "NaN%" and "inf%" parse as floats
    if not math.isfinite(value):
        return None
    return value / 20.0


def parse_contributors(contributors: Optional[str]) -> List[str]:
    """Split a comma separated contributor line into names"""
    if not contributors or contributors.strip() == NO_CONTRIBUTORS_TEXT:
        return []
    return [name.strip() for name in contributors.split(",") if name.strip()]


def build_level_record(raw: RawLevel, author_id: str, schema: str = "lss") -> LevelRecord:
    """
    Build a LevelRecord from a scraped level.

    "lss" normalizes the rating, keeps contributors and thumbnail, and leaves
    postDate to be stamped when the file is saved. "legacy" passes the rating
    and publish date through as text and drops contributors and thumbnail.
    """
    if schema == "legacy":
        return LevelRecord(
            name=raw.name,
            author=author_id,
            code=raw.code,
            description=raw.description or "",
            tags=[],
            contributors=[],
            difficulty=raw.difficulty,
            game=map_game(raw.game),
            thumbnail="",
            status=LEVEL_STATUS,
            rating=raw.rating,
            postDate=raw.published,
        )

    return LevelRecord(
        name=raw.name,
        author=author_id,
        code=raw.code,
        description=raw.description,
        tags=[""],
        contributors=parse_contributors(raw.contributors),
        difficulty=raw.difficulty,
        game=map_game(raw.game),
        thumbnail=raw.thumbnail or "",
        status=LEVEL_STATUS,
        rating=normalize_rating(raw.rating),
        postDate=None,
    )
