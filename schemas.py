"""
Pydantic schemas for converted levels.
LevelRecord mirrors the Level Share Square import format - uses camelCase
for JSON output. RawLevel and ListingPage are intermediate parse results.
"""
from typing import List, Optional, Union
from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime


# ============================================================
# PARSED LEVEL PALACE PAGES
# ============================================================

class ListingPage(BaseModel):
    """One page of a creator's level listing"""
    no_levels: bool = False
    level_urls: List[str] = Field(default_factory=list)
    has_next_page: bool = False


class RawLevel(BaseModel):
    """Fields scraped from a level detail page, all optional"""
    name: Optional[str] = None
    code: Optional[str] = None
    rating: Optional[str] = None
    game: Optional[str] = None
    difficulty: Optional[str] = None
    published: Optional[str] = None
    description: Optional[str] = None
    contributors: Optional[str] = None
    thumbnail: Optional[str] = None


# ============================================================
# LEVEL SHARE SQUARE RECORD
# ============================================================

class LevelRecord(BaseModel):
    """A single level, ready to be written as an LSS import file"""
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    author: str
    code: Optional[str] = None
    description: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    contributors: List[str] = Field(default_factory=list)
    difficulty: Optional[str] = None
    game: int
    thumbnail: str = ""
    status: str = "Public"
    plays: List[str] = Field(default_factory=list)
    rates: List[str] = Field(default_factory=list)
    raters: List[str] = Field(default_factory=list)
    commenters: List[str] = Field(default_factory=list)
    rating: Optional[Union[float, str]] = None
    postDate: Optional[Union[datetime, str]] = None
