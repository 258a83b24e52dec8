"""
Configuration settings for the Level Palace -> Level Share Square converter.
Centralizes all configurable parameters.
"""
import os
from dataclasses import dataclass, field


# ============================================================
# LEVEL PALACE SETTINGS
# ============================================================

# Site root; detail links in level cards are relative to it
LP_BASE_URL = "https://www.levelpalace.com/"

# Listing endpoint and the fixed filters applied to every listing request
LP_LEVELS_PATH = "levels"
LP_LISTING_PARAMS = {
    "level_class": "All",
    "sort": "newest",
    "difficulty": "all",
}


# ============================================================
# FETCHING SETTINGS
# ============================================================

# Delay before every request (rate limiting, seconds)
WAIT_TIME = 1.0

# Timeout for fetching pages (seconds)
FETCH_TIMEOUT = 15

# User agent for requests
USER_AGENT = "lp-helper"


# ============================================================
# LEVEL SHARE SQUARE SCHEMA
# ============================================================

# "lss" normalizes ratings and stamps postDate at save time,
# "legacy" passes the rating and publish date through as text
SCHEMA_VARIANTS = ("lss", "legacy")
DEFAULT_SCHEMA = "lss"

GAME_IDS = {
    "Super Mario Construct": 0,
    "Yoshi's Fabrication Station": 1,
    "Super Mario 127": 2,
}

# Any game name not in GAME_IDS
GAME_FALLBACK = 3

LEVEL_STATUS = "Public"

NO_CONTRIBUTORS_TEXT = "No additional contributors."
NO_LEVELS_TEXT = "No levels found."


# ============================================================
# OUTPUT SETTINGS
# ============================================================

# Per-user folders are created under this directory
OUTPUT_ROOT = "."

LEVEL_FILENAME = "level-{num}.json"


@dataclass
class ConverterSettings:
    """Runtime settings handed to the crawler and writer"""
    base_url: str = LP_BASE_URL
    user_agent: str = USER_AGENT
    wait_time: float = WAIT_TIME
    timeout: int = FETCH_TIMEOUT
    output_root: str = OUTPUT_ROOT
    schema: str = DEFAULT_SCHEMA
    listing_params: dict = field(default_factory=lambda: dict(LP_LISTING_PARAMS))


def load_settings(**overrides) -> ConverterSettings:
    """
    Build settings from defaults, then LP_* environment variables, then
    explicit overrides (None values are ignored).
    """
    settings = ConverterSettings(
        base_url=os.environ.get("LP_BASE_URL", LP_BASE_URL),
        user_agent=os.environ.get("LP_USER_AGENT", USER_AGENT),
        wait_time=float(os.environ.get("LP_WAIT_TIME", WAIT_TIME)),
        timeout=int(os.environ.get("LP_TIMEOUT", FETCH_TIMEOUT)),
    )
    for key, value in overrides.items():
        if value is not None:
            setattr(settings, key, value)
    return settings
