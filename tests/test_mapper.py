import pytest

from config import GAME_FALLBACK
from mapper import build_level_record, map_game, normalize_rating, parse_contributors
from schemas import RawLevel


@pytest.mark.parametrize(
    "game, expected",
    [
        ("Super Mario Construct", 0),
        ("Yoshi's Fabrication Station", 1),
        ("Super Mario 127", 2),
        ("Some Other Game", GAME_FALLBACK),
        ("", GAME_FALLBACK),
        (None, GAME_FALLBACK),
    ],
)
def test_map_game(game, expected):
    assert map_game(game) == expected


def test_normalize_rating():
    assert normalize_rating("80%") == 4.0
    assert normalize_rating("0%") == 0.0
    assert normalize_rating(" 95% ") == 4.75


def test_normalize_rating_unparseable():
    assert normalize_rating("NaN%") is None
    assert normalize_rating("inf%") is None
    assert normalize_rating("-Infinity%") is None
    assert normalize_rating("N/A") is None
    assert normalize_rating(None) is None
    assert normalize_rating("") is None


def test_parse_contributors():
    assert parse_contributors("Alice, Bob") == ["Alice", "Bob"]
    assert parse_contributors("No additional contributors.") == []
    assert parse_contributors(None) == []


@pytest.fixture
def raw_level():
    return RawLevel(
        name="Castle Run",
        code="v2|0,1",
        rating="60%",
        game="Super Mario 127",
        difficulty="Easy",
        published="March 3, 2021",
        description="<b>Hi</b>",
        contributors="Alice,  Bob ",
        thumbnail="https://img.example.com/a.png",
    )


def test_build_lss_record(raw_level):
    record = build_level_record(raw_level, "lss-42", schema="lss")

    assert record.author == "lss-42"
    assert record.name == "Castle Run"
    assert record.code == "v2|0,1"
    assert record.rating == 3.0
    assert record.game == 2
    assert record.contributors == ["Alice", "Bob"]
    assert record.thumbnail == "https://img.example.com/a.png"
    assert record.tags == [""]
    assert record.status == "Public"
    assert record.plays == record.rates == record.raters == record.commenters == []
    assert record.postDate is None


def test_build_legacy_record(raw_level):
    record = build_level_record(raw_level, "lss-42", schema="legacy")

    assert record.rating == "60%"
    assert record.postDate == "March 3, 2021"
    assert record.contributors == []
    assert record.thumbnail == ""
    assert record.tags == []


def test_build_record_from_empty_page():
    record = build_level_record(RawLevel(), "lss-42")

    assert record.author == "lss-42"
    assert record.game == GAME_FALLBACK
    assert record.rating is None
    assert record.contributors == []
    assert record.thumbnail == ""
