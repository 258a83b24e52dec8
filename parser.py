"""
Parser module - extracts level data from Level Palace HTML.
Uses BeautifulSoup to read listing pages (level cards and pagination)
and level detail pages (stats, description pane, code).
"""
from typing import Callable, Dict, List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from config import LP_BASE_URL, NO_CONTRIBUTORS_TEXT, NO_LEVELS_TEXT
from schemas import ListingPage, RawLevel


NEXT_PAGE_ICON = "chevron_right"


# ============================================================
# LISTING PAGES
# ============================================================

def has_no_levels(soup: BeautifulSoup) -> bool:
    """True when the listing shows the "No levels found." notice"""
    for container in soup.select("div.table-container"):
        if NO_LEVELS_TEXT in container.get_text():
            return True
    return False


def extract_level_links(soup: BeautifulSoup, base_url: str = LP_BASE_URL) -> List[str]:
    """Absolute detail-page URLs of every level card, in page order"""
    links = []
    for card in soup.select("div.card-blocks div.card-item"):
        anchor = card.select_one("a.card-title")
        if anchor is None or not anchor.get("href"):
            continue
        links.append(urljoin(base_url, anchor["href"]))
    return links


def has_next_page(soup: BeautifulSoup) -> bool:
    """Look for the "next page" arrow among the enabled pagination buttons"""
    for button in soup.select("ul.pagination li:not(.disabled):not(.active)"):
        icon = button.select_one("a i.material-icons")
        if icon is not None and icon.get_text().strip() == NEXT_PAGE_ICON:
            return True
    return False


def parse_listing_page(html: str, base_url: str = LP_BASE_URL) -> ListingPage:
    soup = BeautifulSoup(html, "html.parser")

    if has_no_levels(soup):
        return ListingPage(no_levels=True)

    return ListingPage(
        level_urls=extract_level_links(soup, base_url),
        has_next_page=has_next_page(soup),
    )


# ============================================================
# LEVEL DETAIL PAGES
# ============================================================

def pop_label(row: Tag) -> None:
    """Remove the bold label so only the value is left in the row"""
    label = row.find("strong")
    if label is not None:
        label.decompose()


def row_text(row: Tag) -> str:
    pop_label(row)
    return row.get_text().strip()


def read_rating(row: Tag, fields: Dict[str, str]) -> None:
    fields["rating"] = row_text(row)


def read_game(row: Tag, fields: Dict[str, str]) -> None:
    pop_label(row)
    link = row.find("a")
    fields["game"] = (link or row).get_text().strip()


def read_difficulty(row: Tag, fields: Dict[str, str]) -> None:
    fields["difficulty"] = row_text(row)


def read_published(row: Tag, fields: Dict[str, str]) -> None:
    fields["published"] = row_text(row)


def read_description(row: Tag, fields: Dict[str, str]) -> None:
    # Keep the inner markup; only the first <strong> is the label
    pop_label(row)
    fields["description"] = row.decode_contents().strip()


def read_contributors(row: Tag, fields: Dict[str, str]) -> None:
    text = row_text(row)
    if text != NO_CONTRIBUTORS_TEXT:
        fields["contributors"] = text


RowReader = Callable[[Tag, Dict[str, str]], None]

STAT_READERS: Dict[str, RowReader] = {
    "Rating:": read_rating,
    "Game:": read_game,
    "Difficulty:": read_difficulty,
    "Published:": read_published,
}

DESCRIPTION_READERS: Dict[str, RowReader] = {
    "Description:": read_description,
    "Contributors:": read_contributors,
}


def row_label(row: Tag) -> str:
    label = row.find("strong")
    return label.get_text().strip() if label is not None else ""


def read_rows(rows: List[Tag], readers: Dict[str, RowReader], fields: Dict[str, str]) -> None:
    """Dispatch each row on its label; unknown labels are skipped"""
    for row in rows:
        reader = readers.get(row_label(row))
        if reader is not None:
            reader(row, fields)


def extract_thumbnail(row: Tag) -> Optional[str]:
    image = row.select_one("div#level-images-slider ul.slides li img")
    if image is None:
        return None
    return image.get("src")


def extract_name(soup: BeautifulSoup) -> Optional[str]:
    title = soup.select_one("div.level-section p.brand-logo")
    return title.get_text().strip() if title is not None else None


def extract_code(soup: BeautifulSoup) -> Optional[str]:
    textarea = soup.select_one("div.level-code textarea.level-code-textarea")
    return textarea.get_text() if textarea is not None else None


def parse_level_page(html: str) -> RawLevel:
    """
    Main detail-page parsing function.
    Takes raw HTML and returns a RawLevel; missing fields are left as None.
    """
    soup = BeautifulSoup(html, "html.parser")

    fields: Dict[str, str] = {}

    read_rows(soup.select("ul.level-stats li.collection-item"), STAT_READERS, fields)

    description_rows = soup.select("ul.level-description li.collection-item")
    for row in description_rows:
        thumbnail = extract_thumbnail(row)
        if thumbnail:
            fields["thumbnail"] = thumbnail
    read_rows(description_rows, DESCRIPTION_READERS, fields)

    return RawLevel(
        name=extract_name(soup),
        code=extract_code(soup),
        **fields
    )
