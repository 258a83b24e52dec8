import pytest
import requests

from config import ConverterSettings


def listing_html(level_hrefs, next_page=True):
    """Listing page with one card per href and a pagination bar"""
    cards = "".join(
        f'<div class="card-item"><a class="card-title" href="{href}">Level</a></div>'
        for href in level_hrefs
    )
    next_button = (
        '<li class="waves-effect"><a href="#"><i class="material-icons">chevron_right</i></a></li>'
        if next_page
        else '<li class="disabled"><a href="#"><i class="material-icons">chevron_right</i></a></li>'
    )
    return f"""
    <html><body>
      <div class="card-blocks">{cards}</div>
      <ul class="pagination">
        <li class="waves-effect"><a href="#"><i class="material-icons">chevron_left</i></a></li>
        <li class="active"><a href="#">1</a></li>
        {next_button}
      </ul>
    </body></html>
    """


NO_LEVELS_HTML = """
<html><body>
  <div class="table-container"><p>No levels found.</p></div>
</body></html>
"""


def level_html(
    name="Castle Run",
    code="v2|0,1,2|ground;pipe",
    rating="80%",
    game="Super Mario Construct",
    difficulty="Hard",
    published="March 3, 2021",
    description="Jump <em>carefully</em>.",
    contributors="Alice, Bob",
    thumbnail="https://img.example.com/castle.png",
):
    stats = [
        '<li class="collection-item"><strong>Creator:</strong> <a href="/profile?user=x">x</a></li>',
        f'<li class="collection-item"><strong>Rating:</strong> {rating}</li>' if rating is not None else "",
        f'<li class="collection-item"><strong>Game:</strong> <a href="/game">{game}</a></li>' if game is not None else "",
        f'<li class="collection-item"><strong>Difficulty:</strong> {difficulty}</li>' if difficulty is not None else "",
        f'<li class="collection-item"><strong>Published:</strong> {published}</li>' if published is not None else "",
    ]
    pane = []
    if thumbnail is not None:
        pane.append(
            '<li class="collection-item"><div id="level-images-slider"><ul class="slides">'
            f'<li><img src="{thumbnail}"></li></ul></div></li>'
        )
    if description is not None:
        pane.append(f'<li class="collection-item"><strong>Description:</strong> {description}</li>')
    if contributors is not None:
        pane.append(f'<li class="collection-item"><strong>Contributors:</strong> {contributors}</li>')
    code_area = (
        f'<div class="level-code"><textarea class="level-code-textarea">{code}</textarea></div>'
        if code is not None
        else ""
    )
    return f"""
    <html><body>
      <div class="level-section"><p class="brand-logo"> {name} </p></div>
      {code_area}
      <ul class="level-stats">{"".join(stats)}</ul>
      <ul class="level-description">{"".join(pane)}</ul>
    </body></html>
    """


class FakeResponse:
    def __init__(self, url, text, status_code=200):
        self.url = url
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error for url: {self.url}", response=self)


class FakeSession:
    """Serves canned pages by exact URL; unknown URLs are 404s"""

    def __init__(self, pages):
        self.pages = pages
        self.requested = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True

    def get(self, url, timeout=None):
        self.requested.append(url)
        if url not in self.pages:
            return FakeResponse(url, "", status_code=404)
        return FakeResponse(url, self.pages[url])


@pytest.fixture
def settings(tmp_path):
    return ConverterSettings(base_url="https://lp.test/", wait_time=0, output_root=str(tmp_path))

