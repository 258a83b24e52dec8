"""
Fetcher module - handles HTTP requests to Level Palace.
Every request is attempted exactly once; failures are reported on the
FetchResult and raised by the caller as FetchError.
"""
import time
from dataclasses import dataclass
from typing import Optional

import requests

from config import ConverterSettings


@dataclass
class FetchResult:
    """Result of a fetch operation"""
    url: str
    html: Optional[str]
    status_code: Optional[int]
    error: Optional[str]
    fetch_time_ms: int


class FetchError(Exception):
    """A page could not be fetched; aborts the crawl"""

    def __init__(self, result: FetchResult):
        super().__init__(f"Failed to fetch {result.url}: {result.error}")
        self.result = result


def create_session(settings: ConverterSettings) -> requests.Session:
    """Create a requests session carrying the identifying User-Agent"""
    session = requests.Session()
    session.headers.update({"User-Agent": settings.user_agent})
    return session


def fetch_url(session: requests.Session, url: str, timeout: int = 15) -> FetchResult:
    """Fetch URL using the given session"""
    start_time = time.time()

    try:
        response = session.get(url, timeout=timeout)
        response.raise_for_status()

        return FetchResult(
            url=url,
            html=response.text,
            status_code=response.status_code,
            error=None,
            fetch_time_ms=int((time.time() - start_time) * 1000),
        )

    except requests.exceptions.Timeout:
        error = f"Timeout after {timeout}s"
        status_code = None

    except requests.exceptions.HTTPError as e:
        error = str(e)
        status_code = e.response.status_code if e.response is not None else None

    except requests.exceptions.RequestException as e:
        error = str(e)
        status_code = None

    return FetchResult(
        url=url,
        html=None,
        status_code=status_code,
        error=error,
        fetch_time_ms=int((time.time() - start_time) * 1000),
    )


def fetch_page(session: requests.Session, url: str, timeout: int = 15) -> FetchResult:
    """Fetch URL, raising FetchError on any failure"""
    result = fetch_url(session, url, timeout=timeout)
    if result.error:
        raise FetchError(result)
    return result
