"""Download the season ranking page."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional
from urllib.parse import unquote, urlparse

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import FetchError
from .parser import extract_rows

logger = logging.getLogger(__name__)

# -------------------------
# Configuration defaults
# -------------------------

DEFAULT_URL = "https://www.bvdg-online.de/bestenliste/relativpunkte"
DEFAULT_YEAR = 2024
DEFAULT_TIMEOUT = 20

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_0) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0 Safari/537.36"
)


def build_session(retries: int = 1) -> requests.Session:
    """Return a requests session that retries transient failures *retries* times."""

    session = requests.Session()
    session.headers.update({"User-Agent": USER_AGENT})
    retry = Retry(
        total=retries,
        connect=retries,
        read=retries,
        status_forcelist=(502, 503, 504),
        allowed_methods=frozenset({"GET"}),
        backoff_factor=0.5,
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def fetch_html(
    url: str,
    *,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """Return the HTML text at *url*.

    ``file://`` URLs are read from disk so captured snapshots can be replayed.
    """

    parsed = urlparse(url)
    if parsed.scheme == "file":
        local_path = Path(unquote(parsed.path))
        try:
            return local_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise FetchError(f"Could not read {local_path}: {exc}") from exc

    session = session or build_session()
    try:
        response = session.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise FetchError(f"Failed to fetch {url}: {exc}") from exc
    return response.text


def load_rows(
    url: str,
    *,
    fetcher: Callable[[str], str] = fetch_html,
) -> List[List[str]]:
    """Fetch *url* and return the raw rows of its ranking table."""

    logger.info("Fetching ranking page: %s", url)
    html = fetcher(url)
    rows = extract_rows(html)
    logger.info("Found %d table rows (header included)", len(rows))
    return rows
