from __future__ import annotations

import logging
import sys
from typing import Dict, FrozenSet, Optional, TextIO
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

from config import Settings

logger = logging.getLogger(__name__)


# Sent with every page request.
REQUEST_HEADERS = {
    "Content-Type": "application/x-www-form-urlencoded; charset=utf-8",
}

# "Basic" allow-list: simple text formatting, links and lists.
BASIC_TAGS: FrozenSet[str] = frozenset([
    "a", "b", "blockquote", "br", "cite", "code", "dd", "dl", "dt", "em",
    "i", "li", "ol", "p", "pre", "q", "small", "span", "strike", "strong",
    "sub", "sup", "u", "ul",
])
BASIC_ATTRIBUTES: Dict[str, FrozenSet[str]] = {
    "a": frozenset(["href"]),
    "blockquote": frozenset(["cite"]),
    "q": frozenset(["cite"]),
}
BASIC_PROTOCOLS: FrozenSet[str] = frozenset(["http", "https", "ftp", "mailto"])
_DROP_WITH_CONTENT = ("script", "style")


class FetchError(Exception):
    """Fetching or reading a topic page failed. ``message`` is shown to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TopicNotFound(FetchError):
    def __init__(self) -> None:
        super().__init__("Not found.")


class UnexpectedStatus(FetchError):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"Error processing request, status={status_code}")
        self.status_code = status_code


class TransportError(FetchError):
    pass


class NoParagraph(FetchError):
    def __init__(self) -> None:
        super().__init__("No paragraph found on the page.")


def build_url(topic: str, settings: Settings) -> str:
    return settings.base_url.format(topic=topic)


def fetch_page(url: str, settings: Settings, session: Optional[requests.Session] = None) -> str:
    """GET *url* once and return the body of a 200 response.

    Raises TopicNotFound on 404, UnexpectedStatus on any other non-200 status
    and TransportError when the request itself fails. Nothing is retried.
    """
    session = session or requests.Session()
    try:
        resp = session.get(url, headers=REQUEST_HEADERS, timeout=settings.timeout)
    except (requests.exceptions.InvalidURL,
            requests.exceptions.MissingSchema,
            requests.exceptions.InvalidSchema) as exc:
        raise TransportError(f"Malformed URL Exception: {exc}") from exc
    except requests.exceptions.ConnectionError as exc:
        raise TransportError(f"Connection Exception: {exc}") from exc
    except requests.exceptions.RequestException as exc:
        raise TransportError(f"IO Exception: {exc}") from exc

    logger.debug("GET %s -> %s", url, resp.status_code)
    if resp.status_code == 404:
        raise TopicNotFound()
    if resp.status_code != 200:
        raise UnexpectedStatus(resp.status_code)
    return resp.text


def first_paragraph(html: str) -> str:
    """Return the visible text of the first <p> element in document order.

    Whitespace runs collapse to a single space and the ends are trimmed. lxml
    closes an open <p> when the next one starts, so sibling paragraphs never
    merge into the first.
    """
    soup = BeautifulSoup(html, "lxml")
    para = soup.find("p")
    if para is None:
        raise NoParagraph()
    return " ".join(para.get_text().split())


def _allowed_url(value: str) -> bool:
    scheme = urlparse(value.strip()).scheme.lower()
    return scheme in BASIC_PROTOCOLS


def sanitize_basic(text: str) -> str:
    """Reduce *text* to the basic tag allow-list.

    The input is parsed as an HTML fragment: disallowed tags are unwrapped so
    their text survives, script and style blocks are dropped entirely, only
    allow-listed attributes with safe URL schemes are kept and links get
    ``rel="nofollow"``. The result is serialised back to HTML, so any stray
    markup characters come out entity-escaped.
    """
    soup = BeautifulSoup(text, "html.parser")

    for tag in soup(list(_DROP_WITH_CONTENT)):
        tag.decompose()

    for tag in soup.find_all(True):
        if tag.name not in BASIC_TAGS:
            tag.unwrap()
            continue
        allowed = BASIC_ATTRIBUTES.get(tag.name, frozenset())
        for attr in list(tag.attrs):
            if attr not in allowed or not _allowed_url(str(tag.attrs[attr])):
                del tag.attrs[attr]
        if tag.name == "a":
            tag["rel"] = "nofollow"

    return str(soup).strip()


def fetch_and_extract(topic: str, settings: Settings, session: Optional[requests.Session] = None) -> str:
    """Fetch the page for *topic* and return its sanitized first paragraph."""
    url = build_url(topic, settings)
    logger.info("Fetching %s", url)
    html = fetch_page(url, settings, session=session)
    text = first_paragraph(html)
    logger.debug("First paragraph: %d characters", len(text))
    return sanitize_basic(text)


def fetch_topic(topic: str, settings: Settings, out: Optional[TextIO] = None,
                session: Optional[requests.Session] = None) -> None:
    """Print the introductory paragraph for *topic*, or exit with status 1."""
    out = out or sys.stdout
    try:
        text = fetch_and_extract(topic, settings, session=session)
    except FetchError as exc:
        logger.warning("Lookup of %r failed: %s", topic, exc.message)
        print(exc.message, file=out)
        raise SystemExit(1)
    print(f"\n{text}", file=out)
