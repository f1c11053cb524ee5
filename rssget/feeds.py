"""Feed fetching and parsing helpers."""

from __future__ import annotations

import logging
import re
import time
import xml.sax
from datetime import datetime, timezone
from typing import List, Optional

import feedparser
import requests
from bs4 import BeautifulSoup

from .errors import FetchError, ParseError
from .models import Channel, ChannelConfig, Item

logger = logging.getLogger(__name__)

USER_AGENT = "rssget/0.1 (+terminal feed reader)"


def to_datetime(value: Optional[time.struct_time]) -> Optional[datetime]:
    """Convert feedparser's UTC struct_time to an aware datetime."""
    if value is None:
        return None
    return datetime(*value[:6], tzinfo=timezone.utc)


def fetch_feed(url: str, timeout: float = 10.0) -> bytes:
    """Download a feed document and return the raw body."""
    logger.info("Fetching feed %s", url)
    try:
        response = requests.get(
            url, timeout=timeout, headers={"User-Agent": USER_AGENT}
        )
        response.raise_for_status()
    except requests.RequestException as exc:
        raise FetchError(url, exc) from exc
    return response.content


def parse_feed(content: bytes, source: ChannelConfig) -> Channel:
    """Parse an RSS or Atom document into a channel."""
    parsed = feedparser.parse(content)

    if parsed.bozo and isinstance(parsed.get("bozo_exception"), xml.sax.SAXException):
        raise ParseError(source.url, parsed.bozo_exception)

    title = parsed.feed.get("title")
    if not title:
        raise ParseError(source.url, "feed has no channel title")

    entries = parsed.entries
    if source.max_items is not None:
        entries = entries[: source.max_items]

    items = [_build_item(entry) for entry in entries]
    logger.info("Collected %d items from feed %s", len(items), source.url)
    return Channel(title=title, url=source.url, items=items, config=source)


def _build_item(entry) -> Item:
    published = None
    for attr in ("published_parsed", "updated_parsed", "created_parsed"):
        published = entry.get(attr)
        if published:
            break

    summary = entry.get("summary")
    if not summary:
        content = entry.get("content")
        if content:
            try:
                summary = content[0].get("value")
            except (TypeError, KeyError, IndexError, AttributeError):
                summary = None
    if summary:
        summary = _strip_html(summary) or None

    enclosure_url = None
    enclosures: List = entry.get("enclosures") or []
    if enclosures:
        enclosure_url = enclosures[0].get("href")

    return Item(
        title=entry.get("title") or None,
        link=entry.get("link") or None,
        published=to_datetime(published),
        description=summary,
        author=entry.get("author") or None,
        enclosure_url=enclosure_url,
    )


def _strip_html(raw_value: str) -> str:
    """Return text content extracted from HTML fragments."""
    soup = BeautifulSoup(raw_value, "html.parser")
    text = soup.get_text(separator=" ", strip=True)
    text = re.sub(r"\s+([.,;:!?])", r"\1", text)
    text = re.sub(r"\s{2,}", " ", text)
    return text.strip()
