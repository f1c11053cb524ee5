import textwrap
from datetime import datetime, timezone

import pytest
import requests

from rssget.models import Channel, ChannelConfig, Item


FEED_A = textwrap.dedent(
    """\
    <?xml version="1.0" encoding="UTF-8"?>
    <rss version="2.0">
      <channel>
        <title>Feed A</title>
        <link>https://a.example.com/</link>
        <description>First feed</description>
        <item>
          <title>A two</title>
          <link>https://a.example.com/2</link>
          <pubDate>Tue, 02 Jan 2024 00:00:00 +0000</pubDate>
        </item>
        <item>
          <title>A one</title>
          <link>https://a.example.com/1</link>
          <pubDate>Mon, 01 Jan 2024 00:00:00 +0000</pubDate>
        </item>
      </channel>
    </rss>
    """
).encode("utf-8")

FEED_B = textwrap.dedent(
    """\
    <?xml version="1.0" encoding="UTF-8"?>
    <rss version="2.0">
      <channel>
        <title>Feed B</title>
        <link>https://b.example.com/</link>
        <description>Second feed</description>
        <item>
          <title>B three</title>
          <link>https://b.example.com/3</link>
          <pubDate>Wed, 03 Jan 2024 00:00:00 +0000</pubDate>
        </item>
      </channel>
    </rss>
    """
).encode("utf-8")

MALFORMED = b"<rss version='2.0'><channel><title>Broken</title><item></channel>"


class FakeResponse:
    def __init__(self, content=b"", status_code=200):
        self.content = content
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


@pytest.fixture
def feed_a():
    return FEED_A


@pytest.fixture
def feed_b():
    return FEED_B


@pytest.fixture
def malformed_feed():
    return MALFORMED


def make_channel(title, items, url=None, config=None):
    url = url or f"https://{title.lower().replace(' ', '-')}.example.com/feed"
    return Channel(
        title=title,
        url=url,
        items=list(items),
        config=config or ChannelConfig(url=url),
    )


def make_item(title, day=None):
    published = None
    if day is not None:
        published = datetime(2024, 1, day, tzinfo=timezone.utc)
    return Item(title=title, link=f"https://example.com/{title}", published=published)
