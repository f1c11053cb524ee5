"""Exception types raised by rssget."""

from __future__ import annotations


class RssGetError(Exception):
    """Base class for all rssget errors."""


class ConfigError(RssGetError):
    """The configuration file or options could not be used."""


class FeedError(RssGetError):
    """A single feed could not be turned into a channel."""

    def __init__(self, url: str, cause: object):
        self.url = url
        self.cause = cause
        super().__init__(f"{url}: {cause}")


class FetchError(FeedError):
    """Network failure, timeout or non-2xx response for a feed URL."""


class ParseError(FeedError):
    """The fetched document is not a usable RSS or Atom feed."""


class RenderError(RssGetError):
    """The output stream could not be written."""
