"""Shared data models for rssget."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from .errors import ConfigError


class OrderingMode(enum.Enum):
    """How items are ordered for display."""

    DATE = "date"
    CHANNEL = "channel"

    @classmethod
    def parse(cls, value: str) -> "OrderingMode":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ConfigError(
                f"Unrecognized display order {value!r}. [date | channel]"
            ) from None


@dataclass(frozen=True)
class ItemConfig:
    """Toggles for displaying item fields."""

    hide_title: bool = False
    hide_link: bool = False
    hide_description: bool = False
    hide_author: bool = False
    hide_pub_date: bool = False
    show_enclosure: bool = False


@dataclass(frozen=True)
class ChannelConfig:
    """Configuration for a single feed URL."""

    url: str
    alias: Optional[str] = None
    max_items: Optional[int] = None
    item_config: ItemConfig = field(default_factory=ItemConfig)


@dataclass
class Item:
    """A single feed entry."""

    title: Optional[str]
    link: Optional[str]
    published: Optional[datetime] = None
    description: Optional[str] = None
    author: Optional[str] = None
    enclosure_url: Optional[str] = None


@dataclass
class Channel:
    """A parsed feed and the items it owns."""

    title: str
    url: str
    items: List[Item] = field(default_factory=list)
    config: Optional[ChannelConfig] = None

    @property
    def display_title(self) -> str:
        if self.config is not None and self.config.alias:
            return self.config.alias
        return self.title

    @property
    def item_config(self) -> ItemConfig:
        if self.config is None:
            return ItemConfig()
        return self.config.item_config


@dataclass(frozen=True)
class DisplayItem:
    """An item paired with the channel it came from."""

    channel: Channel
    item: Item
