"""Combining parsed channels into a single display list."""

from __future__ import annotations

import logging
from typing import Iterable, List

from .models import Channel, DisplayItem, OrderingMode

logger = logging.getLogger(__name__)


def _flatten(channels: Iterable[Channel]) -> List[DisplayItem]:
    return [
        DisplayItem(channel=channel, item=item)
        for channel in channels
        for item in channel.items
    ]


def build_display_list(
    channels: Iterable[Channel], mode: OrderingMode
) -> List[DisplayItem]:
    """Order every item of every channel according to ``mode``.

    ``DATE`` puts the newest items first across all channels. Items sharing a
    timestamp keep their encounter order, and undated items follow all dated
    ones in encounter order. ``CHANNEL`` keeps channels in input order and
    items in feed order.
    """
    flattened = _flatten(channels)

    if mode is OrderingMode.CHANNEL:
        return flattened

    dated = [entry for entry in flattened if entry.item.published is not None]
    undated = [entry for entry in flattened if entry.item.published is None]
    # sorted() is stable, so reverse=True keeps ties in encounter order.
    dated = sorted(dated, key=lambda entry: entry.item.published, reverse=True)
    logger.debug("Ordered %d dated and %d undated items", len(dated), len(undated))
    return dated + undated
