"""High-level orchestration for the rssget application."""

from __future__ import annotations

import concurrent.futures
import logging
import sys
from dataclasses import dataclass, field
from typing import IO, List, Optional, Union

from tqdm import tqdm

from .config import DEFAULT_CONCURRENCY, DEFAULT_TIMEOUT
from .errors import FeedError, FetchError, ParseError
from .feeds import fetch_feed, parse_feed
from .models import Channel, ChannelConfig, DisplayItem, OrderingMode
from .ordering import build_display_list
from .renderers import render_display_list, write_display_list

logger = logging.getLogger(__name__)


@dataclass
class RunConfig:
    """Runtime options for executing the application."""

    channels: List[ChannelConfig]
    display_by: OrderingMode = OrderingMode.DATE
    timeout: float = DEFAULT_TIMEOUT
    concurrency: int = DEFAULT_CONCURRENCY
    show_progress: bool = True


@dataclass
class RunResult:
    """Returned data after executing the app."""

    display_list: List[DisplayItem]
    errors: List[FeedError] = field(default_factory=list)
    output_text: str = ""


def _load_channel(source: ChannelConfig, timeout: float) -> Channel:
    content = fetch_feed(source.url, timeout=timeout)
    return parse_feed(content, source)


def _progress_label(source: ChannelConfig) -> str:
    return source.alias or f"{source.url:.20}"


def _collect_channels(config: RunConfig) -> List[Union[Channel, FeedError]]:
    """Fetch and parse every channel, one result slot per configured feed."""
    if not config.channels:
        return []
    results: List[Optional[Union[Channel, FeedError]]] = [None] * len(config.channels)

    progress = None
    if config.show_progress and sys.stderr.isatty():
        progress = tqdm(total=len(config.channels), desc="Fetching RSS", unit="feed")

    try:
        with concurrent.futures.ThreadPoolExecutor(
            max_workers=config.concurrency
        ) as executor:
            future_to_index = {
                executor.submit(_load_channel, source, config.timeout): index
                for index, source in enumerate(config.channels)
            }
            for future in concurrent.futures.as_completed(future_to_index):
                index = future_to_index[future]
                source = config.channels[index]
                try:
                    results[index] = future.result()
                except FeedError as exc:
                    results[index] = exc
                except Exception as exc:  # noqa: BLE001
                    logger.exception("Failed to process feed %s", source.url)
                    results[index] = FeedError(source.url, exc)

                if progress is not None:
                    progress.set_postfix_str(_progress_label(source))
                    progress.update(1)
                else:
                    logger.info(
                        "Processed %d/%d feeds",
                        sum(slot is not None for slot in results),
                        len(results),
                    )
    finally:
        if progress is not None:
            progress.close()

    return results


def execute(config: RunConfig, stream: Optional[IO[str]] = None) -> RunResult:
    """Run the fetch, parse, order and render pipeline."""
    if stream is None:
        stream = sys.stdout

    channels: List[Channel] = []
    errors: List[FeedError] = []
    for result in _collect_channels(config):
        if isinstance(result, FetchError):
            logger.warning("Could not reach feed %s: %s", result.url, result.cause)
            errors.append(result)
        elif isinstance(result, ParseError):
            logger.warning("Could not parse feed %s: %s", result.url, result.cause)
            errors.append(result)
        elif isinstance(result, FeedError):
            errors.append(result)
        else:
            channels.append(result)

    display_list = build_display_list(channels, config.display_by)
    logger.info(
        "Collected %d items from %d of %d feeds",
        len(display_list),
        len(channels),
        len(config.channels),
    )

    if not display_list:
        logger.warning("No RSS items found.")
        return RunResult(display_list=display_list, errors=errors)

    output_text = render_display_list(display_list, config.display_by)
    write_display_list(output_text, stream)
    return RunResult(display_list=display_list, errors=errors, output_text=output_text)
