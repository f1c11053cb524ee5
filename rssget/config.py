"""Configuration loading and merging."""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import List, Optional, Sequence
from xml.etree import ElementTree as ET

from .errors import ConfigError
from .models import ChannelConfig, ItemConfig, OrderingMode

logger = logging.getLogger(__name__)

DEFAULT_DISPLAY_BY = OrderingMode.DATE
DEFAULT_TIMEOUT = 10.0
DEFAULT_CONCURRENCY = 8


@dataclass
class LoggingConfig:
    level: str = "WARNING"
    file: Optional[str] = None


@dataclass
class AppConfig:
    channels: List[ChannelConfig] = field(default_factory=list)
    display_by: Optional[OrderingMode] = None
    timeout: float = DEFAULT_TIMEOUT
    concurrency: int = DEFAULT_CONCURRENCY
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def default_config_path() -> Path:
    """Return the per-user configuration file location."""
    base = os.environ.get("XDG_CONFIG_HOME")
    config_dir = Path(base) if base else Path.home() / ".config"
    return config_dir / "rssget" / "config.xml"


def _resolve_path(base_path: Path, target_path: str) -> str:
    """Resolve a path relative to the base config file if it's not absolute."""
    target = Path(target_path)
    if target.is_absolute():
        return str(target)
    return str((base_path.parent / target).resolve())


def _parse_bool(node: ET.Element, tag: str) -> bool:
    text = node.findtext(tag)
    if text is None:
        text = node.attrib.get(tag)
    if text is None:
        return False
    return text.strip().lower() in ("true", "yes", "1")


def _parse_number(text: Optional[str], name: str, kind=int):
    if text is None or not text.strip():
        return None
    try:
        value = kind(text.strip())
    except ValueError:
        raise ConfigError(f"<{name}> must be a number, got {text!r}") from None
    if not math.isfinite(value) or value <= 0:
        raise ConfigError(f"<{name}> must be a positive finite number, got {text!r}")
    return value


def _parse_item_config(node: ET.Element) -> ItemConfig:
    return ItemConfig(
        hide_title=_parse_bool(node, "hide-title"),
        hide_link=_parse_bool(node, "hide-link"),
        hide_description=_parse_bool(node, "hide-description"),
        hide_author=_parse_bool(node, "hide-author"),
        hide_pub_date=_parse_bool(node, "hide-pub-date"),
        show_enclosure=_parse_bool(node, "show-enclosure"),
    )


def _parse_channel(node: ET.Element) -> ChannelConfig:
    url = node.attrib.get("url") or (node.text or "").strip()
    if not url:
        raise ConfigError("<channel> entry is missing a url.")

    channel = ChannelConfig(
        url=url,
        alias=node.attrib.get("alias") or None,
        max_items=_parse_number(node.attrib.get("max-items"), "max-items"),
        item_config=_parse_item_config(node),
    )
    logger.debug("Registered channel %s", channel.url)
    return channel


def parse_app_config(path: os.PathLike | str) -> AppConfig:
    """Parse the XML configuration file.

    A missing file is not an error and yields an empty configuration.
    """
    config_path = Path(path).expanduser()
    if not config_path.exists():
        logger.debug("No configuration file at %s", config_path)
        return AppConfig()

    logger.info("Loading configuration from %s", config_path)
    try:
        root = ET.parse(config_path).getroot()
    except (ET.ParseError, OSError) as exc:
        raise ConfigError(f"Could not read config file {config_path}: {exc}") from exc

    if root.tag != "config":
        raise ConfigError(
            f"Config file {config_path} must have a <config> root element."
        )

    channels: List[ChannelConfig] = []
    channels_node = root.find("channels")
    if channels_node is not None:
        channels = [_parse_channel(node) for node in channels_node.findall("channel")]

    display_by = None
    display_text = root.findtext("display_by")
    if display_text and display_text.strip():
        display_by = OrderingMode.parse(display_text)

    timeout = _parse_number(root.findtext("timeout"), "timeout", float)
    concurrency = _parse_number(root.findtext("concurrency"), "concurrency")

    log_node = root.find("logging")
    logging_config = LoggingConfig()
    if log_node is not None:
        logging_config.level = log_node.findtext("level", logging_config.level).strip()
        log_file = log_node.findtext("file")
        if log_file and log_file.strip():
            logging_config.file = _resolve_path(config_path, log_file.strip())

    logger.info("Loaded %d channels from configuration", len(channels))
    return AppConfig(
        channels=channels,
        display_by=display_by,
        timeout=timeout or DEFAULT_TIMEOUT,
        concurrency=concurrency or DEFAULT_CONCURRENCY,
        logging=logging_config,
    )


def merge_config(
    file_config: AppConfig,
    cli_channels: Sequence[str] = (),
    cli_display_by: Optional[OrderingMode] = None,
) -> AppConfig:
    """Combine the file configuration with command-line values.

    CLI channels are appended after the configured ones and duplicates are
    kept. A CLI display order replaces the configured one.
    """
    channels = list(file_config.channels)
    channels.extend(ChannelConfig(url=url) for url in cli_channels)

    display_by = cli_display_by or file_config.display_by or DEFAULT_DISPLAY_BY
    return replace(file_config, channels=channels, display_by=display_by)
