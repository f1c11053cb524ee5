"""Rendering helpers for terminal output."""

from __future__ import annotations

import itertools
from typing import IO, Dict, List, Optional, Sequence

from .errors import RenderError
from .models import DisplayItem, OrderingMode
from .templating import get_environment

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_WIDTH = 80


def _heading(entry: DisplayItem, show_channel: bool) -> Optional[str]:
    parts = []
    conf = entry.channel.item_config
    if entry.item.published is not None and not conf.hide_pub_date:
        parts.append(f"[{entry.item.published.strftime(DATE_FORMAT)}]")
    if show_channel:
        parts.append(entry.channel.display_title)
    return " - ".join(parts) or None


def _entry_context(entry: DisplayItem, show_channel: bool) -> Dict[str, Optional[str]]:
    conf = entry.channel.item_config
    item = entry.item
    return {
        "heading": _heading(entry, show_channel),
        "title": None if conf.hide_title else item.title,
        "author": None if conf.hide_author else item.author,
        "description": None if conf.hide_description else item.description,
        "enclosure_url": item.enclosure_url if conf.show_enclosure else None,
        "link": None if conf.hide_link else item.link,
    }


def _build_sections(
    display_list: Sequence[DisplayItem], mode: OrderingMode
) -> List[dict]:
    if mode is OrderingMode.DATE:
        return [
            {
                "title": None,
                "entries": [_entry_context(entry, True) for entry in display_list],
            }
        ]

    sections = []
    for _, group in itertools.groupby(display_list, key=lambda entry: id(entry.channel)):
        entries = list(group)
        sections.append(
            {
                "title": entries[0].channel.display_title,
                "entries": [_entry_context(entry, False) for entry in entries],
            }
        )
    return sections


def render_display_list(
    display_list: Sequence[DisplayItem],
    mode: OrderingMode,
    width: int = MAX_WIDTH,
) -> str:
    """Render the ordered items as plain text using the Jinja2 template."""
    env = get_environment()
    template = env.get_template("display.txt.j2")
    return template.render(sections=_build_sections(display_list, mode), width=width)


def write_display_list(text: str, stream: IO[str]) -> None:
    """Write rendered output, converting stream failures to RenderError."""
    try:
        stream.write(text)
        stream.flush()
    except (OSError, ValueError) as exc:
        raise RenderError(f"Could not write output: {exc}") from exc
