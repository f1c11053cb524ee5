"""Jinja2 environment for rssget templates."""

from __future__ import annotations

import textwrap
from importlib import resources

from jinja2 import Environment, FileSystemLoader, select_autoescape

INDENT = "     "

_ENV: Environment | None = None


def _indent_wrap(value: str | None, width: int = 80) -> str:
    """Wrap text to ``width`` columns with every line indented."""
    if not value:
        return ""
    return textwrap.fill(
        value, width=width, initial_indent=INDENT, subsequent_indent=INDENT
    )


def get_environment() -> Environment:
    """Return a cached Jinja environment configured for package templates."""
    global _ENV
    if _ENV is None:
        template_dir = resources.files(__package__) / "templates"
        loader = FileSystemLoader(str(template_dir))
        _ENV = Environment(
            loader=loader,
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        _ENV.filters["indent_wrap"] = _indent_wrap
    return _ENV
