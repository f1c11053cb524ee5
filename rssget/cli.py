"""Command-line interface for the rssget application."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import default_config_path, merge_config, parse_app_config
from .errors import ConfigError, RenderError
from .models import OrderingMode
from .runner import RunConfig, execute

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="rssget",
        description="a RSS channel retriever",
    )
    parser.add_argument(
        "channels",
        nargs="*",
        metavar="channels",
        help="RSS feed URLs, appended to the configured feeds.",
    )
    parser.add_argument(
        "--display-by",
        choices=[mode.value for mode in OrderingMode],
        default=None,
        help="Display ordering for RSS items. Overrides config (default: date).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Path to the configuration XML file (default: {default_config_path()}).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (e.g. DEBUG, INFO, WARNING). Overrides config.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Optional path to a log file. Overrides config.",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not show the fetch progress bar.",
    )
    parser.add_argument("--version", action="version", version=__version__)
    return parser


def configure_logging(level_name: str, log_file: Optional[str] = None) -> None:
    """Initialise logging according to options."""
    log_level = getattr(logging, level_name.upper(), None)
    if not isinstance(log_level, int):
        raise ValueError(f"Unsupported log level: {level_name}")

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    console_formatter = logging.Formatter("rssget: %(levelname)s: %(message)s")

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(log_level)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(console_formatter)
    root_logger.addHandler(stream_handler)

    if log_file:
        log_path = Path(log_file)
        if log_path.parent and not log_path.parent.exists():
            log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logger.debug(
            "Logger initialised with level %s and file output to %s",
            level_name.upper(),
            log_path,
        )
    else:
        logger.debug(
            "Logger initialised with console output at level %s", level_name.upper()
        )


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)

    try:
        file_config = parse_app_config(args.config or default_config_path())

        log_level = args.log_level or file_config.logging.level
        log_file = args.log_file or file_config.logging.file
        configure_logging(log_level, log_file)
    except (ConfigError, ValueError) as exc:
        parser.error(str(exc))

    display_by = OrderingMode(args.display_by) if args.display_by else None
    app_config = merge_config(file_config, args.channels, display_by)

    config = RunConfig(
        channels=app_config.channels,
        display_by=app_config.display_by,
        timeout=app_config.timeout,
        concurrency=app_config.concurrency,
        show_progress=not args.no_progress,
    )
    logger.info(
        "Reading %d channels ordered by %s",
        len(config.channels),
        config.display_by.value,
    )

    try:
        result = execute(config)
    except RenderError as exc:
        logger.error("%s", exc)
        return 1
    except Exception:  # noqa: BLE001
        logger.exception("Unexpected error during execution.")
        return 1

    if result.errors:
        logger.info("%d feeds could not be read", len(result.errors))
    return 0
