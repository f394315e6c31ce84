"""Command line entry point: fetch once, then serve until the countdown ends."""

from __future__ import annotations

import argparse
import asyncio
import logging

from .config import FeedConfig, Settings, get_settings, load_feed_config
from .errors import OkoFeedError
from .http_client import shutdown_http_client
from .lifecycle import FeedLifecycle
from .services.fetcher import FeedService

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8000


def setup_logging(level: str = "INFO") -> None:
    """Configure standard logging format for the service."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="okofeed",
        description="Serve the OKO.press API as an RSS feed for a limited time.",
    )
    parser.add_argument(
        "-p", "--port", type=int, default=DEFAULT_PORT, help="port number (default 8000)"
    )
    parser.add_argument("-c", "--config", help="config file path")
    return parser


async def fetch_feed(config: FeedConfig, settings: Settings) -> str:
    try:
        return await FeedService(config=config, settings=settings).build_feed()
    finally:
        await shutdown_http_client()


async def run(config: FeedConfig, port: int, settings: Settings) -> None:
    payload = await fetch_feed(config, settings)
    lifecycle = FeedLifecycle(payload, port, config.interval, settings=settings)
    await lifecycle.run()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.config is None:
        parser.print_usage()
        print("Please specify config path!")
        return 0

    settings = get_settings()
    setup_logging(settings.log_level)

    try:
        config = load_feed_config(args.config)
        asyncio.run(run(config, args.port, settings))
    except OkoFeedError as exc:
        logger.error("Fatal: %s", exc)
        return 1
    return 0
