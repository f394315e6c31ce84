from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

import httpx
from pydantic import ValidationError

from ..config import FeedConfig, Settings, get_settings
from ..errors import UpstreamDecodeError, UpstreamNetworkError, UpstreamStatusError
from ..http_client import get_http_client
from ..models.feed import FeedItem
from ..models.upstream import UpstreamRecord, UpstreamResponse
from .builder import render_feed
from .mapper import map_record

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FeedService:
    config: FeedConfig
    settings: Settings | None = None
    client: httpx.AsyncClient | None = None
    clock: Callable[[], datetime] | None = None

    def __post_init__(self) -> None:
        if self.settings is None:
            self.settings = get_settings()

    async def fetch_records(self) -> tuple[UpstreamRecord, ...]:
        client = self.client or await get_http_client()
        url = str(self.config.url)

        logger.info("Fetching OKO.press API from %s", url)
        try:
            response = await client.get(url, timeout=self.settings.http_timeout)
        except httpx.HTTPError as exc:
            raise UpstreamNetworkError(f"error while fetching {url}: {exc}") from exc

        if not response.is_success:
            logger.error("Bad HTTP status %s from %s", response.status_code, url)
            raise UpstreamStatusError(response.status_code, url)

        try:
            payload = UpstreamResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise UpstreamDecodeError(f"malformed payload from {url}: {exc}") from exc
        return payload.records

    async def build_feed(self) -> str:
        records = await self.fetch_records()
        items = self.map_records(records)
        now = self.clock() if self.clock else None
        feed = render_feed(items, now=now)
        logger.info("RSS feed generated with %d items", len(items))
        return feed

    def map_records(self, records: tuple[UpstreamRecord, ...]) -> list[FeedItem]:
        prefix = self.config.thumbnail_compression
        return [map_record(record, prefix) for record in records]
