from .builder import OKO_PRESS_CHANNEL, build_document, render_feed, serialize_document
from .fetcher import FeedService
from .mapper import SITE_BASE_URL, format_pub_date, map_record, parse_publish_timestamp

__all__ = [
    "OKO_PRESS_CHANNEL",
    "SITE_BASE_URL",
    "FeedService",
    "build_document",
    "format_pub_date",
    "map_record",
    "parse_publish_timestamp",
    "render_feed",
    "serialize_document",
]
