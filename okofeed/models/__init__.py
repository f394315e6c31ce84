from .feed import ChannelMetadata, Enclosure, FeedDocument, FeedItem, Guid
from .upstream import FeaturedImage, SeoFields, UpstreamRecord, UpstreamResponse

__all__ = [
    "ChannelMetadata",
    "Enclosure",
    "FeaturedImage",
    "FeedDocument",
    "FeedItem",
    "Guid",
    "SeoFields",
    "UpstreamRecord",
    "UpstreamResponse",
]
