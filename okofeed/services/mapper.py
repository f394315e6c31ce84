from __future__ import annotations

import re
from datetime import datetime, timezone

from ..errors import TimestampParseError
from ..models.feed import Enclosure, FeedItem, Guid
from ..models.upstream import UpstreamRecord

SITE_BASE_URL = "https://oko.press/"
THUMBNAIL_MEDIA_TYPE = "image/jpeg"

# Source timestamps carry no offset; a trailing fraction of a second is tolerated.
_PUBLISH_AT_PATTERN = re.compile(
    r"(?P<stamp>[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2})(?:\.[0-9]+)?"
)
_PUBLISH_AT_FORMAT = "%Y-%m-%dT%H:%M:%S"

_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def parse_publish_timestamp(value: str) -> datetime:
    """Parse an upstream ``publish_at`` value as a UTC datetime.

    Raises:
        TimestampParseError: if the value does not follow the source format
            or names an impossible date.
    """
    match = _PUBLISH_AT_PATTERN.fullmatch(value)
    if match is None:
        raise TimestampParseError(value)
    try:
        parsed = datetime.strptime(match.group("stamp"), _PUBLISH_AT_FORMAT)
    except ValueError as exc:
        raise TimestampParseError(value) from exc
    return parsed.replace(tzinfo=timezone.utc)


def format_pub_date(moment: datetime) -> str:
    """Render ``moment`` as ``02 Jan 2006 15:04 -0700``.

    Month names are always English, independent of the process locale.
    Naive datetimes are taken to be UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (
        f"{moment.day:02d} {_MONTHS[moment.month - 1]} {moment.year:04d} "
        f"{moment.hour:02d}:{moment.minute:02d} {moment.strftime('%z')}"
    )


def map_record(record: UpstreamRecord, thumbnail_prefix: str) -> FeedItem:
    published = parse_publish_timestamp(record.publish_at)
    return FeedItem(
        title=record.title,
        link=SITE_BASE_URL + record.slug,
        guid=Guid(value=record.id),
        pub_date=format_pub_date(published),
        # Length is unknown without downloading the image.
        enclosure=Enclosure(
            url=thumbnail_prefix + record.image_url,
            length=0,
            type=THUMBNAIL_MEDIA_TYPE,
        ),
    )
