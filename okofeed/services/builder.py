from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone

from lxml import etree

from ..errors import FeedSerializationError
from ..models.feed import ChannelMetadata, FeedDocument, FeedItem
from .mapper import format_pub_date

ATOM_NAMESPACE = "http://www.w3.org/2005/Atom"

OKO_PRESS_CHANNEL = ChannelMetadata(
    title="OKO.press",
    link="https://oko.press",
    description=(
        "OKO.press to portal informacyjny, który publikuje najnowsze wiadomości "
        "z różnych dziedzin: polityki, gospodarki, sportu, kultury, nauki i nauki. "
        "Znajdziesz tu także wywiady, analizy, sondaże, podcasty i multimedia."
    ),
)


def build_document(
    items: Iterable[FeedItem], channel: ChannelMetadata = OKO_PRESS_CHANNEL
) -> FeedDocument:
    return FeedDocument(channel=channel, self_link=channel.link, items=tuple(items))


def serialize_document(document: FeedDocument, generated_at: datetime) -> str:
    """Serialize ``document`` to indented RSS 2.0 markup.

    The markup is preceded by a one-line comment recording ``generated_at``
    in the same format as item publish dates. Any failure to build the tree
    raises :class:`FeedSerializationError`; nothing partial is returned.
    """
    try:
        root = _render_tree(document)
        etree.indent(root, space=" ")
        markup = etree.tostring(root, encoding="unicode")
    except (ValueError, TypeError, etree.LxmlError) as exc:
        raise FeedSerializationError(f"cannot serialize feed: {exc}") from exc
    return f"<!-- Last updated: {format_pub_date(generated_at)} -->\n{markup}"


def render_feed(
    items: Iterable[FeedItem],
    channel: ChannelMetadata = OKO_PRESS_CHANNEL,
    now: datetime | None = None,
) -> str:
    generated_at = now or datetime.now(timezone.utc)
    return serialize_document(build_document(items, channel), generated_at)


def _render_tree(document: FeedDocument) -> etree._Element:
    root = etree.Element(
        "rss", attrib={"version": document.version}, nsmap={"atom": ATOM_NAMESPACE}
    )
    channel = etree.SubElement(root, "channel")
    etree.SubElement(
        channel,
        etree.QName(ATOM_NAMESPACE, "link"),
        attrib={"rel": "self", "href": document.self_link},
    )
    _text_element(channel, "title", document.channel.title)
    _text_element(channel, "link", document.channel.link)
    _text_element(channel, "description", document.channel.description)

    for item in document.items:
        node = etree.SubElement(channel, "item")
        _text_element(node, "title", item.title)
        _text_element(node, "link", item.link)
        guid = _text_element(node, "guid", item.guid.value)
        guid.set("isPermaLink", "true" if item.guid.is_permalink else "false")
        _text_element(node, "pubDate", item.pub_date)
        etree.SubElement(
            node,
            "enclosure",
            attrib={
                "url": item.enclosure.url,
                "length": str(item.enclosure.length),
                "type": item.enclosure.type,
            },
        )
    return root


def _text_element(parent: etree._Element, tag: str, text: str) -> etree._Element:
    element = etree.SubElement(parent, tag)
    element.text = text
    return element
