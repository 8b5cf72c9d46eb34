"""RSS 2.0 and Atom parsing shared by the news, podcast and YouTube adapters."""

from __future__ import annotations

import html
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import List, Optional, Union

from repwatch.core.errors import UpstreamUnavailable
from .base import BaseSource

NAMESPACES = {
    "atom": "http://www.w3.org/2005/Atom",
    "itunes": "http://www.itunes.com/dtds/podcast-1.0.dtd",
    "media": "http://search.yahoo.com/mrss/",
    "yt": "http://www.youtube.com/xml/schemas/2015",
}

_TAG_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class FeedItem:
    title: str
    link: str
    guid: str = ""
    description: str = ""
    published: str = ""
    source: str = ""
    enclosure_url: str = ""
    duration: str = ""
    image: str = ""
    video_id: str = ""
    thumbnail: str = ""


@dataclass(frozen=True)
class Feed:
    title: str
    image: str
    items: List[FeedItem]


def clean_text(value: Optional[str], limit: Optional[int] = None) -> str:
    """Strip markup and entities; collapse whitespace."""
    if not value:
        return ""
    text = html.unescape(_TAG_RE.sub("", value))
    text = _WS_RE.sub(" ", text).strip()
    return text[:limit] if limit else text


def _text(node: Optional[ET.Element], path: str) -> str:
    if node is None:
        return ""
    found = node.find(path, NAMESPACES)
    if found is None or found.text is None:
        return ""
    return found.text.strip()


def _attr(node: Optional[ET.Element], path: str, name: str) -> str:
    if node is None:
        return ""
    found = node.find(path, NAMESPACES)
    return (found.get(name) or "").strip() if found is not None else ""


def parse_rss(xml_text: Union[str, bytes]) -> Feed:
    """Parse an RSS 2.0 document. Raises ``ET.ParseError`` on malformed XML."""
    root = ET.fromstring(xml_text)
    channel = root.find("channel")
    if channel is None:
        return Feed(title="", image="", items=[])

    channel_image = _attr(channel, "itunes:image", "href") or _text(channel, "image/url")
    items: List[FeedItem] = []
    for node in channel.findall("item"):
        title = clean_text(_text(node, "title"))
        if not title:
            continue
        items.append(
            FeedItem(
                title=title,
                link=_text(node, "link"),
                guid=_text(node, "guid"),
                description=_text(node, "description") or _text(node, "itunes:summary"),
                published=_text(node, "pubDate"),
                source=clean_text(_text(node, "source")),
                enclosure_url=_attr(node, "enclosure", "url"),
                duration=_text(node, "itunes:duration"),
                image=_attr(node, "itunes:image", "href"),
            )
        )
    return Feed(title=clean_text(_text(channel, "title")), image=channel_image, items=items)


def parse_atom(xml_text: Union[str, bytes]) -> Feed:
    """Parse an Atom document (YouTube channel feeds). Raises ``ET.ParseError``."""
    root = ET.fromstring(xml_text)
    items: List[FeedItem] = []
    for entry in root.findall("atom:entry", NAMESPACES):
        group = entry.find("media:group", NAMESPACES)
        items.append(
            FeedItem(
                title=clean_text(_text(entry, "atom:title")),
                link=_attr(entry, "atom:link", "href"),
                guid=_text(entry, "atom:id"),
                description=_text(group, "media:description"),
                published=_text(entry, "atom:published"),
                video_id=_text(entry, "yt:videoId"),
                thumbnail=_attr(group, "media:thumbnail", "url"),
            )
        )
    return Feed(title=clean_text(_text(root, "atom:title")), image="", items=items)


def stable_item_id(prefix: str, item: FeedItem) -> str:
    """Id derived from the item's own identity, never from the clock."""
    key = item.video_id or item.guid or item.link or item.enclosure_url or item.title
    return f"{prefix}-{key}"


def published_at(value: str) -> datetime:
    """Sort key for feed timestamps; unparseable values sort oldest."""
    if value:
        try:
            parsed = parsedate_to_datetime(value)
        except (TypeError, ValueError, IndexError):
            try:
                parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
            except ValueError:
                parsed = None
        if parsed is not None:
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return datetime.min.replace(tzinfo=timezone.utc)


class FeedSource(BaseSource):
    """Adapter over RSS/Atom documents; uses the shorter feed timeout."""

    @property
    def timeout(self) -> float:
        return self.settings.FEED_TIMEOUT_SECONDS

    async def get_feed(self, client, url: str, parser=parse_rss, **kwargs) -> Feed:
        body = await self.get_bytes(client, url, **kwargs)
        try:
            return parser(body)
        except ET.ParseError as exc:
            raise UpstreamUnavailable(f"{self.label} returned malformed XML from {url}", source=self.name) from exc
