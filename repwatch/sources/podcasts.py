"""Podcast episodes from iTunes-resolved and directly configured RSS feeds."""

import asyncio
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from repwatch.core.errors import UpstreamError, UpstreamUnavailable
from repwatch.schemas.records import PodcastEpisode
from .feeds import FeedSource, clean_text, published_at, stable_item_id

ITUNES_LOOKUP = "https://itunes.apple.com/lookup"
EPISODES_PER_FEED = 5


@dataclass(frozen=True)
class PodcastFeed:
    name: str
    url: str
    image: str = ""


def format_duration(value: str) -> str:
    """Render ``itunes:duration`` as ``H:MM:SS`` or ``M:SS``; clock strings pass through."""
    if not value or ":" in value:
        return value or ""
    try:
        secs = int(value)
    except ValueError:
        return value
    mins, hrs = secs // 60, secs // 3600
    if hrs > 0:
        return f"{hrs}:{mins % 60:02d}:{secs % 60:02d}"
    return f"{mins}:{secs % 60:02d}"


class PodcastSource(FeedSource):
    name = "podcasts"
    label = "Podcasts"

    FIELD_ALIASES = {
        "name": ("collectionName", "trackName"),
        "image": ("artworkUrl600", "artworkUrl100"),
    }

    async def _fetch(self, params: Dict[str, Any]) -> List[PodcastEpisode]:
        async with self.client(headers={"User-Agent": "repwatch/1.0"}) as client:
            lookups = await asyncio.gather(
                *(self._resolve_itunes(client, pid) for pid in self.settings.PODCAST_ITUNES_IDS)
            )
            feeds = [f for f in lookups if f is not None]
            feeds += [PodcastFeed(name=n, url=u) for n, u in self.settings.PODCAST_FEEDS.items()]

            self.log.debug(f"Fetching {len(feeds)} podcast feeds")
            results = await asyncio.gather(*(self._episodes(client, f) for f in feeds), return_exceptions=True)

        dated: List[Tuple[datetime, PodcastEpisode]] = []
        failures = 0
        for feed, result in zip(feeds, results):
            if isinstance(result, UpstreamError):
                failures += 1
                self.log.warning(f"Podcast feed {feed.name} failed: {result.message}")
            elif isinstance(result, BaseException):
                raise result
            else:
                dated.extend(result)

        if feeds and failures == len(feeds):
            raise UpstreamUnavailable("Every podcast feed failed", source=self.name)

        dated.sort(key=lambda pair: pair[0], reverse=True)
        return [episode for _, episode in dated]

    async def _resolve_itunes(self, client, podcast_id: int) -> Optional[PodcastFeed]:
        try:
            data = await self.get_object(client, ITUNES_LOOKUP, params={"id": podcast_id, "entity": "podcast"})
        except UpstreamError as exc:
            self.log.warning(f"iTunes lookup failed for {podcast_id}: {exc.message}")
            return None
        results = data.get("results") or []
        if not results or not results[0].get("feedUrl"):
            return None
        entry = results[0]
        return PodcastFeed(
            name=self.pick(entry, "name", "Unknown"),
            url=entry["feedUrl"],
            image=self.pick(entry, "image"),
        )

    async def _episodes(self, client, feed: PodcastFeed) -> List[Tuple[datetime, PodcastEpisode]]:
        """Episodes paired with their full publish timestamp; ``pub_date`` keeps only the day."""
        parsed = await self.get_feed(client, feed.url)
        image = feed.image or parsed.image
        return [
            (
                published_at(item.published),
                PodcastEpisode(
                    id=stable_item_id("ep", item),
                    title=item.title,
                    description=clean_text(item.description, limit=300),
                    audio_url=item.enclosure_url,
                    duration=format_duration(item.duration),
                    pub_date=self.iso_date(item.published),
                    podcast_name=feed.name,
                    podcast_image=item.image or image,
                    episode_url=item.link,
                ),
            )
            for item in parsed.items[:EPISODES_PER_FEED]
        ]
