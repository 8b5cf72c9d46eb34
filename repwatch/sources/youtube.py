"""YouTube channel uploads via the public Atom feeds."""

import asyncio
from typing import Any, Dict, List

from repwatch.core.errors import UpstreamError, UpstreamUnavailable
from repwatch.schemas.records import Video
from .feeds import FeedSource, clean_text, parse_atom, published_at

YOUTUBE_FEED = "https://www.youtube.com/feeds/videos.xml"
VIDEOS_PER_CHANNEL = 5


class YouTubeSource(FeedSource):
    name = "youtube"
    label = "YouTube"

    async def _fetch(self, params: Dict[str, Any]) -> List[Video]:
        channels = list(self.settings.YOUTUBE_CHANNELS.items())
        async with self.client() as client:
            results = await asyncio.gather(
                *(self._channel(client, cid, cname) for cid, cname in channels),
                return_exceptions=True,
            )

        videos: List[Video] = []
        failures = 0
        for (_, channel_name), result in zip(channels, results):
            if isinstance(result, UpstreamError):
                failures += 1
                self.log.warning(f"YouTube feed {channel_name} failed: {result.message}")
            elif isinstance(result, BaseException):
                raise result
            else:
                videos.extend(result)

        if channels and failures == len(channels):
            raise UpstreamUnavailable("Every YouTube feed failed", source=self.name)

        videos.sort(key=lambda v: published_at(v.pub_date), reverse=True)
        return videos

    async def _channel(self, client, channel_id: str, channel_name: str) -> List[Video]:
        feed = await self.get_feed(client, YOUTUBE_FEED, parser=parse_atom, params={"channel_id": channel_id})
        videos = []
        for item in feed.items:
            if len(videos) >= VIDEOS_PER_CHANNEL:
                break
            if not item.video_id or not item.title:
                continue
            videos.append(
                Video(
                    id=f"yt-{item.video_id}",
                    video_id=item.video_id,
                    title=item.title,
                    description=clean_text(item.description, limit=300),
                    thumbnail=item.thumbnail or f"https://i.ytimg.com/vi/{item.video_id}/mqdefault.jpg",
                    pub_date=item.published,
                    channel_name=channel_name,
                    url=f"https://www.youtube.com/watch?v={item.video_id}",
                )
            )
        return videos
