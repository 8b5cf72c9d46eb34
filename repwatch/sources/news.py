"""Google News RSS search source."""

from typing import Any, Dict, List

from repwatch.core.errors import InvalidInput
from repwatch.schemas.records import NewsArticle
from .feeds import FeedSource, clean_text, stable_item_id

GOOGLE_NEWS_RSS = "https://news.google.com/rss/search"
MAX_ARTICLES = 20


class GoogleNewsSource(FeedSource):
    """Recent political coverage of one named person."""

    name = "news"
    label = "Google News"

    async def _fetch(self, params: Dict[str, Any]) -> List[NewsArticle]:
        term = (params.get("politicianName") or params.get("search") or "").strip()
        if not term:
            raise InvalidInput("politicianName is required")

        query = {"q": f'"{term}" politics', "hl": "en-US", "gl": "US", "ceid": "US:en"}
        headers = {"User-Agent": "Mozilla/5.0 (compatible; repwatch/1.0)"}
        async with self.client() as client:
            feed = await self.get_feed(client, GOOGLE_NEWS_RSS, params=query, headers=headers)

        articles = []
        for item in feed.items[:MAX_ARTICLES]:
            if not item.link:
                continue
            articles.append(
                NewsArticle(
                    id=stable_item_id("gnews", item),
                    title=item.title,
                    url=item.link,
                    source=item.source or self.label,
                    date=self.iso_date(item.published),
                    summary=clean_text(item.description, limit=300),
                )
            )
        return articles
