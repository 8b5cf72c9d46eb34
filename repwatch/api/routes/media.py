"""Media routes - news, podcasts, YouTube."""

from fastapi import APIRouter, Depends

from repwatch.api.deps import source_provider
from repwatch.schemas.api import NewsRequest, NewsResponse, PodcastsResponse, VideosResponse
from repwatch.sources.news import GoogleNewsSource
from repwatch.sources.podcasts import PodcastSource
from repwatch.sources.youtube import YouTubeSource

router = APIRouter(prefix="/media", tags=["media"])


@router.post("/news", response_model=NewsResponse)
async def news(body: NewsRequest, source: GoogleNewsSource = Depends(source_provider(GoogleNewsSource))):
    articles = (await source.fetch(body.params())).unwrap()
    return NewsResponse(articles=articles, total=len(articles))


@router.post("/podcasts", response_model=PodcastsResponse)
async def podcasts(source: PodcastSource = Depends(source_provider(PodcastSource))):
    """Latest episodes from the configured podcasts; one dead feed does not fail the call."""
    return PodcastsResponse(episodes=(await source.fetch()).unwrap())


@router.post("/youtube", response_model=VideosResponse)
async def youtube(source: YouTubeSource = Depends(source_provider(YouTubeSource))):
    """Latest uploads from the configured channels."""
    return VideosResponse(videos=(await source.fetch()).unwrap())
