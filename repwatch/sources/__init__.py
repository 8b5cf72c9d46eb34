# Upstream adapters
from repwatch.sources.base import BaseSource, SourceResult
from repwatch.sources.civic import CivicLookupSource
from repwatch.sources.congress import CongressBillsSource, CongressMembersSource
from repwatch.sources.courtlistener import CourtListenerSource
from repwatch.sources.federal_register import FederalRegisterSource
from repwatch.sources.lobbying import LobbyingSource
from repwatch.sources.markets import KalshiSource, PolymarketSource
from repwatch.sources.news import GoogleNewsSource
from repwatch.sources.openstates import (
    OpenStatesBillDetailSource,
    OpenStatesBillsSource,
    OpenStatesCommitteesSource,
    OpenStatesLegislatorsSource,
    OpenStatesPeopleSearchSource,
    OpenStatesVotesSource,
)
from repwatch.sources.podcasts import PodcastSource
from repwatch.sources.tigerweb import TigerWebSource
from repwatch.sources.youtube import YouTubeSource

__all__ = [
    "BaseSource",
    "SourceResult",
    "CivicLookupSource",
    "CongressBillsSource",
    "CongressMembersSource",
    "CourtListenerSource",
    "FederalRegisterSource",
    "LobbyingSource",
    "KalshiSource",
    "PolymarketSource",
    "GoogleNewsSource",
    "OpenStatesBillDetailSource",
    "OpenStatesBillsSource",
    "OpenStatesCommitteesSource",
    "OpenStatesLegislatorsSource",
    "OpenStatesPeopleSearchSource",
    "OpenStatesVotesSource",
    "PodcastSource",
    "TigerWebSource",
    "YouTubeSource",
]
