"""Services layer - Application orchestration.

Available services:
- TrailNetworkService: Builds the graph and the walk candidate catalogue
- StopAreaService: Harvests and resolves stop areas
- ItineraryRanker: Ranks transit + walk + transit itineraries
- search_walks: Walk-only search without transit
"""

from .itinerary_ranker import ItineraryRanker, RankingRequest, score_journey
from .network_service import NetworkSummary, TrailNetworkService
from .report import format_itinerary, format_walk
from .stop_area_service import StopAreaService
from .walk_search import search_walks

__all__ = [
    "TrailNetworkService",
    "NetworkSummary",
    "StopAreaService",
    "ItineraryRanker",
    "RankingRequest",
    "score_journey",
    "search_walks",
    "format_walk",
    "format_itinerary",
]
