"""Service running a places search against the configured data source."""

from typing import Any, Dict, List, Optional

from common.core.otel_axiom_exporter import trace_span, get_logger
from packages.places.exceptions import NoPlacesFound
from packages.places.models.domain.place import Place
from packages.places.providers.factory import get_places_provider
from packages.places.providers.interface import PlacesProviderInterface

logger = get_logger(__name__)


class PlacesSearchService:
    """The protected operation behind the admission gate."""

    def __init__(self, provider: Optional[PlacesProviderInterface] = None):
        self.provider = provider or get_places_provider()

    @trace_span
    async def search(self, query: str, location: str, max_results: int) -> List[Place]:
        """
        Search places.

        Raises:
            NoPlacesFound: The source returned nothing; the search is not billed
        """
        logger.info(
            f"Starting places search: {query!r} in {location!r}",
            extra={"query": query, "location": location, "max_results": max_results},
        )
        places = await self.provider.search(query, location, max_results)
        if not places:
            raise NoPlacesFound(
                "No places found. Try a different search query or location.",
                query=query,
                location=location,
            )
        return places

    @staticmethod
    def describe(query: str, location: str, places: List[Place]) -> Dict[str, Any]:
        """Event metadata stored with the consumption record."""
        return {"query": query, "location": location, "results_count": len(places)}
