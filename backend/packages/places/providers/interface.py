from abc import ABC, abstractmethod
from typing import List

from packages.places.models.domain.place import Place


class PlacesProviderInterface(ABC):
    """Interface for places data sources."""

    @abstractmethod
    async def search(self, query: str, location: str, max_results: int) -> List[Place]:
        """
        Search places of a category near a location.

        Args:
            query: Place category, e.g. "restaurant"
            location: Free-text location, may be empty
            max_results: Upper bound on returned places

        Returns:
            Matching places, possibly empty
        """
        pass
