from datetime import datetime
from typing import List, Optional

from pydantic import Field

from common.models.schemas import APISchema
from packages.places.models.domain.place import Place


class PlacesSearchRequest(APISchema):
    query: str = ""
    location: str = ""
    max_results: int = Field(default=20, ge=1, le=100)


class PlacesSearchResponse(APISchema):
    # Consumption event id, absent when the search could not be recorded
    id: Optional[int] = None
    query: str
    location: str
    places: List[Place]
    results_count: int
    created_at: datetime
