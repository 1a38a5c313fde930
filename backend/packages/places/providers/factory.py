"""
Factory for getting the places provider instance.
"""

from common.core.config import settings
from packages.places.providers.interface import PlacesProviderInterface
from packages.places.providers.example_places import ExamplePlacesProvider


def get_places_provider() -> PlacesProviderInterface:
    """
    Get places provider instance.

    Only the bundled example catalogue is available; a live data source
    plugs in here behind the same interface.
    """
    if settings.places_provider == "example":
        return ExamplePlacesProvider()
    raise ValueError(
        f"Unsupported places provider: {settings.places_provider}. Supported: example."
    )
