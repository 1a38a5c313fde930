"""
Bundled example places catalogue.

Results are generated from per-category templates with the requested city
substituted in. Unknown categories fall back to restaurants.
"""

from typing import Dict, List, Tuple

from common.core.otel_axiom_exporter import trace_span, get_logger
from packages.places.models.domain.place import Place
from packages.places.providers.interface import PlacesProviderInterface

logger = get_logger(__name__)

DEFAULT_CITY = "Paris"
FALLBACK_CATEGORY = "restaurant"

# (name, category, rating, address, phone, website, hours); {city} is substituted
_TEMPLATES: Dict[str, List[Tuple[str, ...]]] = {
    "supermarché": [
        ("Carrefour Market {city}", "Supermarché", "4.2", "123 Rue de la République, {city}", "01 23 45 67 89", "www.carrefour.fr", "Lun-Sam: 8h-20h"),
        ("Monoprix {city} Centre", "Supermarché", "4.0", "45 Avenue des Champs, {city}", "01 98 76 54 32", "www.monoprix.fr", "Lun-Dim: 9h-21h"),
        ("Franprix {city}", "Supermarché", "3.8", "78 Boulevard Saint-Michel, {city}", "01 11 22 33 44", "www.franprix.fr", "Lun-Sam: 7h-22h"),
        ("Auchan {city}", "Hypermarché", "4.1", "12 Rue du Commerce, {city}", "01 55 66 77 88", "www.auchan.fr", "Lun-Sam: 8h30-21h30"),
        ("Lidl {city}", "Supermarché", "3.9", "90 Avenue de la Liberté, {city}", "01 44 55 66 77", "www.lidl.fr", "Lun-Sam: 8h-20h"),
    ],
    "restaurant": [
        ("Le Bistrot du {city}", "Restaurant français", "4.5", "15 Rue de la Paix, {city}", "01 42 33 44 55", "N/A", "Mar-Sam: 12h-14h30, 19h-22h30"),
        ("Pizza Roma {city}", "Restaurant italien", "4.3", "28 Avenue Victor Hugo, {city}", "01 43 54 65 76", "www.pizzaroma.fr", "Tous les jours: 11h30-23h"),
        ("Sushi Sakura", "Restaurant japonais", "4.6", "67 Boulevard Haussmann, {city}", "01 45 67 89 01", "www.sushisakura.fr", "Lun-Dim: 12h-15h, 18h30-23h"),
        ("Le Petit Café", "Brasserie", "4.1", "34 Place de la République, {city}", "01 46 78 90 12", "N/A", "Lun-Ven: 7h-23h"),
        ("Burger Factory", "Fast food", "4.0", "89 Rue Saint-Antoine, {city}", "01 47 89 01 23", "www.burgerfactory.fr", "Tous les jours: 11h-minuit"),
    ],
    "hôtel": [
        ("Hôtel de {city}", "Hôtel 3 étoiles", "4.2", "10 Place de la Concorde, {city}", "01 40 50 60 70", "www.hotelville.fr", "Réception 24h/24"),
        ("Ibis {city} Centre", "Hôtel 2 étoiles", "3.9", "25 Rue Lafayette, {city}", "01 41 52 63 74", "www.ibis.com", "Réception 24h/24"),
        ("Novotel {city}", "Hôtel 4 étoiles", "4.4", "50 Avenue des Ternes, {city}", "01 42 53 64 75", "www.novotel.com", "Réception 24h/24"),
        ("Best Western {city}", "Hôtel 3 étoiles", "4.1", "18 Boulevard Voltaire, {city}", "01 43 54 65 76", "www.bestwestern.fr", "Réception 24h/24"),
        ("Mercure {city}", "Hôtel 4 étoiles", "4.3", "75 Rue de Rivoli, {city}", "01 44 55 66 77", "www.mercure.com", "Réception 24h/24"),
    ],
    "pharmacie": [
        ("Pharmacie Centrale {city}", "Pharmacie", "4.4", "22 Place de la Mairie, {city}", "01 42 33 44 55", "N/A", "Lun-Sam: 8h30-19h30"),
        ("Pharmacie des Halles", "Pharmacie", "4.2", "15 Rue Commerçante, {city}", "01 43 54 65 76", "N/A", "Lun-Ven: 9h-19h, Sam: 9h-18h"),
        ("Pharmacie du Marché", "Pharmacie", "4.0", "8 Avenue du Marché, {city}", "01 44 55 66 77", "N/A", "Lun-Sam: 8h-20h"),
    ],
}


class ExamplePlacesProvider(PlacesProviderInterface):
    """Serves the bundled catalogue; no network access."""

    @trace_span
    async def search(self, query: str, location: str, max_results: int) -> List[Place]:
        city = location or DEFAULT_CITY
        category = query.lower()
        templates = _TEMPLATES.get(category)
        if templates is None:
            logger.info(
                f"No example data for {query!r}, using {FALLBACK_CATEGORY}",
                extra={"query": query},
            )
            templates = _TEMPLATES[FALLBACK_CATEGORY]

        places = [
            Place(
                name=name.format(city=city),
                category=place_category,
                rating=rating,
                address=address.format(city=city),
                phone=phone,
                website=website,
                hours=hours,
            )
            for name, place_category, rating, address, phone, website, hours in templates
        ]
        return places[:max_results]
