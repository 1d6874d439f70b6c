"""Points of interest shown on the /map page, each linked to a post."""

from app.models.map_point import MapPoint, MapView

MAP_VIEW = MapView(
    center=(22.031755070238948, -97.27557099167655),
    zoom=5,
    points=[
        MapPoint(
            id=1,
            title="Tampico, Mexico",
            lat=22.2549,
            lng=-97.8664,
            post_slug="tampico-port-history",
            post_title="The Historic Port of Tampico",
            post_excerpt=(
                "Discover the rich history of Tampico's port, one of Mexico's most "
                "important maritime gateways since the 19th century..."
            ),
        ),
        MapPoint(
            id=2,
            title="Veracruz, Mexico",
            lat=19.1738,
            lng=-96.1342,
            post_slug="veracruz-maritime-trade",
            post_title="Veracruz: Gateway to the Gulf",
            post_excerpt=(
                "Explore how Veracruz became Mexico's primary port for international "
                "trade and its significance in modern commerce..."
            ),
        ),
        MapPoint(
            id=3,
            title="Coatzacoalcos, Mexico",
            lat=18.1345,
            lng=-94.459,
            post_slug="coatzacoalcos-industrial-port",
            post_title="Coatzacoalcos: Industrial Hub",
            post_excerpt=(
                "Learn about the industrial development of Coatzacoalcos and its role "
                "in Mexico's petrochemical industry..."
            ),
        ),
        MapPoint(
            id=4,
            title="Ciudad del Carmen, Mexico",
            lat=18.6445,
            lng=-91.829,
            post_slug="ciudad-del-carmen-oil",
            post_title="Ciudad del Carmen: Oil City",
            post_excerpt=(
                "Discover how Ciudad del Carmen transformed from a fishing village to "
                "a major oil industry center..."
            ),
        ),
        MapPoint(
            id=5,
            title="Progreso, Mexico",
            lat=21.2822,
            lng=-89.6627,
            post_slug="progreso-yucatan-port",
            post_title="Progreso: Yucatán's Maritime Gateway",
            post_excerpt=(
                "Experience the development of Progreso as the Yucatán Peninsula's main "
                "port and tourist destination..."
            ),
        ),
    ],
)
