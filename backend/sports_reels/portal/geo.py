"""
Country lookup for the world map.

A fixed country -> (longitude, latitude) table. Countries missing from the
table are dropped from the map rather than geocoded.
"""
from typing import Dict, Iterable, List, Optional, Tuple
from sports_reels.portal.schemas import MapData, PlayerOrigin, TransferDestination

Coordinates = Tuple[float, float]

COUNTRY_COORDINATES: Dict[str, Coordinates] = {
    'nigeria': (8.6753, 9.0820),
    'norway': (8.4689, 60.4720),
    'benin': (2.3158, 9.3077),
    'ghana': (-1.0232, 7.9465),
    'senegal': (-14.4524, 14.4974),
    'cameroon': (12.3547, 7.3697),
    'ivory coast': (-5.5471, 7.5400),
    "cote d'ivoire": (-5.5471, 7.5400),
    'mali': (-3.9962, 17.5707),
    'burkina faso': (-1.5616, 12.2383),
    'togo': (0.8248, 8.6195),
    'guinea': (-9.6966, 9.9456),
    'morocco': (-7.0926, 31.7917),
    'egypt': (30.8025, 26.8206),
    'south africa': (22.9375, -30.5595),
    'algeria': (1.6596, 28.0339),
    'tunisia': (9.5375, 33.8869),
    'dr congo': (21.7587, -4.0383),
    'zambia': (27.8493, -13.1339),
    'zimbabwe': (29.1549, -19.0154),
    'united kingdom': (-3.4360, 55.3781),
    'england': (-1.1743, 52.3555),
    'scotland': (-4.2026, 56.4907),
    'wales': (-3.7837, 52.1307),
    'germany': (10.4515, 51.1657),
    'france': (2.2137, 46.2276),
    'spain': (-3.7492, 40.4637),
    'italy': (12.5674, 41.8719),
    'portugal': (-8.2245, 39.3999),
    'netherlands': (5.2913, 52.1326),
    'belgium': (4.4699, 50.5039),
    'denmark': (9.5018, 56.2639),
    'sweden': (18.6435, 60.1282),
    'poland': (19.1451, 51.9194),
    'turkey': (35.2433, 38.9637),
    'greece': (21.8243, 39.0742),
    'austria': (14.5501, 47.5162),
    'switzerland': (8.2275, 46.8182),
    'czech republic': (15.4730, 49.8175),
    'ukraine': (31.1656, 48.3794),
    'russia': (105.3188, 61.5240),
    'united states': (-95.7129, 37.0902),
    'usa': (-95.7129, 37.0902),
    'brazil': (-51.9253, -14.2350),
    'argentina': (-63.6167, -38.4161),
    'mexico': (-102.5528, 23.6345),
    'colombia': (-74.2973, 4.5709),
    'chile': (-71.5430, -35.6751),
    'uruguay': (-55.7658, -32.5228),
    'japan': (138.2529, 36.2048),
    'south korea': (127.7669, 35.9078),
    'china': (104.1954, 35.8617),
    'australia': (133.7751, -25.2744),
    'qatar': (51.1839, 25.3548),
    'saudi arabia': (45.0792, 23.8859),
    'uae': (53.8478, 23.4241),
    'united arab emirates': (53.8478, 23.4241),
}


def country_coordinates(country: Optional[str]) -> Optional[Coordinates]:
    """Coordinates for a country name, ignoring case and surrounding whitespace."""
    if not country:
        return None
    return COUNTRY_COORDINATES.get(country.strip().lower())


def marker_color(count: int) -> str:
    """Chart tone for an origin marker by player count."""
    if count >= 5:
        return 'chart-1'
    if count >= 3:
        return 'chart-2'
    return 'chart-3'


def mappable_origins(origins: Iterable[PlayerOrigin]) -> List[PlayerOrigin]:
    return [origin for origin in origins if country_coordinates(origin.country)]


def mappable_transfers(transfers: Iterable[TransferDestination]) -> List[TransferDestination]:
    return [
        transfer for transfer in transfers
        if country_coordinates(transfer.from_country) and country_coordinates(transfer.to_country)
    ]


def build_markers(data: MapData) -> Dict[str, object]:
    """
    Everything the map renders: origin markers, transfer lines and the
    header totals, all computed from mappable entries only.
    """
    origins = mappable_origins(data.player_origins)
    transfers = mappable_transfers(data.transfer_destinations)
    return {
        'markers': [
            {
                'country': origin.country,
                'coordinates': country_coordinates(origin.country),
                'count': origin.count,
                'color': marker_color(origin.count),
                'players': [player.name for player in origin.players],
            }
            for origin in origins
        ],
        'lines': [
            {
                'player_id': transfer.player_id,
                'player_name': transfer.player_name,
                'from': country_coordinates(transfer.from_country),
                'to': country_coordinates(transfer.to_country),
            }
            for transfer in transfers
        ],
        'total_players': sum(origin.count for origin in origins),
        'unique_countries': len(origins),
    }
