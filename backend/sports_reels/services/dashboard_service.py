"""
Dashboard counters and world map data.
"""
from collections import OrderedDict
from typing import Any, Dict, List
from sports_reels.db.models.compliance import ComplianceDocument
from sports_reels.db.models.embassy import EmbassyVerification
from sports_reels.db.models.federation import FederationLetterRequest
from sports_reels.db.models.scouting import ScoutingInquiry
from sports_reels.services.player_service import players_visible_to

GREEN_SCORE = 60
YELLOW_SCORE = 35


def get_stats(user) -> Dict[str, int]:
    """
    Headline counters for the user's dashboard.

    Players are bucketed by overall score; players without any recorded
    score are counted in the total only.
    """
    players = players_visible_to(user)
    green = yellow = red = 0
    for score in players.exclude(overall_score__isnull=True).values_list('overall_score', flat=True):
        if score >= GREEN_SCORE:
            green += 1
        elif score >= YELLOW_SCORE:
            yellow += 1
        else:
            red += 1

    return {
        'total_players': players.count(),
        'green_status': green,
        'yellow_status': yellow,
        'red_status': red,
        'pending_verifications': EmbassyVerification.objects.filter(
            player__in=players, status=EmbassyVerification.Status.PENDING,
        ).count(),
        'active_inquiries': ScoutingInquiry.objects.filter(player__in=players).exclude(
            status=ScoutingInquiry.Status.CLOSED,
        ).count(),
        'reports_generated': ComplianceDocument.objects.filter(player__in=players).count(),
    }


def get_map_data(user) -> Dict[str, List[Dict[str, Any]]]:
    """
    Player origins by nationality and transfer destinations.

    Countries are lowercased; players without a nationality and letters
    without a destination are left out.
    """
    players = players_visible_to(user).order_by('last_name', 'first_name')
    origins: Dict[str, Dict[str, Any]] = OrderedDict()
    for player in players:
        country = (player.nationality or '').strip().lower()
        if not country:
            continue
        origin = origins.setdefault(country, {'country': country, 'count': 0, 'players': []})
        origin['count'] += 1
        origin['players'].append({'id': str(player.id), 'name': player.full_name})

    destinations = []
    letters = FederationLetterRequest.objects.filter(player__in=players).select_related('player')
    for letter in letters:
        from_country = (letter.player.nationality or '').strip().lower()
        to_country = (letter.target_club_country or '').strip().lower()
        if not from_country or not to_country:
            continue
        destinations.append({
            'from_country': from_country,
            'to_country': to_country,
            'player_name': letter.player.full_name,
            'player_id': str(letter.player_id),
        })

    return {
        'player_origins': list(origins.values()),
        'transfer_destinations': destinations,
    }
