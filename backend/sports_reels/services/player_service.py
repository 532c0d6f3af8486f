"""
Player service layer for business logic.
"""
from datetime import date
from typing import Any, Dict, List, Optional
from uuid import UUID
from django.db import transaction
from django.db.models import Q, QuerySet
from sports_reels.core.errors import AuthorizationError, NotFoundError, ValidationError
from sports_reels.core.logging import get_logger
from sports_reels.db.models.player import InternationalRecord, Player, PlayerMetrics
from sports_reels.services import token_service

logger = get_logger(__name__)

INTEGER_FIELDS = (
    'league_band',
    'national_team_caps',
    'international_caps',
    'continental_games',
    'club_minutes_current_season',
    'club_minutes_last_12_months',
    'international_minutes',
    'total_career_minutes',
    'goals',
    'assists',
)
TEXT_FIELDS = (
    'first_name',
    'last_name',
    'position',
    'nationality',
    'second_nationality',
    'current_club_name',
    'current_league',
    'agent_name',
)
DATE_FIELDS = ('date_of_birth', 'contract_end_date')
BOOLEAN_FIELDS = ('medical_data_available', 'gps_data_available', 'published_to_scouts')
SCORE_FIELDS = Player.SCORE_FIELDS


def _parse_date(name: str, value) -> Optional[date]:
    if value in (None, ''):
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise ValidationError(f"'{name}' must be an ISO date (YYYY-MM-DD)")


def _parse_int(name: str, value) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"'{name}' must be an integer")
    if number < 0:
        raise ValidationError(f"'{name}' must be non-negative")
    return number


def _parse_score(name: str, value) -> Optional[float]:
    if value is None:
        return None
    try:
        score = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"'{name}' must be a number")
    if not 0 <= score <= 100:
        raise ValidationError(f"'{name}' must be between 0 and 100")
    return score


def clean_player_fields(data: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
    """
    Validate and coerce player fields from a request payload.

    Unknown keys are ignored.

    Raises:
        ValidationError: on missing required fields or invalid values
    """
    fields: Dict[str, Any] = {}
    for name in TEXT_FIELDS:
        if name in data:
            fields[name] = (data.get(name) or '').strip()
    for name in INTEGER_FIELDS:
        if name in data and data[name] is not None:
            fields[name] = _parse_int(name, data[name])
    for name in DATE_FIELDS:
        if name in data:
            fields[name] = _parse_date(name, data[name])
    for name in BOOLEAN_FIELDS:
        if name in data:
            fields[name] = bool(data[name])
    for name in SCORE_FIELDS:
        if name in data:
            fields[name] = _parse_score(name, data[name])
    if 'market_value' in data:
        value = data['market_value']
        try:
            fields['market_value'] = None if value is None else float(value)
        except (TypeError, ValueError):
            raise ValidationError("'market_value' must be a number")

    if 'league_band' in fields and not 1 <= fields['league_band'] <= 5:
        raise ValidationError('League band must be between 1 and 5')

    if not partial:
        for required in ('first_name', 'last_name', 'nationality'):
            if not fields.get(required):
                raise ValidationError(f"'{required}' is required")
    else:
        for required in ('first_name', 'last_name', 'nationality'):
            if required in fields and not fields[required]:
                raise ValidationError(f"'{required}' cannot be empty")
    return fields


def players_visible_to(user) -> QuerySet:
    """
    Players a user may read.

    Team members see their team's players, scouts and agents see published
    players, embassy, federation and admin users see all players.
    """
    queryset = Player.objects.all()
    if user.is_team_member:
        return queryset.filter(team_id=user.team_id) if user.team_id else queryset.none()
    if user.is_scout:
        return queryset.filter(published_to_scouts=True)
    return queryset


def get_player(user, player_id: UUID) -> Player:
    """
    Raises:
        NotFoundError: if the player does not exist or is not visible
    """
    try:
        return players_visible_to(user).get(id=player_id)
    except (Player.DoesNotExist, ValueError):
        raise NotFoundError('Player not found')


def get_editable_player(user, player_id: UUID) -> Player:
    """
    A player the user's team owns (admins may edit any player).

    Raises:
        NotFoundError: if the player does not exist
        AuthorizationError: if the user cannot edit it
    """
    try:
        player = Player.objects.get(id=player_id)
    except (Player.DoesNotExist, ValueError):
        raise NotFoundError('Player not found')
    if user.role == 'admin':
        return player
    if not user.is_team_member or player.team_id != user.team_id:
        raise AuthorizationError('Only the owning team can modify this player')
    return player


def list_players(
    user,
    search: Optional[str] = None,
    nationality: Optional[str] = None,
) -> QuerySet:
    """
    List visible players with optional filtering.

    Args:
        user: Requesting user
        search: Optional case-insensitive name or club search
        nationality: Optional exact nationality (case-insensitive)

    Returns:
        Player queryset ordered newest first
    """
    queryset = players_visible_to(user)
    if search:
        queryset = queryset.filter(
            Q(first_name__icontains=search)
            | Q(last_name__icontains=search)
            | Q(current_club_name__icontains=search)
        )
    if nationality:
        queryset = queryset.filter(nationality__iexact=nationality)
    return queryset.order_by('-created_at')


def create_player(user, data: Dict[str, Any]) -> Player:
    """
    Create a player for the user's team.

    Raises:
        AuthorizationError: if the user is not a team member with a team
        ValidationError: on invalid fields
    """
    if not user.is_team_member or not user.team_id:
        raise AuthorizationError('Only team members can create players')
    fields = clean_player_fields(data)

    with transaction.atomic():
        player = Player(team_id=user.team_id, **fields)
        player.refresh_overall_score()
        player.save()

    logger.info(f"Created player {player.id} ({player.full_name}) for team {user.team_id}")
    return player


def update_player(user, player_id: UUID, data: Dict[str, Any]) -> Player:
    player = get_editable_player(user, player_id)
    fields = clean_player_fields(data, partial=True)
    for name, value in fields.items():
        setattr(player, name, value)
    player.refresh_overall_score()
    player.save()
    logger.info(f"Updated player {player.id}: {', '.join(sorted(fields)) or 'no changes'}")
    return player


def delete_player(user, player_id: UUID) -> None:
    player = get_editable_player(user, player_id)
    player.delete()
    logger.info(f"Deleted player {player_id} by user {user.id}")


def set_published(user, player_id: UUID, published: bool) -> Player:
    player = get_editable_player(user, player_id)
    player.published_to_scouts = published
    player.save(update_fields=['published_to_scouts', 'updated_at'])
    logger.info(f"Player {player.id} published_to_scouts={published}")
    return player


def record_metrics(user, player_id: UUID, data: Dict[str, Any]) -> PlayerMetrics:
    """
    Create or update the metrics of one season.

    Raises:
        ValidationError: if season is missing or numbers are invalid
    """
    player = get_editable_player(user, player_id)
    season = str(data.get('season') or '').strip()
    if not season:
        raise ValidationError("'season' is required")

    defaults = {}
    for name in ('current_season_minutes', 'games_played', 'goals', 'assists'):
        if data.get(name) is not None:
            defaults[name] = _parse_int(name, data[name])

    metrics, created = PlayerMetrics.objects.update_or_create(player=player, season=season, defaults=defaults)
    logger.info(f"{'Created' if created else 'Updated'} {season} metrics for player {player.id}")
    return metrics


def list_international_records(user, player_id: UUID) -> List[InternationalRecord]:
    player = get_player(user, player_id)
    return list(player.international_records.all())


def add_international_record(user, player_id: UUID, data: Dict[str, Any]) -> InternationalRecord:
    player = get_editable_player(user, player_id)
    team_level = data.get('team_level') or InternationalRecord.TeamLevel.SENIOR
    if team_level not in InternationalRecord.TeamLevel.values:
        raise ValidationError(f"'team_level' must be one of: {', '.join(InternationalRecord.TeamLevel.values)}")
    national_team = (data.get('national_team') or player.nationality or '').strip()
    if not national_team:
        raise ValidationError("'national_team' is required")

    record = InternationalRecord.objects.create(
        player=player,
        national_team=national_team,
        team_level=team_level,
        caps=_parse_int('caps', data.get('caps', 0)),
        goals=_parse_int('goals', data.get('goals', 0)),
        debut_date=_parse_date('debut_date', data.get('debut_date')),
    )
    logger.info(f"Added {team_level} record ({record.caps} caps) for player {player.id}")
    return record


def list_scout_players(search: Optional[str] = None, nationality: Optional[str] = None) -> QuerySet:
    """Players their teams have published to scouts."""
    queryset = Player.objects.filter(published_to_scouts=True)
    if search:
        queryset = queryset.filter(
            Q(first_name__icontains=search)
            | Q(last_name__icontains=search)
            | Q(current_club_name__icontains=search)
        )
    if nationality:
        queryset = queryset.filter(nationality__iexact=nationality)
    return queryset.order_by('-overall_score', 'last_name')


def view_scout_profile(user, player_id: UUID) -> Dict[str, Any]:
    """
    Open the full profile of a published player.

    Scouts and agents pay the view_profile cost on every view.

    Returns:
        Dict with player and new_balance (None when nothing was charged)

    Raises:
        NotFoundError: if the player is not published
        InsufficientTokensError: if the viewer cannot pay
    """
    try:
        player = Player.objects.get(id=player_id, published_to_scouts=True)
    except (Player.DoesNotExist, ValueError):
        raise NotFoundError('Player not found')

    new_balance = None
    if user.is_scout:
        new_balance = token_service.spend_tokens(user, 'view_profile', player_id=player.id)['new_balance']
    logger.info(f"User {user.id} viewed scout profile of player {player.id}")
    return {'player': player, 'new_balance': new_balance}
