"""
Video service layer.
"""
from datetime import date, timedelta
from typing import Any, Dict, List, Optional
from uuid import UUID
from django.conf import settings
from django.db import transaction
from django.db.models import Sum
from django.utils import timezone
from sports_reels.core.errors import NotFoundError, ServiceUnavailableError, ValidationError
from sports_reels.core.logging import get_logger
from sports_reels.db.models.player import Player
from sports_reels.db.models.video import Video, VideoInsight
from sports_reels.services import analysis_service, token_service
from sports_reels.services.player_service import get_editable_player, get_player, players_visible_to

logger = get_logger(__name__)

ALLOWED_UPLOAD_PREFIXES = ('video/', 'image/')
ALLOWED_UPLOAD_TYPES = ('application/pdf',)

TEXT_FIELDS = ('title', 'file_url', 'thumbnail_url', 'competition', 'opponent')


def validate_upload_request(name: str, size, content_type: str) -> None:
    """
    Check file metadata before issuing an upload URL.

    Raises:
        ValidationError: on a missing name, unsupported type or oversize file
    """
    if not name:
        raise ValidationError("'name' is required")
    if not content_type or not (
        content_type.startswith(ALLOWED_UPLOAD_PREFIXES) or content_type in ALLOWED_UPLOAD_TYPES
    ):
        raise ValidationError('File type not supported. Allowed types: video/*, image/*, application/pdf')
    try:
        size = int(size)
    except (TypeError, ValueError):
        raise ValidationError("'size' must be an integer")
    max_size = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
    if size <= 0:
        raise ValidationError('File is empty')
    if size > max_size:
        raise ValidationError(f'File too large. Maximum size: {settings.MAX_UPLOAD_SIZE_MB}MB')


def season_start(today: date) -> date:
    """Football seasons start on 1 July."""
    year = today.year if today.month >= 7 else today.year - 1
    return date(year, 7, 1)


def sync_player_minutes_from_videos(player: Player, today: Optional[date] = None) -> Player:
    """
    Raise the player's minute totals to what their videos evidence.

    Totals are never lowered: each field becomes the max of its recorded
    value and the sum of video minutes in the matching window.
    """
    today = today or timezone.now().date()
    videos = Video.objects.filter(player=player)

    def total(queryset) -> int:
        return queryset.aggregate(total=Sum('minutes_played'))['total'] or 0

    career = total(videos)
    last_12_months = total(videos.filter(match_date__gte=today - timedelta(days=365)))
    current_season = total(videos.filter(match_date__gte=season_start(today)))

    player.total_career_minutes = max(player.total_career_minutes, career)
    player.club_minutes_last_12_months = max(player.club_minutes_last_12_months, last_12_months)
    player.club_minutes_current_season = max(player.club_minutes_current_season, current_season)
    player.save(update_fields=[
        'total_career_minutes',
        'club_minutes_last_12_months',
        'club_minutes_current_season',
        'updated_at',
    ])
    return player


def _clean_video_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    fields: Dict[str, Any] = {}
    for name in TEXT_FIELDS:
        if name in data:
            fields[name] = (data.get(name) or '').strip()
    if 'source' in data:
        if data['source'] not in Video.Source.values:
            raise ValidationError(f"'source' must be one of: {', '.join(Video.Source.values)}")
        fields['source'] = data['source']
    for name in ('duration', 'minutes_played'):
        if name in data and data[name] is not None:
            try:
                fields[name] = int(data[name])
            except (TypeError, ValueError):
                raise ValidationError(f"'{name}' must be an integer")
            if fields[name] < 0:
                raise ValidationError(f"'{name}' must be non-negative")
    if 'match_date' in data:
        value = data['match_date']
        try:
            fields['match_date'] = date.fromisoformat(str(value)[:10]) if value else None
        except ValueError:
            raise ValidationError("'match_date' must be an ISO date (YYYY-MM-DD)")
    return fields


def list_videos(user, player_id: Optional[UUID] = None) -> List[Video]:
    queryset = Video.objects.filter(player__in=players_visible_to(user)).select_related('player')
    if player_id:
        queryset = queryset.filter(player_id=player_id)
    return list(queryset)


def get_video(user, video_id: UUID) -> Video:
    try:
        return Video.objects.select_related('player').get(
            id=video_id, player__in=players_visible_to(user),
        )
    except (Video.DoesNotExist, ValueError):
        raise NotFoundError('Video not found')


def create_video(user, data: Dict[str, Any]) -> Video:
    """
    Register a video whose file is already in object storage.

    Args:
        user: Team member creating the video
        data: player_id, title, file_url (object path) and match metadata

    Returns:
        Created Video

    Raises:
        ValidationError: on missing title or file reference
    """
    player_id = data.get('player_id')
    if not player_id:
        raise ValidationError("'player_id' is required")
    player = get_editable_player(user, player_id)
    fields = _clean_video_fields(data)
    if not fields.get('title'):
        raise ValidationError("'title' is required")
    if fields.get('source', Video.Source.MANUAL) == Video.Source.MANUAL and not fields.get('file_url'):
        raise ValidationError("'file_url' is required for manual uploads")

    with transaction.atomic():
        video = Video.objects.create(player=player, team_id=player.team_id, **fields)
        sync_player_minutes_from_videos(player)

    logger.info(f"Created video {video.id} ({video.title}) for player {player.id}")
    return video


def update_video(user, video_id: UUID, data: Dict[str, Any]) -> Video:
    video = get_video(user, video_id)
    get_editable_player(user, video.player_id)
    fields = _clean_video_fields(data)
    if 'title' in fields and not fields['title']:
        raise ValidationError("'title' cannot be empty")

    with transaction.atomic():
        for name, value in fields.items():
            setattr(video, name, value)
        video.save()
        sync_player_minutes_from_videos(video.player)

    logger.info(f"Updated video {video.id}")
    return video


def player_videos(user, player_id: UUID) -> List[Video]:
    player = get_player(user, player_id)
    return list(player.videos.all())


def analyze(user, video_id: UUID) -> Dict[str, Any]:
    """
    Run AI analysis on a video and store the insight.

    The video_analysis cost is charged up front and refunded when the
    analysis fails.

    Returns:
        Dict with insight, analysis and new_balance

    Raises:
        ServiceUnavailableError: if no analysis model is configured
        InsufficientTokensError: if the user cannot pay for the analysis
    """
    video = get_video(user, video_id)
    if not analysis_service.llm_configured():
        raise ServiceUnavailableError('AI analysis is not configured')

    charge = token_service.spend_tokens(user, 'video_analysis', player_id=video.player_id, video_id=video.id)
    try:
        result = analysis_service.analyze_video(video, video.player, user_id=user.id)
    except Exception:
        token_service.refund_tokens(user, 'video_analysis', charge['cost'], video.player_id, video.id)
        raise

    with transaction.atomic():
        insight = VideoInsight.objects.create(
            video=video,
            player=video.player,
            minutes_played=result.minutes_played,
            distance_covered_km=result.distance_covered_km,
            sprint_count=result.sprint_count,
            passes_attempted=result.passes_attempted,
            passes_completed=result.passes_completed,
            shots_on_target=result.shots_on_target,
            tackles=result.tackles,
            interceptions=result.interceptions,
            duels_won=result.duels_won,
            rating=result.performance_rating,
            strengths=result.strengths,
            improvements=result.improvements,
            ai_analysis=result.summary,
        )
        video.processed = True
        video.save(update_fields=['processed'])

    logger.info(f"Stored insight {insight.id} for video {video.id}")
    return {
        'insight': insight,
        'analysis': result.model_dump(),
        'new_balance': charge['new_balance'],
    }
