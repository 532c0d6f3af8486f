"""
Scouting inquiry service.
"""
from typing import Any, Dict, List, Optional
from uuid import UUID
from django.db import transaction
from django.db.models import Q
from sports_reels.core.errors import NotFoundError, ValidationError
from sports_reels.core.logging import get_logger
from sports_reels.core.status import SCOUTING_INQUIRY_FLOW
from sports_reels.core.token_costs import cost_of, messaging_action_for_role
from sports_reels.db.models.audit import AuditLog
from sports_reels.db.models.player import Player
from sports_reels.db.models.scouting import InquiryMessage, ScoutingInquiry
from sports_reels.services import audit_service, token_service

logger = get_logger(__name__)


def inquiries_visible_to(user):
    """
    Inquiries a user takes part in.

    Team members see inquiries about their players and those they opened;
    other roles see the inquiries they opened. Admins see everything.
    """
    queryset = ScoutingInquiry.objects.select_related('player', 'created_by')
    if user.role == 'admin':
        return queryset
    condition = Q(created_by=user)
    if user.is_team_member and user.team_id:
        condition |= Q(player__team_id=user.team_id)
    return queryset.filter(condition)


def list_inquiries(user, status: Optional[str] = None) -> List[ScoutingInquiry]:
    queryset = inquiries_visible_to(user)
    if status:
        queryset = queryset.filter(status=status)
    return list(queryset)


def get_inquiry(user, inquiry_id: UUID) -> ScoutingInquiry:
    try:
        return inquiries_visible_to(user).get(id=inquiry_id)
    except (ScoutingInquiry.DoesNotExist, ValueError):
        raise NotFoundError('Inquiry not found')


def create_inquiry(user, data: Dict[str, Any]) -> ScoutingInquiry:
    """
    Open an inquiry about a player; new inquiries start in "inquiry".

    The compliance score defaults to the player's overall score.
    """
    player_id = data.get('player_id')
    if not player_id:
        raise ValidationError("'player_id' is required")
    try:
        player = Player.objects.select_related('team').get(id=player_id)
    except (Player.DoesNotExist, ValueError):
        raise NotFoundError('Player not found')

    buying_club = (data.get('buying_club_name') or '').strip()
    if not buying_club and user.team_id:
        buying_club = user.team.club_name or user.team.name
    if not buying_club:
        raise ValidationError("'buying_club_name' is required")

    compliance_score = data.get('compliance_score', player.overall_score)
    if compliance_score is not None:
        try:
            compliance_score = float(compliance_score)
        except (TypeError, ValueError):
            raise ValidationError("'compliance_score' must be a number")

    inquiry = ScoutingInquiry.objects.create(
        player=player,
        buying_club_name=buying_club,
        selling_club_name=(data.get('selling_club_name') or player.current_club_name or '').strip(),
        compliance_score=compliance_score,
        message=data.get('message') or '',
        created_by=user,
    )
    audit_service.log_action(
        AuditLog.Category.SCOUTING, 'inquiry_created', actor=user, entity=inquiry,
        description=f"{buying_club} opened an inquiry for {player.full_name}",
    )
    logger.info(f"Created scouting inquiry {inquiry.id} for player {player.id}")
    return inquiry


def advance_inquiry(user, inquiry_id: UUID, status: str) -> ScoutingInquiry:
    """
    Raises:
        InvalidTransitionError: if status is not a forward step
    """
    if not status:
        raise ValidationError("'status' is required")
    with transaction.atomic():
        inquiry = get_inquiry(user, inquiry_id)
        previous = inquiry.status
        inquiry.status = SCOUTING_INQUIRY_FLOW.advance(previous, status)
        inquiry.save(update_fields=['status', 'updated_at'])

    audit_service.log_action(
        AuditLog.Category.SCOUTING, 'inquiry_status_changed', actor=user, entity=inquiry,
        description=f"{previous} -> {inquiry.status}",
    )
    logger.info(f"Inquiry {inquiry.id} moved {previous} -> {inquiry.status}")
    return inquiry


def list_messages(user, inquiry_id: UUID) -> List[InquiryMessage]:
    inquiry = get_inquiry(user, inquiry_id)
    return list(inquiry.messages.select_related('sender'))


def post_message(user, inquiry_id: UUID, content: str) -> Dict[str, Any]:
    """
    Add a message to an inquiry thread.

    Charges the sender's messaging action when their cost table has one.

    Returns:
        Dict with message and new_balance (None when nothing was charged)
    """
    content = (content or '').strip()
    if not content:
        raise ValidationError("'content' is required")
    inquiry = get_inquiry(user, inquiry_id)
    if inquiry.status == ScoutingInquiry.Status.CLOSED:
        raise ValidationError('Inquiry is closed')

    new_balance = None
    action = messaging_action_for_role(user.role)
    with transaction.atomic():
        if (user.is_team_member or user.is_scout) and cost_of(user.role, action) is not None:
            new_balance = token_service.spend_tokens(user, action, player_id=inquiry.player_id)['new_balance']
        message = InquiryMessage.objects.create(inquiry=inquiry, sender=user, content=content)
    logger.info(f"User {user.id} posted message {message.id} on inquiry {inquiry.id}")
    return {'message': message, 'new_balance': new_balance}
