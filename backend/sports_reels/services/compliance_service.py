"""
Compliance orders and consular summary documents.
"""
import time
from datetime import date, timedelta
from typing import Any, Dict, List, Optional
from uuid import UUID
from django.db import transaction
from django.utils import timezone
from sports_reels.core.errors import ConflictError, NotFoundError, ValidationError
from sports_reels.core.logging import get_logger
from sports_reels.core.status import COMPLIANCE_DOCUMENT_FLOW, COMPLIANCE_ORDER_FLOW
from sports_reels.db.models.audit import AuditLog
from sports_reels.db.models.compliance import ComplianceDocument, ComplianceOrder, VisaType
from sports_reels.db.models.embassy import EmbassyVerification
from sports_reels.services import analysis_service, audit_service
from sports_reels.services.eligibility_service import assess_player
from sports_reels.services.player_service import get_editable_player, get_player, players_visible_to

logger = get_logger(__name__)

REPORT_WINDOW_DAYS = 365


def _validate_visa_type(visa_type: Optional[str], required: bool = True) -> str:
    if not visa_type:
        if required:
            raise ValidationError("'visa_type' is required")
        return ''
    if visa_type not in VisaType.values:
        raise ValidationError(f"'visa_type' must be one of: {', '.join(VisaType.values)}")
    return visa_type


def _parse_range(data: Dict[str, Any]) -> tuple:
    end = date.today()
    start = end - timedelta(days=REPORT_WINDOW_DAYS)
    try:
        if data.get('date_range_start'):
            start = date.fromisoformat(str(data['date_range_start'])[:10])
        if data.get('date_range_end'):
            end = date.fromisoformat(str(data['date_range_end'])[:10])
    except ValueError:
        raise ValidationError('Date range must use ISO dates (YYYY-MM-DD)')
    if start > end:
        raise ValidationError('date_range_start must not be after date_range_end')
    return start, end


def build_eligibility_snapshot(player) -> Dict[str, Any]:
    """Frozen copy of the player's eligibility inputs and scores."""
    latest = player.metrics.order_by('-season').first()
    return {
        'captured_at': timezone.now().isoformat(),
        'player': {
            'full_name': player.full_name,
            'nationality': player.nationality,
            'date_of_birth': player.date_of_birth.isoformat() if player.date_of_birth else None,
            'position': player.position,
            'current_club': player.current_club_name,
            'current_league': player.current_league,
            'league_band': player.league_band,
        },
        'scores': {name: getattr(player, name) for name in player.SCORE_FIELDS},
        'overall_score': player.overall_score,
        'latest_metrics': {
            'season': latest.season,
            'current_season_minutes': latest.current_season_minutes,
            'games_played': latest.games_played,
            'goals': latest.goals,
            'assists': latest.assists,
        } if latest else None,
        'assessment': assess_player(player),
    }


# Orders

def list_orders(user) -> List[ComplianceOrder]:
    return list(
        ComplianceOrder.objects.filter(player__in=players_visible_to(user)).select_related('player')
    )


def get_order(user, order_id: UUID) -> ComplianceOrder:
    try:
        return ComplianceOrder.objects.select_related('player').get(
            id=order_id, player__in=players_visible_to(user),
        )
    except (ComplianceOrder.DoesNotExist, ValueError):
        raise NotFoundError('Order not found')


def create_order(user, data: Dict[str, Any]) -> ComplianceOrder:
    player_id = data.get('player_id')
    if not player_id:
        raise ValidationError("'player_id' is required")
    player = get_editable_player(user, player_id)
    visa_type = _validate_visa_type(data.get('visa_type'))
    target_country = (data.get('target_country') or '').strip()
    if not target_country:
        raise ValidationError("'target_country' is required")

    order = ComplianceOrder.objects.create(
        player=player,
        requested_by=user,
        visa_type=visa_type,
        target_country=target_country,
    )
    audit_service.log_action(
        AuditLog.Category.COMPLIANCE, 'order_created', actor=user, entity=order,
        description=f"Compliance report ordered for {player.full_name}",
    )
    logger.info(f"Created compliance order {order.id} for player {player.id}")
    return order


def pay_order(user, order_id: UUID) -> ComplianceOrder:
    """
    Mark an order paid (simulated payment).

    Raises:
        InvalidTransitionError: if the order is not awaiting payment
    """
    with transaction.atomic():
        order = get_order(user, order_id)
        order.status = COMPLIANCE_ORDER_FLOW.advance(order.status, ComplianceOrder.Status.PAID)
        order.paid_at = timezone.now()
        order.payment_reference = f"SIM-{int(time.time() * 1000)}"
        order.save(update_fields=['status', 'paid_at', 'payment_reference'])

    audit_service.log_action(
        AuditLog.Category.COMPLIANCE, 'order_paid', actor=user, entity=order,
        details={'amount': str(order.amount), 'currency': order.currency},
    )
    logger.info(f"Compliance order {order.id} paid")
    return order


def generate_document_for_order(user, order_id: UUID) -> ComplianceDocument:
    """
    Generate the consular summary of a paid order and complete the order.

    Raises:
        ValidationError: if the order has not been paid
    """
    order = get_order(user, order_id)
    with transaction.atomic():
        # Concurrent calls serialise here; only the first sees the order still paid
        order = ComplianceOrder.objects.select_for_update().select_related('player').get(pk=order.pk)
        if order.status != ComplianceOrder.Status.PAID:
            raise ValidationError('Order must be paid before generating document')

        document = _generate_document(
            user,
            order.player,
            visa_type=order.visa_type,
            target_country=order.target_country,
            date_range=_parse_range({}),
            order=order,
        )
        order.status = COMPLIANCE_ORDER_FLOW.advance(order.status, ComplianceOrder.Status.COMPLETED)
        order.save(update_fields=['status'])
    return document


# Documents

def _generate_document(user, player, visa_type: str, target_country: str, date_range: tuple,
                       order: Optional[ComplianceOrder] = None) -> ComplianceDocument:
    snapshot = build_eligibility_snapshot(player)
    summary = analysis_service.generate_consular_summary(
        player,
        snapshot,
        visa_type=visa_type,
        target_country=target_country,
        date_range=(date_range[0].isoformat(), date_range[1].isoformat()),
        user_id=user.id,
    )
    document = ComplianceDocument.objects.create(
        player=player,
        order=order,
        generated_by=user,
        visa_type=visa_type,
        target_country=target_country,
        date_range_start=date_range[0],
        date_range_end=date_range[1],
        eligibility_snapshot=snapshot,
        eligibility_score=player.overall_score,
        ai_summary=summary,
    )
    audit_service.log_action(
        AuditLog.Category.COMPLIANCE, 'document_generated', actor=user, entity=document,
        description=f"Consular summary generated for {player.full_name}",
    )
    logger.info(f"Generated compliance document {document.id} for player {player.id}")
    return document


def generate_document(user, data: Dict[str, Any]) -> ComplianceDocument:
    player_id = data.get('player_id')
    if not player_id:
        raise ValidationError("'player_id' is required")
    player = get_editable_player(user, player_id)
    return _generate_document(
        user,
        player,
        visa_type=_validate_visa_type(data.get('visa_type'), required=False),
        target_country=(data.get('target_country') or '').strip(),
        date_range=_parse_range(data),
    )


def list_documents(user, player_id: Optional[UUID] = None, status: Optional[str] = None) -> List[ComplianceDocument]:
    queryset = ComplianceDocument.objects.filter(player__in=players_visible_to(user)).select_related('player')
    if player_id:
        queryset = queryset.filter(player_id=player_id)
    if status:
        queryset = queryset.filter(status=status)
    return list(queryset)


def get_document(user, document_id: UUID) -> ComplianceDocument:
    try:
        return ComplianceDocument.objects.select_related('player').get(
            id=document_id, player__in=players_visible_to(user),
        )
    except (ComplianceDocument.DoesNotExist, ValueError):
        raise NotFoundError('Document not found')


def update_document(user, document_id: UUID, data: Dict[str, Any]) -> ComplianceDocument:
    """
    Edit a draft document.

    Raises:
        ConflictError: if the document has been submitted
    """
    document = get_document(user, document_id)
    get_editable_player(user, document.player_id)
    if not document.is_editable:
        raise ConflictError('Document cannot be modified after submission')

    if 'ai_summary' in data:
        document.ai_summary = data.get('ai_summary') or ''
    if 'target_country' in data:
        document.target_country = (data.get('target_country') or '').strip()
    if 'visa_type' in data:
        document.visa_type = _validate_visa_type(data.get('visa_type'), required=False)
    if 'date_range_start' in data or 'date_range_end' in data:
        start, end = _parse_range({
            'date_range_start': data.get('date_range_start', document.date_range_start.isoformat()),
            'date_range_end': data.get('date_range_end', document.date_range_end.isoformat()),
        })
        document.date_range_start, document.date_range_end = start, end
    document.save()
    logger.info(f"Updated draft document {document.id}")
    return document


def submit_document(user, document_id: UUID, embassy_country: str) -> EmbassyVerification:
    """
    Submit a draft document to an embassy.

    Freezes the document and opens a pending embassy verification.

    Raises:
        ValidationError: if no embassy country is given
        InvalidTransitionError: if the document was already submitted
    """
    embassy_country = (embassy_country or '').strip()
    if not embassy_country:
        raise ValidationError("'embassy_country' is required")

    with transaction.atomic():
        document = get_document(user, document_id)
        get_editable_player(user, document.player_id)
        document.status = COMPLIANCE_DOCUMENT_FLOW.advance(document.status, ComplianceDocument.Status.SUBMITTED)
        document.submitted_at = timezone.now()
        document.save(update_fields=['status', 'submitted_at'])
        verification = EmbassyVerification.objects.create(
            document=document,
            player=document.player,
            embassy_country=embassy_country,
        )

    audit_service.log_action(
        AuditLog.Category.EMBASSY, 'document_submitted', actor=user, entity=verification,
        description=f"Document {document.id} submitted to {embassy_country}",
        details={'verification_code': verification.verification_code},
    )
    logger.info(f"Submitted document {document.id} to {embassy_country} ({verification.verification_code})")
    return verification


def lookup_verification(code: str) -> EmbassyVerification:
    """
    Public lookup of a verification by its code.

    Raises:
        NotFoundError: if the code is unknown
    """
    try:
        return EmbassyVerification.objects.select_related('player', 'document').get(
            verification_code=(code or '').strip().upper(),
        )
    except EmbassyVerification.DoesNotExist:
        raise NotFoundError('Verification code not found')


def player_documents_for_user(user, player_id: UUID) -> List[ComplianceDocument]:
    player = get_player(user, player_id)
    return list(player.compliance_documents.all())
