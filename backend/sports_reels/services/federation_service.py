"""
Federation letter requests.

Clubs request a letter from a player's federation supporting a transfer.
A request is paid (simulated), submitted, then processed and issued or
rejected by a federation admin. Every step is recorded as an activity.
"""
import string
import time
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID
from django.db import transaction
from django.db.models import Count, Q, Sum
from django.utils import timezone
from sports_reels.core.dependencies import require_roles
from sports_reels.core.errors import NotFoundError, ValidationError
from sports_reels.core.logging import get_logger
from sports_reels.core.status import FEDERATION_REQUEST_FLOW, PAYMENT_STATUS_FLOW
from sports_reels.db.models.audit import AuditLog
from sports_reels.db.models.federation import (
    DEFAULT_FEDERATION_FEE,
    DEFAULT_SERVICE_CHARGE,
    FederationFeeSchedule,
    FederationLetterRequest,
    FederationPayment,
    FederationProfile,
    FederationRequestActivity,
)
from sports_reels.services import audit_service, token_service
from sports_reels.services.player_service import get_editable_player

logger = get_logger(__name__)

FEDERATION_ROLES = ('federation_admin', 'admin')
EDITABLE_FIELDS = (
    'athlete_full_name',
    'athlete_nationality',
    'target_club_name',
    'target_club_country',
    'transfer_type',
    'invitation_letter_path',
    'notes',
)
TRANSFER_TYPES = ('permanent', 'loan', 'free')
CENTS = Decimal('0.01')
_BASE36_DIGITS = string.digits + string.ascii_uppercase


def _base36(value: int) -> str:
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return ''.join(reversed(digits)) or '0'


def generate_request_number(now: Optional[float] = None) -> str:
    """FLR-<year>-<base36 millisecond timestamp>."""
    now = time.time() if now is None else now
    year = time.gmtime(now).tm_year
    return f"FLR-{year}-{_base36(int(now * 1000))}"


def _unique_request_number() -> str:
    now = time.time()
    number = generate_request_number(now)
    while FederationLetterRequest.objects.filter(request_number=number).exists():
        now += 0.001
        number = generate_request_number(now)
    return number


def resolve_fees(
    target_country: str,
    federation: Optional[FederationProfile] = None,
    on_date: Optional[date] = None,
) -> Tuple[Decimal, Decimal]:
    """
    Fee and service charge for a letter to the given destination country.

    An active fee schedule for the country wins (a schedule bound to the
    federation is preferred over a generic one); otherwise the federation's
    defaults apply; otherwise the platform defaults (150 + 25).

    Returns:
        (fee_amount, service_charge)
    """
    on_date = on_date or timezone.now().date()
    schedules = FederationFeeSchedule.objects.filter(
        country__iexact=(target_country or '').strip(),
        is_active=True,
    ).filter(
        Q(effective_from__isnull=True) | Q(effective_from__lte=on_date),
        Q(effective_to__isnull=True) | Q(effective_to__gte=on_date),
    )
    schedule = None
    if federation is not None:
        schedule = schedules.filter(federation=federation).first()
    if schedule is None:
        schedule = schedules.filter(federation__isnull=True).first() or schedules.first()
    if schedule is not None:
        return schedule.base_fee, schedule.platform_service_charge
    if federation is not None:
        return federation.default_fee, federation.platform_service_charge
    return DEFAULT_FEDERATION_FEE, DEFAULT_SERVICE_CHARGE


def _record_activity(request: FederationLetterRequest, actor, activity_type: str, description: str,
                     previous_status: str = '', new_status: str = '') -> FederationRequestActivity:
    return FederationRequestActivity.objects.create(
        request=request,
        actor=actor,
        activity_type=activity_type,
        description=description,
        previous_status=previous_status,
        new_status=new_status,
    )


def _clean_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    fields = {name: (data.get(name) or '').strip() for name in EDITABLE_FIELDS if name in data}
    transfer_type = fields.get('transfer_type')
    if transfer_type and transfer_type not in TRANSFER_TYPES:
        raise ValidationError(f"'transfer_type' must be one of: {', '.join(TRANSFER_TYPES)}")
    return fields


def requests_visible_to(user):
    queryset = FederationLetterRequest.objects.select_related('player', 'team', 'federation')
    if user.role in FEDERATION_ROLES:
        return queryset
    if user.is_team_member and user.team_id:
        return queryset.filter(team_id=user.team_id)
    return queryset.filter(submitted_by=user)


def list_requests(user, player_id: Optional[UUID] = None, status: Optional[str] = None) -> List[FederationLetterRequest]:
    queryset = requests_visible_to(user)
    if player_id:
        queryset = queryset.filter(player_id=player_id)
    if status:
        queryset = queryset.filter(status=status)
    return list(queryset)


def get_request(user, request_id: UUID) -> FederationLetterRequest:
    try:
        return requests_visible_to(user).get(id=request_id)
    except (FederationLetterRequest.DoesNotExist, ValueError):
        raise NotFoundError('Request not found')


def request_summary(user) -> Dict[str, int]:
    counts = dict(
        requests_visible_to(user).order_by().values_list('status').annotate(total=Count('id'))
    )
    summary = {'total': sum(counts.values())}
    for status in FederationLetterRequest.Status.values:
        summary[status] = counts.get(status, 0)
    return summary


def create_request(user, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Open a letter request for one of the team's players.

    Charges the federation_letter_request token cost. Athlete details
    default to the player's record.

    Returns:
        Dict with request and new_balance
    """
    player_id = data.get('player_id')
    if not player_id:
        raise ValidationError("'player_id' is required")
    player = get_editable_player(user, player_id)
    fields = _clean_fields(data)
    fields.setdefault('athlete_full_name', player.full_name)
    fields.setdefault('athlete_nationality', player.nationality)
    if not fields['athlete_full_name']:
        fields['athlete_full_name'] = player.full_name
    if not fields['athlete_nationality']:
        fields['athlete_nationality'] = player.nationality
    if not fields.get('target_club_name'):
        raise ValidationError("'target_club_name' is required")
    if not fields.get('target_club_country'):
        raise ValidationError("'target_club_country' is required")

    federation = FederationProfile.objects.filter(
        country__iexact=fields['athlete_nationality'], is_active=True,
    ).first()
    fee_amount, service_charge = resolve_fees(fields['target_club_country'], federation)

    with transaction.atomic():
        charge = token_service.spend_tokens(user, 'federation_letter_request', player_id=player.id)
        request = FederationLetterRequest.objects.create(
            request_number=_unique_request_number(),
            team_id=player.team_id,
            player=player,
            federation=federation,
            submitted_by=user,
            fee_amount=fee_amount,
            service_charge=service_charge,
            total_amount=fee_amount + service_charge,
            currency=federation.currency if federation else 'EUR',
            **fields,
        )
        _record_activity(request, user, 'created', 'Letter request created',
                         new_status=request.status)

    audit_service.log_action(
        AuditLog.Category.FEDERATION, 'create_federation_letter_request', actor=user, entity=request,
        details={'request_number': request.request_number, 'player_id': str(player.id)},
    )
    logger.info(f"Created federation letter request {request.request_number} for player {player.id}")
    return {'request': request, 'new_balance': charge['new_balance']}


def _get_pending_request(user, request_id: UUID) -> FederationLetterRequest:
    request = get_request(user, request_id)
    get_editable_player(user, request.player_id)
    if request.status != FederationLetterRequest.Status.PENDING:
        raise ValidationError('Only pending requests can be changed')
    return request


def update_request(user, request_id: UUID, data: Dict[str, Any]) -> FederationLetterRequest:
    request = _get_pending_request(user, request_id)
    fields = _clean_fields(data)
    for name in ('athlete_full_name', 'athlete_nationality', 'target_club_name', 'target_club_country'):
        if name in fields and not fields[name]:
            raise ValidationError(f"'{name}' cannot be empty")

    if 'target_club_country' in fields and request.payment_status == FederationLetterRequest.PaymentStatus.UNPAID:
        request.fee_amount, request.service_charge = resolve_fees(fields['target_club_country'], request.federation)
        request.total_amount = request.fee_amount + request.service_charge
    for name, value in fields.items():
        setattr(request, name, value)
    request.save()

    audit_service.log_action(
        AuditLog.Category.FEDERATION, 'update_federation_letter_request', actor=user, entity=request,
        details={'updates': sorted(fields)},
    )
    return request


def delete_request(user, request_id: UUID) -> None:
    request = get_request(user, request_id)
    get_editable_player(user, request.player_id)
    if request.status != FederationLetterRequest.Status.PENDING:
        raise ValidationError('Can only delete pending requests')
    request_number = request.request_number
    audit_service.log_action(
        AuditLog.Category.FEDERATION, 'delete_federation_letter_request', actor=user, entity=request,
        details={'request_number': request_number},
    )
    request.delete()
    logger.info(f"Deleted federation letter request {request_number}")


def confirm_payment(user, request_id: UUID) -> FederationLetterRequest:
    """
    Record the (simulated) payment of a pending request.

    Writes one payment row for the federation fee and one for the platform
    service charge.
    """
    with transaction.atomic():
        request = _get_pending_request(user, request_id)
        request.payment_status = PAYMENT_STATUS_FLOW.advance(
            request.payment_status, FederationLetterRequest.PaymentStatus.PAID,
        )
        request.payment_reference = f"SIM-{int(time.time() * 1000)}"
        request.payment_confirmed_at = timezone.now()
        request.save(update_fields=['payment_status', 'payment_reference', 'payment_confirmed_at', 'updated_at'])

        for fee_type, amount in (
            (FederationPayment.FeeType.FEDERATION_FEE, request.fee_amount),
            (FederationPayment.FeeType.SERVICE_CHARGE, request.service_charge),
        ):
            FederationPayment.objects.create(
                federation=request.federation,
                request=request,
                team_id=request.team_id,
                fee_type=fee_type,
                amount=amount,
                currency=request.currency,
                transaction_reference=request.payment_reference,
            )
        _record_activity(request, user, 'payment_confirmed',
                         f"Payment of {request.total_amount} {request.currency} confirmed")

    audit_service.log_action(
        AuditLog.Category.FEDERATION, 'confirm_payment_federation_letter_request', actor=user, entity=request,
        details={'request_number': request.request_number, 'payment_reference': request.payment_reference},
    )
    logger.info(f"Payment confirmed for {request.request_number}")
    return request


def _transition(user, request: FederationLetterRequest, target: str, activity_type: str,
                description: str, **changes) -> FederationLetterRequest:
    previous = request.status
    request.status = FEDERATION_REQUEST_FLOW.advance(previous, target)
    for name, value in changes.items():
        setattr(request, name, value)
    request.save()
    _record_activity(request, user, activity_type, description,
                     previous_status=previous, new_status=request.status)
    audit_service.log_action(
        AuditLog.Category.FEDERATION, f"{activity_type}_federation_letter_request", actor=user, entity=request,
        description=f"{request.request_number}: {previous} -> {request.status}",
        severity=AuditLog.Severity.WARNING if target == FederationLetterRequest.Status.REJECTED else AuditLog.Severity.INFO,
    )
    logger.info(f"Federation request {request.request_number} moved {previous} -> {request.status}")
    return request


def submit_request(user, request_id: UUID) -> FederationLetterRequest:
    """
    Raises:
        ValidationError: if the request has not been paid
    """
    with transaction.atomic():
        request = get_request(user, request_id)
        get_editable_player(user, request.player_id)
        if request.payment_status != FederationLetterRequest.PaymentStatus.PAID:
            raise ValidationError('Payment required before submission')
        return _transition(
            user, request, FederationLetterRequest.Status.SUBMITTED, 'submitted',
            'Request submitted to federation', submitted_at=timezone.now(),
        )


def process_request(user, request_id: UUID) -> FederationLetterRequest:
    require_roles(user, *FEDERATION_ROLES)
    with transaction.atomic():
        request = get_request(user, request_id)
        return _transition(
            user, request, FederationLetterRequest.Status.PROCESSING, 'accepted',
            'Request accepted for processing', processed_by=user, processed_at=timezone.now(),
        )


def issue_request(user, request_id: UUID, document_path: str = '') -> FederationLetterRequest:
    require_roles(user, *FEDERATION_ROLES)
    with transaction.atomic():
        request = get_request(user, request_id)
        return _transition(
            user, request, FederationLetterRequest.Status.ISSUED, 'issued',
            'Federation letter issued',
            issued_at=timezone.now(),
            issued_document_path=(document_path or '').strip() or f"issued/{request.request_number}.pdf",
        )


def reject_request(user, request_id: UUID, reason: str = '') -> FederationLetterRequest:
    require_roles(user, *FEDERATION_ROLES)
    with transaction.atomic():
        request = get_request(user, request_id)
        return _transition(
            user, request, FederationLetterRequest.Status.REJECTED, 'rejected',
            'Request rejected', rejection_reason=(reason or '').strip(),
        )


def list_activities(user, request_id: UUID) -> List[FederationRequestActivity]:
    request = get_request(user, request_id)
    return list(request.activities.select_related('actor'))


def dashboard_stats(user) -> Dict[str, Any]:
    """Request counts and issued revenue for federation admins."""
    require_roles(user, *FEDERATION_ROLES)
    requests = FederationLetterRequest.objects.all()
    issued = requests.filter(status=FederationLetterRequest.Status.ISSUED)
    revenue = issued.aggregate(total=Sum('fee_amount'))['total'] or Decimal('0')
    return {
        'total_requests': requests.count(),
        'processed': issued.count(),
        'pending': requests.filter(status__in=[
            FederationLetterRequest.Status.SUBMITTED,
            FederationLetterRequest.Status.PROCESSING,
        ]).count(),
        'total_revenue': str(revenue.quantize(CENTS)),
    }


# Fee schedules

def _decimal(data: Dict[str, Any], name: str, default: Optional[Decimal] = None) -> Optional[Decimal]:
    if data.get(name) in (None, ''):
        return default
    try:
        value = Decimal(str(data[name]))
    except InvalidOperation:
        raise ValidationError(f"'{name}' must be a number")
    if not value.is_finite():
        raise ValidationError(f"'{name}' must be a number")
    if value < 0:
        raise ValidationError(f"'{name}' must be non-negative")
    return value


def _date(data: Dict[str, Any], name: str) -> Optional[date]:
    if not data.get(name):
        return None
    try:
        return date.fromisoformat(str(data[name])[:10])
    except ValueError:
        raise ValidationError(f"'{name}' must be an ISO date (YYYY-MM-DD)")


def list_fee_schedules(country: Optional[str] = None) -> List[FederationFeeSchedule]:
    queryset = FederationFeeSchedule.objects.select_related('federation')
    if country:
        queryset = queryset.filter(country__iexact=country)
    return list(queryset)


def _apply_schedule_fields(schedule: FederationFeeSchedule, data: Dict[str, Any]) -> None:
    if 'country' in data:
        schedule.country = (data.get('country') or '').strip()
    if 'base_fee' in data:
        schedule.base_fee = _decimal(data, 'base_fee', DEFAULT_FEDERATION_FEE)
    if 'platform_service_charge' in data:
        schedule.platform_service_charge = _decimal(data, 'platform_service_charge', DEFAULT_SERVICE_CHARGE)
    if 'currency' in data:
        schedule.currency = (data.get('currency') or 'EUR').strip().upper()[:3]
    if 'effective_from' in data:
        schedule.effective_from = _date(data, 'effective_from')
    if 'effective_to' in data:
        schedule.effective_to = _date(data, 'effective_to')
    if 'is_active' in data:
        schedule.is_active = bool(data['is_active'])
    if 'notes' in data:
        schedule.notes = data.get('notes') or ''
    if 'federation_id' in data:
        federation_id = data.get('federation_id')
        if federation_id:
            try:
                schedule.federation = FederationProfile.objects.get(id=federation_id)
            except (FederationProfile.DoesNotExist, ValueError):
                raise NotFoundError('Federation not found')
        else:
            schedule.federation = None
    if not schedule.country:
        raise ValidationError("'country' is required")
    if schedule.effective_from and schedule.effective_to and schedule.effective_from > schedule.effective_to:
        raise ValidationError('effective_from must not be after effective_to')


def create_fee_schedule(user, data: Dict[str, Any]) -> FederationFeeSchedule:
    require_roles(user, *FEDERATION_ROLES)
    schedule = FederationFeeSchedule()
    _apply_schedule_fields(schedule, {'country': '', **data})
    schedule.save()
    audit_service.log_action(
        AuditLog.Category.FEDERATION, 'fee_schedule_created', actor=user, entity=schedule,
        details={'country': schedule.country, 'total': str(schedule.total)},
    )
    logger.info(f"Created fee schedule {schedule.id} for {schedule.country}")
    return schedule


def update_fee_schedule(user, schedule_id: int, data: Dict[str, Any]) -> FederationFeeSchedule:
    require_roles(user, *FEDERATION_ROLES)
    try:
        schedule = FederationFeeSchedule.objects.get(id=schedule_id)
    except FederationFeeSchedule.DoesNotExist:
        raise NotFoundError('Fee schedule not found')
    _apply_schedule_fields(schedule, data)
    schedule.save()
    audit_service.log_action(
        AuditLog.Category.FEDERATION, 'fee_schedule_updated', actor=user, entity=schedule,
        details={'updates': sorted(data)},
    )
    return schedule


def delete_fee_schedule(user, schedule_id: int) -> None:
    require_roles(user, *FEDERATION_ROLES)
    deleted, _ = FederationFeeSchedule.objects.filter(id=schedule_id).delete()
    if not deleted:
        raise NotFoundError('Fee schedule not found')
    audit_service.log_action(
        AuditLog.Category.FEDERATION, 'fee_schedule_deleted', actor=user,
        details={'fee_schedule_id': schedule_id},
    )


# Profiles

def list_profiles() -> List[FederationProfile]:
    return list(FederationProfile.objects.all())


def create_profile(user, data: Dict[str, Any]) -> FederationProfile:
    require_roles(user, *FEDERATION_ROLES)
    name = (data.get('name') or '').strip()
    country = (data.get('country') or '').strip()
    if not name or not country:
        raise ValidationError("'name' and 'country' are required")
    if FederationProfile.objects.filter(country__iexact=country).exists():
        raise ValidationError(f'A federation for {country} already exists')

    profile = FederationProfile.objects.create(
        name=name,
        country=country,
        region=(data.get('region') or '').strip(),
        contact_email=(data.get('contact_email') or '').strip(),
        default_fee=_decimal(data, 'default_fee', DEFAULT_FEDERATION_FEE),
        platform_service_charge=_decimal(data, 'platform_service_charge', DEFAULT_SERVICE_CHARGE),
        currency=(data.get('currency') or 'EUR').strip().upper()[:3],
    )
    audit_service.log_action(
        AuditLog.Category.FEDERATION, 'federation_profile_created', actor=user, entity=profile,
    )
    logger.info(f"Created federation profile {profile.id} for {country}")
    return profile


def update_profile(user, profile_id: int, data: Dict[str, Any]) -> FederationProfile:
    require_roles(user, *FEDERATION_ROLES)
    try:
        profile = FederationProfile.objects.get(id=profile_id)
    except FederationProfile.DoesNotExist:
        raise NotFoundError('Federation not found')
    for name in ('name', 'region', 'contact_email'):
        if name in data:
            setattr(profile, name, (data.get(name) or '').strip())
    if not profile.name:
        raise ValidationError("'name' cannot be empty")
    if 'default_fee' in data:
        profile.default_fee = _decimal(data, 'default_fee', DEFAULT_FEDERATION_FEE)
    if 'platform_service_charge' in data:
        profile.platform_service_charge = _decimal(data, 'platform_service_charge', DEFAULT_SERVICE_CHARGE)
    if 'is_active' in data:
        profile.is_active = bool(data['is_active'])
    profile.save()
    return profile
