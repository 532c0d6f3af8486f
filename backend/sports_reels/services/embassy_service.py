"""
Embassy verification review.
"""
from typing import Any, Dict, List, Optional
from uuid import UUID
from django.db import transaction
from django.utils import timezone
from sports_reels.core.dependencies import require_roles
from sports_reels.core.errors import NotFoundError, ValidationError
from sports_reels.core.logging import get_logger
from sports_reels.core.status import COMPLIANCE_DOCUMENT_FLOW, EMBASSY_VERIFICATION_FLOW
from sports_reels.db.models.audit import AuditLog
from sports_reels.db.models.compliance import ComplianceDocument
from sports_reels.db.models.embassy import EmbassyVerification
from sports_reels.services import audit_service
from sports_reels.services.player_service import players_visible_to

logger = get_logger(__name__)

# Verification outcome -> document status
DOCUMENT_OUTCOMES = {
    EmbassyVerification.Status.APPROVED: ComplianceDocument.Status.VERIFIED,
    EmbassyVerification.Status.REJECTED: ComplianceDocument.Status.REJECTED,
}


def verifications_visible_to(user):
    queryset = EmbassyVerification.objects.select_related('player', 'document', 'reviewed_by')
    if user.role == 'embassy':
        if user.embassy_country:
            return queryset.filter(embassy_country__iexact=user.embassy_country)
        return queryset
    return queryset.filter(player__in=players_visible_to(user))


def list_verifications(user, status: Optional[str] = None) -> List[EmbassyVerification]:
    queryset = verifications_visible_to(user)
    if status:
        queryset = queryset.filter(status=status)
    return list(queryset)


def get_verification(user, verification_id: UUID) -> EmbassyVerification:
    try:
        return verifications_visible_to(user).get(id=verification_id)
    except (EmbassyVerification.DoesNotExist, ValueError):
        raise NotFoundError('Verification not found')


def review_verification(user, verification_id: UUID, data: Dict[str, Any]) -> EmbassyVerification:
    """
    Move a verification forward and record reviewer notes.

    Only embassy users may review. Approving or rejecting also settles the
    underlying document (verified / rejected).

    Args:
        user: Embassy reviewer
        verification_id: EmbassyVerification UUID
        data: {status, notes}

    Raises:
        AuthorizationError: if the user is not an embassy user
        InvalidTransitionError: if the status change is not a forward step
    """
    require_roles(user, 'embassy')
    target = data.get('status')
    notes = data.get('notes')
    if not target and notes is None:
        raise ValidationError("'status' or 'notes' is required")

    with transaction.atomic():
        verification = get_verification(user, verification_id)
        previous = verification.status
        update_fields = []
        if target and target != previous:
            verification.status = EMBASSY_VERIFICATION_FLOW.advance(previous, target)
            verification.reviewed_by = user
            update_fields += ['status', 'reviewed_by']
            if target in DOCUMENT_OUTCOMES:
                verification.verified_at = timezone.now()
                update_fields.append('verified_at')
                document = verification.document
                document.status = COMPLIANCE_DOCUMENT_FLOW.advance(document.status, DOCUMENT_OUTCOMES[target])
                document.save(update_fields=['status'])
        elif target:
            EMBASSY_VERIFICATION_FLOW.advance(previous, target)
        if notes is not None:
            verification.notes = notes
            update_fields.append('notes')
        verification.save(update_fields=update_fields)

    if verification.status != previous:
        audit_service.log_action(
            AuditLog.Category.EMBASSY,
            f"verification_{verification.status}",
            actor=user,
            entity=verification,
            description=f"Verification {verification.verification_code}: {previous} -> {verification.status}",
            severity=(
                AuditLog.Severity.WARNING
                if verification.status == EmbassyVerification.Status.REJECTED
                else AuditLog.Severity.INFO
            ),
        )
        logger.info(f"Verification {verification.id} moved {previous} -> {verification.status}")
    return verification
