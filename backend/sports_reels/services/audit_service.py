"""
Audit log service.
"""
from typing import Any, Dict, List, Optional, Tuple
from sports_reels.db.models.audit import AuditLog
from sports_reels.core.logging import get_logger

logger = get_logger(__name__)


def client_ip(request) -> Optional[str]:
    if request is None:
        return None
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')


def log_action(
    category: str,
    action: str,
    actor=None,
    entity=None,
    description: str = '',
    details: Optional[Dict[str, Any]] = None,
    severity: str = AuditLog.Severity.INFO,
    request=None,
) -> AuditLog:
    """
    Append an audit log entry.

    Args:
        category: AuditLog.Category value
        action: Short machine-readable action, e.g. "verification_approved"
        actor: User performing the action (optional)
        entity: Model instance the action applies to (optional)
        description: Human-readable summary
        details: Extra JSON-serializable attributes
        severity: AuditLog.Severity value
        request: Request used to record the client IP (optional)

    Returns:
        Created AuditLog
    """
    entry = AuditLog.objects.create(
        category=category,
        action=action,
        actor=actor if actor is not None and actor.pk else None,
        actor_role=getattr(actor, 'role', '') or '',
        entity_type=type(entity).__name__ if entity is not None else '',
        entity_id=str(entity.pk) if entity is not None else '',
        description=description,
        details=details or {},
        severity=severity,
        ip_address=client_ip(request),
    )
    logger.debug(f"Audit [{category}] {action} by {getattr(actor, 'pk', None)}")
    return entry


def list_audit_logs(
    category: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
) -> Tuple[List[AuditLog], int]:
    """
    List audit logs, newest first.

    Returns:
        (page of entries, total count)
    """
    queryset = AuditLog.objects.select_related('actor')
    if category:
        queryset = queryset.filter(category=category)
    total = queryset.count()
    return list(queryset[offset: offset + limit]), total
