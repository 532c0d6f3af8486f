"""
Platform administration: user management, audit trail and payment history.
"""
from typing import Any, Dict, List, Optional
from django.contrib.auth import get_user_model
from django.contrib.auth.tokens import default_token_generator
from django.conf import settings
from django.db.models import Count
from sports_reels.account.models import Team
from sports_reels.account.services import auth_service
from sports_reels.core.dependencies import require_roles
from sports_reels.core.errors import NotFoundError, ValidationError
from sports_reels.core.logging import get_logger
from sports_reels.db.models.audit import AuditLog
from sports_reels.db.models.federation import FederationPayment
from sports_reels.db.models.player import Player
from sports_reels.services import audit_service

User = get_user_model()
logger = get_logger(__name__)


def get_stats(user) -> Dict[str, int]:
    require_roles(user, User.Role.ADMIN)
    by_role = dict(User.objects.order_by().values_list('role').annotate(total=Count('id')))
    return {
        'total_users': sum(by_role.values()),
        'total_teams': Team.objects.count(),
        'total_players': Player.objects.count(),
        'total_scouts': by_role.get(User.Role.SCOUT, 0) + by_role.get(User.Role.AGENT, 0),
        'total_embassy_users': by_role.get(User.Role.EMBASSY, 0),
        'total_federation_users': by_role.get(User.Role.FEDERATION_ADMIN, 0),
    }


def list_users(user, role: Optional[str] = None) -> List[User]:
    require_roles(user, User.Role.ADMIN)
    queryset = User.objects.select_related('team').order_by('-created_at')
    if role:
        queryset = queryset.filter(role=role)
    return list(queryset)


def create_user(user, data: Dict[str, Any], request=None) -> User:
    """Create an account on someone's behalf; same rules as signup."""
    require_roles(user, User.Role.ADMIN)
    email = (data.get('email') or '').strip()
    password = data.get('password') or ''
    if not email or not password:
        raise ValidationError('Email and password are required')
    created, _ = auth_service.create_user(
        email,
        password,
        first_name=(data.get('first_name') or '').strip(),
        last_name=(data.get('last_name') or '').strip(),
        role=data.get('role') or User.Role.SCOUT,
        team=data.get('team'),
        embassy_country=data.get('embassy_country') or '',
        request=request,
    )
    audit_service.log_action(
        AuditLog.Category.ADMIN, 'user_created', actor=user, entity=created,
        details={'role': created.role}, request=request,
    )
    return created


def _get_user(user_id: int) -> User:
    try:
        return User.objects.get(id=user_id)
    except User.DoesNotExist:
        raise NotFoundError('User not found')


def delete_user(user, user_id: int, request=None) -> None:
    require_roles(user, User.Role.ADMIN)
    target = _get_user(user_id)
    if target.pk == user.pk:
        raise ValidationError('You cannot delete your own account')
    email = target.email
    target.delete()
    audit_service.log_action(
        AuditLog.Category.ADMIN, 'user_deleted', actor=user,
        details={'user_id': user_id, 'email': email},
        severity=AuditLog.Severity.WARNING, request=request,
    )
    logger.info(f"Admin {user.id} deleted user {user_id}")


def reset_password(user, user_id: int, request=None) -> Dict[str, Any]:
    """
    Issue a password reset token for a user.

    Returns:
        Dict with user_id, token and expires_in_hours
    """
    require_roles(user, User.Role.ADMIN)
    target = _get_user(user_id)
    token = default_token_generator.make_token(target)
    audit_service.log_action(
        AuditLog.Category.ADMIN, 'password_reset_issued', actor=user, entity=target, request=request,
    )
    return {
        'user_id': target.id,
        'token': token,
        'expires_in_hours': settings.PASSWORD_RESET_TIMEOUT // 3600,
    }


def list_audit_logs(user, category: Optional[str] = None, limit: int = 50, offset: int = 0):
    require_roles(user, User.Role.ADMIN)
    if category and category not in AuditLog.Category.values:
        raise ValidationError(f"'category' must be one of: {', '.join(AuditLog.Category.values)}")
    return audit_service.list_audit_logs(category=category, limit=limit, offset=offset)


def list_payments(user) -> List[FederationPayment]:
    require_roles(user, User.Role.ADMIN)
    return list(FederationPayment.objects.select_related('federation', 'request', 'team'))
