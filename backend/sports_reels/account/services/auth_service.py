"""
Authentication service.
"""
from typing import Any, Dict, Optional
from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from sports_reels.account.models import Team
from sports_reels.core.errors import ValidationError
from sports_reels.core.logging import get_logger
from sports_reels.core.security import generate_tokens, refresh_token as refresh_access_token
from sports_reels.db.models.audit import AuditLog
from sports_reels.services import audit_service, token_service

User = get_user_model()
logger = get_logger(__name__)


def _check_password(password: str, user=None) -> None:
    try:
        validate_password(password, user=user)
    except DjangoValidationError as e:
        raise ValidationError(' '.join(e.messages))


def _build_team(data: Optional[Dict[str, Any]]) -> Optional[Team]:
    if not data:
        return None
    name = (data.get('name') or data.get('club_name') or '').strip()
    if not name:
        raise ValidationError("Team 'name' is required")
    try:
        league_band = int(data.get('league_band') or 3)
    except (TypeError, ValueError):
        raise ValidationError("'league_band' must be an integer between 1 and 5")
    if not 1 <= league_band <= 5:
        raise ValidationError("'league_band' must be an integer between 1 and 5")
    return Team.objects.create(
        name=name,
        club_name=(data.get('club_name') or name).strip(),
        country=(data.get('country') or '').strip(),
        league_band=league_band,
    )


def create_user(email: str, password: str, first_name: str = '', last_name: str = '',
                role: str = User.Role.SCOUT, team: Optional[Dict[str, Any]] = None,
                embassy_country: str = '', request=None):
    """
    Create a new user.

    Team roles may create their club with the account; embassy users must
    name the country they review for. Everyone but embassy users starts
    with the welcome token bonus.

    Returns:
        (user, tokens_dict)

    Raises:
        ValidationError: on an invalid role, weak password or taken email
    """
    role = role or User.Role.SCOUT
    if role not in User.Role.values:
        raise ValidationError(f"'role' must be one of: {', '.join(User.Role.values)}")
    if role == User.Role.EMBASSY and not (embassy_country or '').strip():
        raise ValidationError("'embassy_country' is required for embassy users")
    _check_password(password)

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
                role=role,
                embassy_country=(embassy_country or '').strip() if role == User.Role.EMBASSY else '',
            )
            if role in User.TEAM_ROLES:
                user.team = _build_team(team)
                if user.team:
                    user.save(update_fields=['team'])
            token_service.get_or_create_balance(user)
    except IntegrityError:
        raise ValidationError('A user with this email already exists.')

    audit_service.log_action(
        AuditLog.Category.AUTH, 'signup', actor=user, entity=user,
        description=f"New {role} account", request=request,
    )
    logger.info(f"Created user {user.id} with role {role}")
    return user, generate_tokens(user)


def authenticate_user(email: str, password: str, request=None):
    """
    Verify user credentials.
    Returns: (user, tokens_dict) or (None, None) if invalid
    """
    user = authenticate(username=email, password=password)
    if user and user.is_active:
        audit_service.log_action(AuditLog.Category.AUTH, 'login', actor=user, request=request)
        return user, generate_tokens(user)

    audit_service.log_action(
        AuditLog.Category.AUTH, 'login_failed',
        details={'email': email}, severity=AuditLog.Severity.WARNING, request=request,
    )
    logger.warning(f"Failed login for {email}")
    return None, None


def change_password(user, old_password: str, new_password: str) -> bool:
    """
    Change user password.
    Returns: True if successful, False if old password is incorrect
    """
    if not user.check_password(old_password):
        return False
    _check_password(new_password, user=user)
    user.set_password(new_password)
    user.save()
    audit_service.log_action(AuditLog.Category.AUTH, 'password_changed', actor=user)
    return True


def refresh_token(refresh_token_string: str):
    """
    Generate new access token from refresh token.
    Returns: dict with 'access' token or None if invalid
    """
    return refresh_access_token(refresh_token_string)
