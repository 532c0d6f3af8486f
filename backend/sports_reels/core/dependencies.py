"""
Dependency injection utilities.
"""
from typing import Optional
from django.conf import settings
from django.contrib.auth import get_user_model
from sports_reels.core.errors import AuthenticationError, AuthorizationError
from sports_reels.core.logging import get_logger
from sports_reels.core.security import user_from_bearer

User = get_user_model()
logger = get_logger(__name__)

DEMO_ROLE_HEADER = 'HTTP_X_USER_ROLE'
DEFAULT_DEMO_ROLE = 'sporting_director'


def get_current_user(request) -> Optional[User]:
    """
    Get current authenticated user from request.
    Supports JWT, session authentication and, in demo mode, the
    X-User-Role header.
    """
    user = user_from_bearer(request)
    if user is not None:
        return user

    # Fall back to session authentication
    if hasattr(request, 'user') and request.user.is_authenticated:
        return request.user

    if getattr(settings, 'DEMO_MODE', False):
        return get_demo_user(request.META.get(DEMO_ROLE_HEADER) or DEFAULT_DEMO_ROLE)

    return None


def get_demo_user(role: str) -> User:
    """
    Get or create the shared demo account for a role.

    Unknown roles fall back to the default demo role.
    """
    from sports_reels.account.models import Team

    if role not in User.Role.values:
        role = DEFAULT_DEMO_ROLE

    defaults = {'role': role, 'first_name': 'Demo', 'last_name': role.replace('_', ' ').title()}
    if role == User.Role.EMBASSY:
        defaults['embassy_country'] = 'United Kingdom'
    user, created = User.objects.get_or_create(email=f"demo-{role}@sports-reels.local", defaults=defaults)
    if created:
        if role in User.TEAM_ROLES:
            team, _ = Team.objects.get_or_create(
                name='Demo Club FC',
                defaults={'club_name': 'Demo Club FC', 'country': 'England', 'league_band': 2},
            )
            user.team = team
        user.set_unusable_password()
        user.save()
        logger.info(f"Created demo user for role {role}")
    return user


def require_user(request) -> User:
    """
    Return the authenticated user.

    Raises:
        AuthenticationError: if no user can be resolved
    """
    user = get_current_user(request)
    if not user:
        raise AuthenticationError()
    return user


def require_roles(user, *roles: str) -> None:
    """
    Raises:
        AuthorizationError: if the user's role is not one of roles
    """
    if user.role not in roles:
        raise AuthorizationError(f"This action requires one of the roles: {', '.join(roles)}")
