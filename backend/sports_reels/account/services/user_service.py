"""
User service for profile management.
"""
from typing import Any, Dict
from django.contrib.auth import get_user_model
from sports_reels.core.errors import ValidationError

User = get_user_model()

PROFILE_FIELDS = ('first_name', 'last_name')


def serialize_user(user) -> Dict[str, Any]:
    team = user.team
    return {
        'id': user.id,
        'email': user.email,
        'first_name': user.first_name,
        'last_name': user.last_name,
        'role': user.role,
        'embassy_country': user.embassy_country or None,
        'team': {
            'id': team.id,
            'name': team.name,
            'club_name': team.club_name,
            'country': team.country,
            'league_band': team.league_band,
        } if team else None,
        'created_at': user.created_at.isoformat(),
    }


def update_user_profile(user, data: Dict[str, Any]):
    """
    Update profile fields of the given user.

    Raises:
        ValidationError: if the email is taken by another user
    """
    for name in PROFILE_FIELDS:
        if name in data:
            setattr(user, name, (data.get(name) or '').strip())
    if 'email' in data:
        email = User.objects.normalize_email((data.get('email') or '').strip())
        if not email:
            raise ValidationError("'email' cannot be empty")
        if User.objects.filter(email__iexact=email).exclude(id=user.id).exists():
            raise ValidationError('Email already in use')
        user.email = email
    if 'embassy_country' in data and user.role == User.Role.EMBASSY:
        country = (data.get('embassy_country') or '').strip()
        if not country:
            raise ValidationError("'embassy_country' cannot be empty")
        user.embassy_country = country
    user.save()
    return user
