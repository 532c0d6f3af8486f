"""
Account services.
"""
from .auth_service import (
    create_user,
    authenticate_user,
    change_password,
    refresh_token,
)
from .user_service import (
    serialize_user,
    update_user_profile,
)

__all__ = [
    'create_user',
    'authenticate_user',
    'change_password',
    'refresh_token',
    'serialize_user',
    'update_user_profile',
]
