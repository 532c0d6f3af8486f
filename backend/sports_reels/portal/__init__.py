"""
Portal client: role routing, API access and display rules.
"""
from .cache import QueryCache
from .client import InsufficientTokensError, PortalClient, PortalError, UploadError
from .roles import RoleSelection, resolve, route_table_for, shows_token_balance
from .tokens import TokenGuard

__all__ = [
    'QueryCache',
    'PortalClient',
    'PortalError',
    'UploadError',
    'InsufficientTokensError',
    'RoleSelection',
    'resolve',
    'route_table_for',
    'shows_token_balance',
    'TokenGuard',
]
