"""
JWT issue, refresh and bearer-token resolution.

Tokens carry the user's role as a claim so clients can route without an
extra profile call.
"""
from typing import Dict, Optional
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken, TokenError
from rest_framework_simplejwt.tokens import RefreshToken

ROLE_CLAIM = 'role'


def generate_tokens(user) -> Dict[str, str]:
    """Access and refresh tokens for a user, both carrying the role claim."""
    refresh = RefreshToken.for_user(user)
    refresh[ROLE_CLAIM] = user.role
    return {
        'access': str(refresh.access_token),
        'refresh': str(refresh),
    }


def refresh_token(refresh_token_string: str) -> Optional[Dict[str, str]]:
    """New access token from a refresh token, or None if it is invalid or expired."""
    try:
        refresh = RefreshToken(refresh_token_string)
    except TokenError:
        return None
    return {'access': str(refresh.access_token)}


def user_from_bearer(request):
    """
    The user named by the request's `Authorization: Bearer` token.

    Returns None when there is no header or the token does not validate.
    """
    jwt_auth = JWTAuthentication()
    header = jwt_auth.get_header(request)
    if not header:
        return None
    raw_token = jwt_auth.get_raw_token(header)
    if raw_token is None:
        return None
    try:
        return jwt_auth.get_user(jwt_auth.get_validated_token(raw_token))
    except (InvalidToken, AuthenticationFailed):
        return None
