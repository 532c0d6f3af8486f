"""
Authentication endpoints (signup, login, logout, refresh, change-password).
"""
from django.contrib.auth import login as django_login, logout as django_logout
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
from sports_reels.account.services import (
    authenticate_user,
    change_password as change_password_service,
    create_user,
    refresh_token as refresh_token_service,
    serialize_user,
)
from sports_reels.core.dependencies import require_user
from sports_reels.core.http import api_errors, parse_json_body

MODEL_BACKEND = 'django.contrib.auth.backends.ModelBackend'


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def signup(request):
    """User registration endpoint."""
    data = parse_json_body(request)
    email = (data.get('email') or '').strip()
    password = data.get('password') or ''

    if not email or not password:
        return JsonResponse({'error': 'Email and password are required'}, status=400)

    user, tokens = create_user(
        email,
        password,
        first_name=(data.get('first_name') or '').strip(),
        last_name=(data.get('last_name') or '').strip(),
        role=data.get('role') or 'scout',
        team=data.get('team'),
        embassy_country=data.get('embassy_country') or '',
        request=request,
    )

    # Also create session for web authentication
    django_login(request, user, backend=MODEL_BACKEND)

    return JsonResponse({
        'message': 'User created successfully',
        'user': serialize_user(user),
        'access': tokens['access'],
        'refresh': tokens['refresh'],
    }, status=201)


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def login(request):
    """User login endpoint."""
    data = parse_json_body(request)
    email = (data.get('email') or '').strip()
    password = data.get('password') or ''

    if not email or not password:
        return JsonResponse({'error': 'Email and password are required'}, status=400)

    user, tokens = authenticate_user(email, password, request=request)
    if not user:
        return JsonResponse({'error': 'Invalid credentials'}, status=401)

    django_login(request, user, backend=MODEL_BACKEND)

    return JsonResponse({
        'message': 'Login successful',
        'user': serialize_user(user),
        'access': tokens['access'],
        'refresh': tokens['refresh'],
    })


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def refresh(request):
    """Token refresh endpoint."""
    data = parse_json_body(request)
    refresh_token_string = data.get('refresh') or ''

    if not refresh_token_string:
        return JsonResponse({'error': 'Refresh token is required'}, status=400)

    result = refresh_token_service(refresh_token_string)
    if not result:
        return JsonResponse({'error': 'Invalid refresh token'}, status=401)

    return JsonResponse({'access': result['access']})


@csrf_exempt
@require_http_methods(["POST"])
def logout(request):
    """User logout endpoint."""
    django_logout(request)
    return JsonResponse({'message': 'Logout successful'})


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def change_password(request):
    """Change password endpoint."""
    user = require_user(request)
    data = parse_json_body(request)
    old_password = data.get('old_password') or ''
    new_password = data.get('new_password') or ''

    if not old_password or not new_password:
        return JsonResponse({'error': 'Old password and new password are required'}, status=400)

    if not change_password_service(user, old_password, new_password):
        return JsonResponse({'error': 'Invalid old password'}, status=400)

    return JsonResponse({'message': 'Password changed successfully'})
