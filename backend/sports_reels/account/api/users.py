"""
User profile endpoints.
"""
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
from sports_reels.account.services import serialize_user, update_user_profile
from sports_reels.core.dependencies import require_user
from sports_reels.core.http import api_errors, parse_json_body


@csrf_exempt
@require_http_methods(["GET"])
@api_errors
def get_current_user_endpoint(request):
    """Get current authenticated user profile."""
    user = require_user(request)
    return JsonResponse(serialize_user(user))


@csrf_exempt
@require_http_methods(["PUT"])
@api_errors
def update_current_user(request):
    """Update current authenticated user profile."""
    user = require_user(request)
    data = parse_json_body(request)
    updated_user = update_user_profile(user, data)
    return JsonResponse({
        'message': 'Profile updated successfully',
        'user': serialize_user(updated_user),
    })
