"""
Dashboard endpoints.
"""
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
from sports_reels.core.dependencies import require_user
from sports_reels.core.http import api_errors
from sports_reels.services import dashboard_service


@csrf_exempt
@require_http_methods(["GET"])
@api_errors
def stats(request):
    user = require_user(request)
    return JsonResponse(dashboard_service.get_stats(user))


@csrf_exempt
@require_http_methods(["GET"])
@api_errors
def map_data(request):
    """Player origins and transfer destinations for the world map."""
    user = require_user(request)
    return JsonResponse(dashboard_service.get_map_data(user))
