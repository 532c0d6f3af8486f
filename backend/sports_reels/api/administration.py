"""
Platform admin endpoints.
"""
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
from sports_reels.account.services import serialize_user
from sports_reels.api import serializers
from sports_reels.core.dependencies import require_roles, require_user
from sports_reels.core.http import api_errors, int_param, parse_json_body
from sports_reels.services import admin_service, federation_service


@csrf_exempt
@require_http_methods(["GET"])
@api_errors
def stats(request):
    user = require_user(request)
    return JsonResponse(admin_service.get_stats(user))


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_errors
def users(request):
    user = require_user(request)

    if request.method == 'GET':
        items = admin_service.list_users(user, role=request.GET.get('role') or None)
        return JsonResponse({'users': [serialize_user(u) for u in items]})

    data = parse_json_body(request)
    created = admin_service.create_user(user, data, request=request)
    return JsonResponse(serialize_user(created), status=201)


@csrf_exempt
@require_http_methods(["DELETE"])
@api_errors
def user_detail(request, user_id):
    user = require_user(request)
    admin_service.delete_user(user, user_id, request=request)
    return JsonResponse({'message': 'User deleted successfully'})


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def reset_password(request, user_id):
    user = require_user(request)
    return JsonResponse(admin_service.reset_password(user, user_id, request=request))


@csrf_exempt
@require_http_methods(["GET"])
@api_errors
def audit_logs(request):
    user = require_user(request)
    limit = int_param(request, 'limit', 50, maximum=500)
    offset = int_param(request, 'offset', 0)
    entries, total = admin_service.list_audit_logs(
        user,
        category=request.GET.get('category') or None,
        limit=limit,
        offset=offset,
    )
    return JsonResponse({
        'logs': [serializers.audit_log(e) for e in entries],
        'total': total,
        'limit': limit,
        'offset': offset,
    })


@csrf_exempt
@require_http_methods(["GET"])
@api_errors
def payments(request):
    user = require_user(request)
    items = admin_service.list_payments(user)
    return JsonResponse({'payments': [serializers.federation_payment(p) for p in items]})


@csrf_exempt
@require_http_methods(["GET"])
@api_errors
def fee_schedules(request):
    user = require_user(request)
    require_roles(user, 'admin')
    items = federation_service.list_fee_schedules()
    return JsonResponse({'fee_schedules': [serializers.fee_schedule(s) for s in items]})


@csrf_exempt
@require_http_methods(["GET"])
@api_errors
def federations(request):
    user = require_user(request)
    require_roles(user, 'admin')
    return JsonResponse({
        'federations': [serializers.federation_profile(p) for p in federation_service.list_profiles()],
    })
