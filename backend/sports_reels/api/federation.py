"""
Federation letter request endpoints for clubs and federation admins.
"""
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
from sports_reels.api import serializers
from sports_reels.core.dependencies import require_roles, require_user
from sports_reels.core.http import api_errors, parse_json_body
from sports_reels.services import federation_service
from sports_reels.services.federation_service import FEDERATION_ROLES


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_errors
def letter_requests(request):
    user = require_user(request)

    if request.method == 'GET':
        items = federation_service.list_requests(
            user,
            player_id=request.GET.get('player_id') or None,
            status=request.GET.get('status') or None,
        )
        return JsonResponse({'requests': [serializers.federation_request(r) for r in items]})

    data = parse_json_body(request)
    result = federation_service.create_request(user, data)
    payload = serializers.federation_request(result['request'])
    payload['new_balance'] = result['new_balance']
    return JsonResponse(payload, status=201)


@csrf_exempt
@require_http_methods(["GET"])
@api_errors
def letter_request_summary(request):
    user = require_user(request)
    return JsonResponse(federation_service.request_summary(user))


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
@api_errors
def letter_request_detail(request, request_id):
    """Get a request; edit or delete it while pending."""
    user = require_user(request)

    if request.method == 'GET':
        item = federation_service.get_request(user, request_id)
        return JsonResponse(serializers.federation_request(item))

    if request.method == 'PUT':
        data = parse_json_body(request)
        item = federation_service.update_request(user, request_id, data)
        return JsonResponse(serializers.federation_request(item))

    federation_service.delete_request(user, request_id)
    return JsonResponse({'success': True})


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def confirm_payment(request, request_id):
    user = require_user(request)
    item = federation_service.confirm_payment(user, request_id)
    return JsonResponse(serializers.federation_request(item))


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def submit_request(request, request_id):
    user = require_user(request)
    item = federation_service.submit_request(user, request_id)
    return JsonResponse(serializers.federation_request(item))


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def process_request(request, request_id):
    user = require_user(request)
    item = federation_service.process_request(user, request_id)
    return JsonResponse(serializers.federation_request(item))


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def issue_request(request, request_id):
    user = require_user(request)
    data = parse_json_body(request)
    item = federation_service.issue_request(user, request_id, data.get('document_path') or '')
    return JsonResponse(serializers.federation_request(item))


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def reject_request(request, request_id):
    user = require_user(request)
    data = parse_json_body(request)
    item = federation_service.reject_request(user, request_id, data.get('rejection_reason') or '')
    return JsonResponse(serializers.federation_request(item))


@csrf_exempt
@require_http_methods(["GET"])
@api_errors
def request_activities(request, request_id):
    user = require_user(request)
    activities = federation_service.list_activities(user, request_id)
    return JsonResponse({'activities': [serializers.federation_activity(a) for a in activities]})


# Federation admin

@csrf_exempt
@require_http_methods(["GET"])
@api_errors
def dashboard_stats(request):
    user = require_user(request)
    return JsonResponse(federation_service.dashboard_stats(user))


@csrf_exempt
@require_http_methods(["GET"])
@api_errors
def admin_requests(request):
    """All letter requests, optionally filtered by status."""
    user = require_user(request)
    require_roles(user, *FEDERATION_ROLES)
    items = federation_service.list_requests(user, status=request.GET.get('status') or None)
    return JsonResponse({'requests': [serializers.federation_request(r) for r in items]})


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_errors
def fee_schedules(request):
    user = require_user(request)

    if request.method == 'GET':
        items = federation_service.list_fee_schedules(country=request.GET.get('country') or None)
        return JsonResponse({'fee_schedules': [serializers.fee_schedule(s) for s in items]})

    data = parse_json_body(request)
    schedule = federation_service.create_fee_schedule(user, data)
    return JsonResponse(serializers.fee_schedule(schedule), status=201)


@csrf_exempt
@require_http_methods(["PUT", "DELETE"])
@api_errors
def fee_schedule_detail(request, schedule_id):
    user = require_user(request)

    if request.method == 'PUT':
        data = parse_json_body(request)
        schedule = federation_service.update_fee_schedule(user, schedule_id, data)
        return JsonResponse(serializers.fee_schedule(schedule))

    federation_service.delete_fee_schedule(user, schedule_id)
    return JsonResponse({'success': True})


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_errors
def profiles(request):
    user = require_user(request)

    if request.method == 'GET':
        return JsonResponse({
            'profiles': [serializers.federation_profile(p) for p in federation_service.list_profiles()],
        })

    data = parse_json_body(request)
    profile = federation_service.create_profile(user, data)
    return JsonResponse(serializers.federation_profile(profile), status=201)


@csrf_exempt
@require_http_methods(["PUT"])
@api_errors
def profile_detail(request, profile_id):
    user = require_user(request)
    data = parse_json_body(request)
    profile = federation_service.update_profile(user, profile_id, data)
    return JsonResponse(serializers.federation_profile(profile))
