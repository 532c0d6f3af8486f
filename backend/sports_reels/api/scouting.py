"""
Scouting inquiry endpoints.
"""
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
from sports_reels.api import serializers
from sports_reels.core.dependencies import require_user
from sports_reels.core.http import api_errors, parse_json_body
from sports_reels.services import scouting_service


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_errors
def inquiries(request):
    user = require_user(request)

    if request.method == 'GET':
        items = scouting_service.list_inquiries(user, status=request.GET.get('status') or None)
        return JsonResponse({'inquiries': [serializers.inquiry(i) for i in items]})

    data = parse_json_body(request)
    inquiry = scouting_service.create_inquiry(user, data)
    return JsonResponse(serializers.inquiry(inquiry), status=201)


@csrf_exempt
@require_http_methods(["GET", "PATCH"])
@api_errors
def inquiry_detail(request, inquiry_id):
    """Get an inquiry or move it forward {status}."""
    user = require_user(request)

    if request.method == 'GET':
        inquiry = scouting_service.get_inquiry(user, inquiry_id)
        return JsonResponse(serializers.inquiry(inquiry))

    data = parse_json_body(request)
    inquiry = scouting_service.advance_inquiry(user, inquiry_id, data.get('status'))
    return JsonResponse(serializers.inquiry(inquiry))


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_errors
def inquiry_messages(request, inquiry_id):
    user = require_user(request)

    if request.method == 'GET':
        messages = scouting_service.list_messages(user, inquiry_id)
        return JsonResponse({'messages': [serializers.inquiry_message(m) for m in messages]})

    data = parse_json_body(request)
    result = scouting_service.post_message(user, inquiry_id, data.get('content'))
    return JsonResponse({
        'message': serializers.inquiry_message(result['message']),
        'new_balance': result['new_balance'],
    }, status=201)
