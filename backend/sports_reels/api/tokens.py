"""
Token balance, spending and pack purchase endpoints.
"""
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
from sports_reels.api import serializers
from sports_reels.core.dependencies import require_user
from sports_reels.core.http import api_errors, int_param, parse_json_body, uuid_value
from sports_reels.services import token_service


@csrf_exempt
@require_http_methods(["GET"])
@api_errors
def balance(request):
    """Current balance; created with the welcome bonus on first access."""
    user = require_user(request)
    return JsonResponse(serializers.token_balance(token_service.get_or_create_balance(user)))


@csrf_exempt
@require_http_methods(["GET"])
@api_errors
def transactions(request):
    user = require_user(request)
    limit = int_param(request, 'limit', 50, maximum=200)
    entries = token_service.list_transactions(user, limit=limit)
    return JsonResponse({'transactions': [serializers.token_transaction(t) for t in entries]})


@csrf_exempt
@require_http_methods(["GET"])
@api_errors
def costs(request):
    user = require_user(request)
    return JsonResponse(token_service.get_costs(user))


@csrf_exempt
@require_http_methods(["GET"])
@api_errors
def packs(request):
    require_user(request)
    return JsonResponse({'packs': [serializers.token_pack(p) for p in token_service.list_packs()]})


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def spend(request):
    """
    Spend tokens on an action {action, player_id, video_id}.

    Insufficient balances answer 400 with needs_purchase set.
    """
    user = require_user(request)
    data = parse_json_body(request)
    action = data.get('action') or ''
    if not isinstance(action, str):
        return JsonResponse({'error': "'action' must be a string"}, status=400)
    action = action.strip()
    if not action:
        return JsonResponse({'error': "'action' is required"}, status=400)
    result = token_service.spend_tokens(
        user,
        action,
        player_id=uuid_value(data, 'player_id'),
        video_id=uuid_value(data, 'video_id'),
    )
    return JsonResponse(result)


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def purchase(request):
    user = require_user(request)
    data = parse_json_body(request)
    if data.get('pack_id') in (None, ''):
        return JsonResponse({'error': "'pack_id' is required"}, status=400)
    item = token_service.create_purchase(user, data['pack_id'])
    return JsonResponse(serializers.token_purchase(item), status=201)


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def confirm_purchase(request, purchase_id):
    user = require_user(request)
    result = token_service.confirm_purchase(user, purchase_id)
    return JsonResponse({
        'success': result['success'],
        'purchase': serializers.token_purchase(result['purchase']),
        'new_balance': result['new_balance'],
    })


@csrf_exempt
@require_http_methods(["GET"])
@api_errors
def purchases(request):
    user = require_user(request)
    return JsonResponse({'purchases': [serializers.token_purchase(p) for p in token_service.list_purchases(user)]})
