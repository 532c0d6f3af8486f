"""
Compliance orders, consular summary documents and public verification.
"""
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
from sports_reels.api import serializers
from sports_reels.core.dependencies import require_user
from sports_reels.core.http import api_errors, parse_json_body, uuid_value
from sports_reels.services import compliance_service


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_errors
def orders(request):
    user = require_user(request)

    if request.method == 'GET':
        items = compliance_service.list_orders(user)
        return JsonResponse({'orders': [serializers.compliance_order(o) for o in items]})

    data = parse_json_body(request)
    order = compliance_service.create_order(user, data)
    return JsonResponse(serializers.compliance_order(order), status=201)


@csrf_exempt
@require_http_methods(["GET"])
@api_errors
def order_detail(request, order_id):
    user = require_user(request)
    order = compliance_service.get_order(user, order_id)
    return JsonResponse(serializers.compliance_order(order))


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def pay_order(request, order_id):
    """Simulated payment of a compliance report order."""
    user = require_user(request)
    order = compliance_service.pay_order(user, order_id)
    return JsonResponse(serializers.compliance_order(order))


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def generate_order_document(request, order_id):
    user = require_user(request)
    document = compliance_service.generate_document_for_order(user, order_id)
    return JsonResponse(serializers.compliance_document(document, include_snapshot=True), status=201)


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_errors
def documents(request):
    """List consular summaries or generate a new draft."""
    user = require_user(request)

    if request.method == 'GET':
        items = compliance_service.list_documents(
            user,
            player_id=uuid_value(request.GET, 'player_id'),
            status=request.GET.get('status') or None,
        )
        return JsonResponse({'documents': [serializers.compliance_document(d) for d in items]})

    data = parse_json_body(request)
    document = compliance_service.generate_document(user, data)
    return JsonResponse(serializers.compliance_document(document, include_snapshot=True), status=201)


@csrf_exempt
@require_http_methods(["GET", "PUT"])
@api_errors
def document_detail(request, document_id):
    """Get a document, or edit it while it is still a draft."""
    user = require_user(request)

    if request.method == 'GET':
        document = compliance_service.get_document(user, document_id)
        return JsonResponse(serializers.compliance_document(document, include_snapshot=True))

    data = parse_json_body(request)
    document = compliance_service.update_document(user, document_id, data)
    return JsonResponse(serializers.compliance_document(document, include_snapshot=True))


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def submit_document(request, document_id):
    user = require_user(request)
    data = parse_json_body(request)
    verification = compliance_service.submit_document(user, document_id, data.get('embassy_country'))
    return JsonResponse({
        'document': serializers.compliance_document(verification.document),
        'verification': serializers.verification(verification),
    }, status=201)


@require_http_methods(["GET"])
@api_errors
def verify_code(request, code):
    """Public lookup of an embassy verification by its code."""
    verification = compliance_service.lookup_verification(code)
    return JsonResponse(serializers.public_verification(verification))
