"""
Embassy verification endpoints.
"""
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
from sports_reels.api import serializers
from sports_reels.core.dependencies import require_user
from sports_reels.core.http import api_errors, parse_json_body
from sports_reels.services import compliance_service, embassy_service


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_errors
def verifications(request):
    """
    GET: verifications visible to the user (embassy users: their country).
    POST: submit a draft document {document_id, embassy_country}.
    """
    user = require_user(request)

    if request.method == 'GET':
        items = embassy_service.list_verifications(user, status=request.GET.get('status') or None)
        return JsonResponse({'verifications': [serializers.verification(v) for v in items]})

    data = parse_json_body(request)
    document_id = data.get('document_id')
    if not document_id:
        return JsonResponse({'error': "'document_id' is required"}, status=400)
    verification = compliance_service.submit_document(user, document_id, data.get('embassy_country'))
    return JsonResponse(serializers.verification(verification), status=201)


@csrf_exempt
@require_http_methods(["GET", "PUT"])
@api_errors
def verification_detail(request, verification_id):
    user = require_user(request)

    if request.method == 'GET':
        verification = embassy_service.get_verification(user, verification_id)
        data = serializers.verification(verification)
        data['document'] = serializers.compliance_document(verification.document, include_snapshot=True)
        return JsonResponse(data)

    data = parse_json_body(request)
    verification = embassy_service.review_verification(user, verification_id, data)
    return JsonResponse(serializers.verification(verification))
