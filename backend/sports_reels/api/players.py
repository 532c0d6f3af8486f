"""
Player endpoints, eligibility and the scout-facing player directory.
"""
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
from sports_reels.api import serializers
from sports_reels.core.dependencies import require_user
from sports_reels.core.http import api_errors, paginate, parse_json_body
from sports_reels.services import compliance_service, player_service, video_service
from sports_reels.services.eligibility_service import assess_player, recalculate_player_scores


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_errors
def players(request):
    """List visible players (paginated) or create one for the user's team."""
    user = require_user(request)

    if request.method == 'GET':
        queryset = player_service.list_players(
            user,
            search=request.GET.get('search'),
            nationality=request.GET.get('nationality'),
        )
        return JsonResponse(paginate(queryset, request, serializers.player_summary))

    data = parse_json_body(request)
    player = player_service.create_player(user, data)
    return JsonResponse(serializers.player_detail(player), status=201)


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
@api_errors
def player_detail(request, player_id):
    """Get, update, or delete a player."""
    user = require_user(request)

    if request.method == 'GET':
        player = player_service.get_player(user, player_id)
        return JsonResponse(serializers.player_detail(player))

    if request.method == 'PUT':
        data = parse_json_body(request)
        player = player_service.update_player(user, player_id, data)
        return JsonResponse(serializers.player_detail(player))

    player_service.delete_player(user, player_id)
    return JsonResponse({'message': 'Player deleted successfully'})


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def player_metrics(request, player_id):
    user = require_user(request)
    data = parse_json_body(request)
    entry = player_service.record_metrics(user, player_id, data)
    return JsonResponse(serializers.metrics(entry), status=201)


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_errors
def international_records(request, player_id):
    user = require_user(request)

    if request.method == 'GET':
        records = player_service.list_international_records(user, player_id)
        return JsonResponse({'records': [serializers.international_record(r) for r in records]})

    data = parse_json_body(request)
    record = player_service.add_international_record(user, player_id, data)
    return JsonResponse(serializers.international_record(record), status=201)


@csrf_exempt
@require_http_methods(["GET"])
@api_errors
def player_eligibility(request, player_id):
    """Live transfer eligibility assessment plus the stored visa scores."""
    user = require_user(request)
    player = player_service.get_player(user, player_id)
    return JsonResponse({
        'player_id': str(player.id),
        'assessment': assess_player(player),
        'scores': [serializers.eligibility_score(s) for s in player.eligibility_scores.all()],
        'overall_score': player.overall_score,
    })


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def recalculate_eligibility(request, player_id):
    user = require_user(request)
    player = player_service.get_editable_player(user, player_id)
    assessment = recalculate_player_scores(player)
    return JsonResponse({
        'player': serializers.player_detail(player),
        'assessment': assessment,
        'scores': [serializers.eligibility_score(s) for s in player.eligibility_scores.all()],
    })


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def publish_player(request, player_id):
    """Toggle a player's visibility to scouts; an explicit value wins."""
    user = require_user(request)
    data = parse_json_body(request)
    player = player_service.get_editable_player(user, player_id)
    published = data.get('published', not player.published_to_scouts)
    player = player_service.set_published(user, player_id, bool(published))
    return JsonResponse(serializers.player_detail(player))


@csrf_exempt
@require_http_methods(["GET"])
@api_errors
def player_videos(request, player_id):
    user = require_user(request)
    videos = video_service.player_videos(user, player_id)
    return JsonResponse({'videos': [serializers.video(v) for v in videos]})


@csrf_exempt
@require_http_methods(["GET"])
@api_errors
def player_documents(request, player_id):
    user = require_user(request)
    documents = compliance_service.player_documents_for_user(user, player_id)
    return JsonResponse({'documents': [serializers.compliance_document(d) for d in documents]})


@csrf_exempt
@require_http_methods(["GET"])
@api_errors
def scout_players(request):
    """Published players, best overall score first."""
    require_user(request)
    queryset = player_service.list_scout_players(
        search=request.GET.get('search'),
        nationality=request.GET.get('nationality'),
    )
    return JsonResponse(paginate(queryset, request, serializers.player_summary))


@csrf_exempt
@require_http_methods(["GET"])
@api_errors
def scout_player_detail(request, player_id):
    """Full profile of a published player; scouts and agents pay to view."""
    user = require_user(request)
    result = player_service.view_scout_profile(user, player_id)
    player = result['player']
    return JsonResponse({
        'player': serializers.player_detail(player),
        'videos': [serializers.video(v) for v in player.videos.all()],
        'international_records': [
            serializers.international_record(r) for r in player.international_records.all()
        ],
        'new_balance': result['new_balance'],
    })
