"""
Video endpoints and direct-upload URLs.
"""
from django.conf import settings
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
from sports_reels.api import serializers
from sports_reels.core.dependencies import require_user
from sports_reels.core.http import api_errors, parse_json_body, uuid_value
from sports_reels.documents.services.storage import sanitize_filename, storage_service
from sports_reels.services import video_service


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def request_upload_url(request):
    """
    Issue a presigned PUT URL for a direct upload to object storage.

    The returned object_path is what the client later sends as file_url
    when it registers the video.
    """
    user = require_user(request)
    data = parse_json_body(request)
    name = (data.get('name') or '').strip()
    content_type = (data.get('content_type') or '').strip()
    video_service.validate_upload_request(name, data.get('size'), content_type)

    upload_url, object_path = storage_service.create_upload_url(user.id, name)
    return JsonResponse({
        'upload_url': upload_url,
        'object_path': object_path,
        'file_name': sanitize_filename(name),
        'expires_in': settings.UPLOAD_URL_EXPIRY_SECONDS,
    })


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_errors
def videos(request):
    """List visible videos or register an uploaded one."""
    user = require_user(request)

    if request.method == 'GET':
        items = video_service.list_videos(user, player_id=uuid_value(request.GET, 'player_id'))
        return JsonResponse({'videos': [serializers.video(v) for v in items]})

    data = parse_json_body(request)
    video = video_service.create_video(user, data)
    return JsonResponse(serializers.video(video), status=201)


@csrf_exempt
@require_http_methods(["GET", "PUT"])
@api_errors
def video_detail(request, video_id):
    user = require_user(request)

    if request.method == 'GET':
        video = video_service.get_video(user, video_id)
        data = serializers.video(video)
        data['insights'] = [serializers.video_insight(i) for i in video.insights.all()]
        if video.file_url:
            data['download_url'] = storage_service.get_download_url(video.file_url)
        return JsonResponse(data)

    data = parse_json_body(request)
    video = video_service.update_video(user, video_id, data)
    return JsonResponse(serializers.video(video))


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def analyze_video(request, video_id):
    """Run AI analysis on a video; charges the video_analysis cost."""
    user = require_user(request)
    result = video_service.analyze(user, video_id)
    return JsonResponse({
        'insight': serializers.video_insight(result['insight']),
        'analysis': result['analysis'],
        'new_balance': result['new_balance'],
    }, status=201)
