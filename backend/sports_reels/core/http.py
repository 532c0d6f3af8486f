"""
Shared helpers for JSON views.
"""
import json
from functools import wraps
from typing import Any, Dict, Optional
from uuid import UUID
from django.core.paginator import EmptyPage, PageNotAnInteger, Paginator
from django.http import JsonResponse
from sports_reels.core.errors import APIError, ValidationError
from sports_reels.core.logging import get_logger

logger = get_logger(__name__)

PAGE_SIZE = 20


def parse_json_body(request) -> Dict[str, Any]:
    """
    Decode a JSON object request body.

    Raises:
        ValidationError: on malformed JSON or a non-object payload
    """
    try:
        data = json.loads(request.body or b'{}')
    except (ValueError, json.JSONDecodeError):
        raise ValidationError('Invalid JSON')
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def error_response(error: APIError) -> JsonResponse:
    return JsonResponse(error.to_dict(), status=error.status_code)


def paginate(queryset, request, serializer, page_size: int = PAGE_SIZE) -> Dict[str, Any]:
    """Paginate a queryset and serialize the requested page."""
    paginator = Paginator(queryset, page_size)
    try:
        page = paginator.page(request.GET.get('page', 1))
    except (PageNotAnInteger, EmptyPage):
        page = paginator.page(1)

    return {
        'results': [serializer(obj) for obj in page.object_list],
        'count': paginator.count,
        'page': page.number,
        'num_pages': paginator.num_pages,
        'has_next': page.has_next(),
        'has_previous': page.has_previous(),
    }


def int_param(request, name: str, default: int, maximum: Optional[int] = None) -> int:
    """Read a non-negative integer query parameter."""
    raw = request.GET.get(name)
    if raw in (None, ''):
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(f"'{name}' must be an integer")
    if value < 0:
        raise ValidationError(f"'{name}' must be non-negative")
    if maximum is not None:
        value = min(value, maximum)
    return value


def api_errors(view):
    """
    Map service errors raised by a JSON view to responses.

    APIError subclasses become their status code and payload; anything else
    is logged and returned as a 500.
    """
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except APIError as e:
            return error_response(e)
        except Exception as e:
            logger.error(f"Unhandled error in {view.__name__}: {e}", exc_info=True)
            return JsonResponse({'error': 'Internal server error'}, status=500)
    return wrapper


def uuid_value(data: Dict[str, Any], name: str) -> Optional[UUID]:
    """Optional UUID field of a JSON payload."""
    raw = data.get(name)
    if raw in (None, ''):
        return None
    try:
        return UUID(str(raw))
    except ValueError:
        raise ValidationError(f"'{name}' must be a UUID")
