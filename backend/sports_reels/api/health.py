"""
Health check endpoint.
"""
from django.core.cache import cache
from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods
from minio.error import S3Error
from urllib3.exceptions import HTTPError
from sports_reels.core.config import LANGFUSE_ENABLED
from sports_reels.core.logging import get_logger
from sports_reels.documents.services.storage import storage_service
from sports_reels.observability.tracing import get_langfuse_client

logger = get_logger(__name__)


@require_http_methods(["GET"])
def health_check(request):
    """
    Health check endpoint for monitoring.
    Returns status of all services.
    """
    services = {}
    overall_status = "healthy"

    # Check Database
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        services["database"] = {
            "status": "healthy",
            "message": "Database connection successful"
        }
    except DatabaseError as e:
        services["database"] = {
            "status": "unhealthy",
            "message": f"Database connection failed: {str(e)}"
        }
        overall_status = "unhealthy"

    # Check Cache (optional, won't fail if not configured)
    cache.set("health_check", "ok", 10)
    if cache.get("health_check") == "ok":
        services["cache"] = {"status": "healthy", "message": "Cache is operational"}
    else:
        services["cache"] = {"status": "degraded", "message": "Cache not available (optional service)"}

    # Check object storage
    try:
        if storage_service.check_health():
            services["storage"] = {"status": "healthy", "message": "Upload bucket reachable"}
        else:
            services["storage"] = {"status": "degraded", "message": "Upload bucket does not exist"}
            if overall_status == "healthy":
                overall_status = "degraded"
    except (S3Error, HTTPError, ValueError) as e:
        logger.warning(f"Object storage health check failed: {e}")
        services["storage"] = {"status": "unhealthy", "message": f"Object storage unavailable: {str(e)}"}
        if overall_status == "healthy":
            overall_status = "degraded"

    # Check Langfuse (optional)
    if LANGFUSE_ENABLED:
        if get_langfuse_client():
            services["langfuse"] = {"status": "healthy", "message": "Langfuse client initialized"}
        else:
            services["langfuse"] = {
                "status": "degraded",
                "message": "Langfuse enabled but client not available (check configuration)"
            }
    else:
        services["langfuse"] = {"status": "degraded", "message": "Langfuse is disabled"}

    return JsonResponse({
        "status": overall_status,
        "services": services,
    }, status=200 if overall_status != "unhealthy" else 503)
