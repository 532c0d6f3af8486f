"""
Object storage for uploaded videos and documents.

Clients upload directly to MinIO through short-lived presigned PUT URLs;
records only keep the object path.
"""
import re
import uuid
from datetime import timedelta
from typing import Optional, Tuple
from django.conf import settings
from minio import Minio
from minio.error import S3Error
from sports_reels.core.errors import ServiceUnavailableError
from sports_reels.core.logging import get_logger

logger = get_logger(__name__)

_UNSAFE_CHARS = re.compile(r'[^A-Za-z0-9._-]+')


def sanitize_filename(name: str) -> str:
    """Keep a recognisable, URL-safe file name."""
    base = name.replace('\\', '/').rsplit('/', 1)[-1].strip()
    cleaned = _UNSAFE_CHARS.sub('_', base).strip('._')
    return cleaned[:120] or 'upload'


class ObjectStorageService:
    """Presigned URL access to the upload bucket."""

    def __init__(self):
        self._client: Optional[Minio] = None

    @property
    def bucket(self) -> str:
        return settings.MINIO_BUCKET

    @property
    def client(self) -> Minio:
        if self._client is None:
            self._client = Minio(
                settings.MINIO_ENDPOINT,
                access_key=settings.MINIO_ACCESS_KEY,
                secret_key=settings.MINIO_SECRET_KEY,
                secure=settings.MINIO_SECURE,
                region=settings.MINIO_REGION,
            )
        return self._client

    def build_object_path(self, user_id: int, filename: str) -> str:
        """
        Object key for a new upload: uploads/{user_id}/{uuid}/{filename}.
        """
        return f"uploads/{user_id}/{uuid.uuid4().hex}/{sanitize_filename(filename)}"

    def create_upload_url(self, user_id: int, filename: str) -> Tuple[str, str]:
        """
        Create a presigned PUT URL for a direct upload.

        Args:
            user_id: Uploading user ID
            filename: Original file name

        Returns:
            (upload_url, object_path)

        Raises:
            ServiceUnavailableError: if the storage backend rejects the request
        """
        object_path = self.build_object_path(user_id, filename)
        try:
            upload_url = self.client.presigned_put_object(
                self.bucket,
                object_path,
                expires=timedelta(seconds=settings.UPLOAD_URL_EXPIRY_SECONDS),
            )
        except (S3Error, ValueError) as e:
            logger.error(f"Failed to presign upload for {object_path}: {e}", exc_info=True)
            raise ServiceUnavailableError("Object storage is not available")
        logger.info(f"Issued upload URL for {object_path}")
        return upload_url, object_path

    def get_download_url(self, object_path: str, expires_in: int = 3600) -> Optional[str]:
        """
        Presigned GET URL for an object path; None for external URLs or errors.
        """
        if not object_path or object_path.startswith(('http://', 'https://')):
            return object_path or None
        try:
            return self.client.presigned_get_object(
                self.bucket,
                object_path,
                expires=timedelta(seconds=expires_in),
            )
        except (S3Error, ValueError) as e:
            logger.warning(f"Failed to presign download for {object_path}: {e}")
            return None

    def ensure_bucket(self) -> bool:
        """
        Create the upload bucket if it does not exist.

        Returns:
            True if the bucket was created, False if it already existed
        """
        if self.client.bucket_exists(self.bucket):
            return False
        self.client.make_bucket(self.bucket)
        logger.info(f"Created bucket {self.bucket}")
        return True

    def check_health(self) -> bool:
        return self.client.bucket_exists(self.bucket)


# Singleton instance
storage_service = ObjectStorageService()
