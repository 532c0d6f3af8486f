#!/usr/bin/env python3
"""
Script to initialize the MinIO bucket used for direct video and document uploads.
"""

import os
import sys
import time

import django
from minio.error import S3Error
from urllib3.exceptions import HTTPError

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'sports_reels.settings')
django.setup()

from sports_reels.core.config import MINIO_ENDPOINT
from sports_reels.documents.services.storage import storage_service


def create_bucket(attempts=30, delay=2):
    """Create the upload bucket, retrying while MinIO starts up."""
    print(f"Waiting for MinIO at {MINIO_ENDPOINT}...")
    for attempt in range(1, attempts + 1):
        try:
            if storage_service.ensure_bucket():
                print(f"Created {storage_service.bucket} bucket")
            else:
                print(f"{storage_service.bucket} bucket already exists")
            return True
        except S3Error as exc:
            if exc.code in ("BucketAlreadyExists", "BucketAlreadyOwnedByYou"):
                print(f"{storage_service.bucket} bucket already exists")
                return True
            print(f"Could not create bucket: {exc}")
            return False
        except HTTPError as exc:
            print(f"MinIO not ready yet (attempt {attempt}/{attempts}): {exc}")
            time.sleep(delay)
    return False


if __name__ == "__main__":
    if not create_bucket():
        print("MinIO not ready, bucket not created")
        sys.exit(1)
