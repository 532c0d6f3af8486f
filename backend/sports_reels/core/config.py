"""
Configuration management.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Django settings
SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'django-insecure-change-this-in-production')
DEBUG = os.getenv('DEBUG', 'True') == 'True'
ALLOWED_HOSTS = [h.strip() for h in os.getenv('ALLOWED_HOSTS', '*').split(',') if h.strip()]

# Role selection without login (X-User-Role header)
DEMO_MODE = os.getenv('DEMO_MODE', 'True') == 'True'

# Database configuration
DB_NAME = os.getenv('DB_NAME', 'sports_reels')
DB_USER = os.getenv('DB_USER', 'postgres')
DB_PASSWORD = os.getenv('DB_PASSWORD', 'postgres')
DB_HOST = os.getenv('DB_HOST', 'db')
DB_PORT = os.getenv('DB_PORT', '5432')

# Object storage (MinIO / S3 compatible)
MINIO_ENDPOINT = os.getenv('MINIO_ENDPOINT', 'minio:9000')
MINIO_ACCESS_KEY = os.getenv('MINIO_ACCESS_KEY', 'minioadmin')
MINIO_SECRET_KEY = os.getenv('MINIO_SECRET_KEY', 'minioadmin')
MINIO_BUCKET = os.getenv('MINIO_BUCKET', 'sports-reels')
MINIO_SECURE = os.getenv('MINIO_SECURE', 'False') == 'True'
MINIO_REGION = os.getenv('MINIO_REGION', 'us-east-1')
UPLOAD_URL_EXPIRY_SECONDS = int(os.getenv('UPLOAD_URL_EXPIRY_SECONDS', '900'))
MAX_UPLOAD_SIZE_MB = int(os.getenv('MAX_UPLOAD_SIZE_MB', '500'))

# OpenAI configuration
OPENAI_API_KEY = os.getenv('OPENAI_API_KEY', '')
OPENAI_MODEL = os.getenv('OPENAI_MODEL', 'gpt-4o-mini')

# Langfuse configuration
LANGFUSE_ENABLED = os.getenv('LANGFUSE_ENABLED', 'false').lower() == 'true'
LANGFUSE_PUBLIC_KEY = os.getenv('LANGFUSE_PUBLIC_KEY', '')
LANGFUSE_SECRET_KEY = os.getenv('LANGFUSE_SECRET_KEY', '')
LANGFUSE_BASE_URL = os.getenv('LANGFUSE_BASE_URL', 'http://langfuse:3000')

# Portal client
PORTAL_API_URL = os.getenv('PORTAL_API_URL', 'http://localhost:8000')
PORTAL_STATE_DIR = os.getenv('PORTAL_STATE_DIR', str(Path.home() / '.sports-reels'))
